# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import argparse
import json
import logging
import sys

from ._version import __version__
from .config import get_defaults_for_argparse, build_config, entrypoint_configurables
from .log import init_logging, set_updatebuilder_log_level


class ConfigBackedParser(argparse.ArgumentParser):
    """Argument parser taking its defaults from updatebuilder config files.

    The config section is picked by the last word of the program name,
    e.g. 'updatebuilder compile' uses the 'compile' entrypoint.
    """

    @property
    def entrypoint(self):
        return self.prog.split(' ')[-1]

    def parse_known_args(self, args=None, namespace=None):
        try:
            defs = get_defaults_for_argparse(self.entrypoint)
            self.set_defaults(**defs)
        except ValueError:
            pass
        return super(ConfigBackedParser, self).parse_known_args(args=args, namespace=namespace)


class LogLevelAction(argparse.Action):
    def __init__(self, option_strings, dest, default=None, **kwargs):
        # __call__ is not called if option not given:
        level = getattr(logging, default or 'INFO')
        init_logging(level=level)
        set_updatebuilder_log_level(level)
        super(LogLevelAction, self).__init__(option_strings, dest, default=default, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        setattr(namespace, self.dest, values)
        level = getattr(logging, values)
        set_updatebuilder_log_level(level, True)


class ConfigHelpAction(argparse.Action):
    def __init__(self, option_strings, dest, help=None):
        super(ConfigHelpAction, self).__init__(
            option_strings, dest, nargs=0, help=help)

    def __call__(self, parser, namespace, values, option_string=None):
        entrypoint = parser.entrypoint
        header = entrypoint_configurables[entrypoint].__name__
        config = build_config(entrypoint, True)
        json.dump({header: config}, sys.stderr, indent=2, sort_keys=True)
        sys.stderr.write("\n")
        sys.exit(1)


def add_generic_args(parser):
    """Adds a set of arguments common to all updatebuilder commands.
    """
    parser.add_argument(
        '--version',
        action="version",
        version="%(prog)s " + __version__)
    parser.add_argument(
        '--config',
        help="list the valid config keys and their current effective values",
        action=ConfigHelpAction,
    )
    parser.add_argument(
        '--log-level',
        default='INFO',
        choices=('DEBUG', 'INFO', 'WARN', 'ERROR', 'CRITICAL'),
        help="set the log level by name.",
        action=LogLevelAction,
    )


filename_help = {
    "document": "The JSON document to start from.",
    "mutations": "A JSON list of mutations, each on the form [method, path, *args].",
    "update": "A JSON update document, as printed by 'updatebuilder compile --json'.",
}


def add_filename_args(parser, names):
    """Add positional filename arguments.

    Helps getting consistent doc strings.
    """
    for name in names:
        parser.add_argument(name, help=filename_help[name])


def add_builder_args(parser):
    """Adds arguments controlling how the builder is created.
    """
    parser.add_argument(
        '--new',
        action="store_true",
        default=False,
        help="treat the document as not yet stored: it may lack an _id "
             "and no update operators are recorded.")
    parser.add_argument(
        '--use-version-key',
        dest='use_version_key',
        action="store_true",
        default=False,
        help="reserve a version key for optimistic concurrency control.")


def add_output_args(parser, pretty=True):
    """Adds arguments controlling where and how results are written.
    """
    parser.add_argument(
        '-o', '--output',
        default=None,
        help="if supplied, the result is written as JSON to this file. "
             "Otherwise it is printed to the terminal.")
    if pretty:
        parser.add_argument(
            '--json',
            action="store_true",
            default=False,
            help="print JSON instead of a pretty-printed summary.")
        parser.add_argument(
            '--no-color',
            dest='color',
            action="store_false",
            default=True,
            help="prevent use of ANSI color code escapes for text output")
