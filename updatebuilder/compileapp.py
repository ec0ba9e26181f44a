# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import json
import os
import sys

from traitlets import TraitError

from .args import (
    ConfigBackedParser, add_generic_args, add_filename_args,
    add_builder_args, add_output_args,
)
from .builder import UpdateBuilder
from .log import error, info
from .prettyprint import pretty_print_update, PrettyPrintConfig
from .utils import EXPLICIT_MISSING_FILE, read_json, write_json


_description = ("Replay field-level mutations on a JSON document and print "
                "the MongoDB update document they compile to.")


# Builder methods that may be named in a mutations file
MUTATIONS = ("replace", "remove", "append", "set_insert", "pull_values", "pull_match")


def apply_mutations(builder, mutations):
    """Call builder mutation methods as listed in mutations.

    Each mutation is a list on the form [method, path, *args].
    """
    if not isinstance(mutations, list):
        raise ValueError("mutations must be a JSON list, got %s" % type(mutations).__name__)
    for i, m in enumerate(mutations):
        if not (isinstance(m, list) and len(m) >= 2 and m[0] in MUTATIONS):
            raise ValueError(
                "mutation %d must be on the form [method, path, *args] with method "
                "one of %s, got %r" % (i, ", ".join(MUTATIONS), m))
        method, path, args = m[0], m[1], m[2:]
        getattr(builder, method)(path, *args)


def main_compile(args):
    document_filename = args.document
    mutations_filename = args.mutations

    for fn in (document_filename, mutations_filename):
        if not os.path.exists(fn) and fn != EXPLICIT_MISSING_FILE:
            print("Missing file {}".format(fn))
            return 1

    document = read_json(document_filename, on_null={})
    mutations = read_json(mutations_filename, on_null=[])

    options = dict(use_version_key=args.use_version_key)
    try:
        if args.new or document_filename == EXPLICIT_MISSING_FILE:
            builder = UpdateBuilder.new(document, **options)
        else:
            builder = UpdateBuilder.load(document, **options)
        apply_mutations(builder, mutations)
    except (TypeError, ValueError, TraitError) as e:
        error("%s", e)
        return 1

    update = builder.get_update()
    info("Compiled %d operator(s) for document %s", len(update), builder.id)

    if args.output:
        write_json(update, args.output)
    elif args.json:
        json.dump(update, sys.stdout, indent=2, sort_keys=True)
        print()
    elif builder.is_new:
        print("New document {}, nothing to update:".format(builder.id))
        json.dump(builder.get_value(), sys.stdout, indent=2, sort_keys=True)
        print()
    else:
        config = PrettyPrintConfig(out=sys.stdout, use_color=args.color)
        pretty_print_update(update, base=document, config=config)

    return 0


def _build_arg_parser(prog=None):
    """Creates an argument parser for the compile command."""
    parser = ConfigBackedParser(
        prog=prog or 'updatebuilder compile',
        description=_description,
        add_help=True,
        )
    add_generic_args(parser)
    add_filename_args(parser, ["document", "mutations"])
    add_builder_args(parser)
    add_output_args(parser)
    return parser


def main(args=None):
    if args is None:
        args = sys.argv[1:]
    arguments = _build_arg_parser().parse_args(args)
    return main_compile(arguments)


if __name__ == "__main__":
    sys.exit(main())
