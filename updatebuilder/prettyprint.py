# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from collections import namedtuple
import pprint
import sys

import colorama

from .log import UpdateFormatError
from .update_format import UpdateOp, EACH, IN, Missing, is_in_payload
from .utils import get_path


# Line width passed to pprint
MAXWIDTH = 78


ColoredConstants = namedtuple('ColoredConstants', (
    'REMOVE',
    'ADD',
    'INFO',
    'RESET',
))


col_const = {
    True: ColoredConstants(
        REMOVE = '{color}-  '.format(color=colorama.Fore.RED),
        ADD    = '{color}+  '.format(color=colorama.Fore.GREEN),
        INFO   = '{color}## '.format(color=colorama.Fore.BLUE + colorama.Style.BRIGHT),
        RESET  = colorama.Style.RESET_ALL,
    ),

    False: ColoredConstants(
        REMOVE = '-  ',
        ADD    = '+  ',
        INFO   = '## ',
        RESET  = '',
    )
}


class PrettyPrintConfig:
    def __init__(self, out=sys.stdout, use_color=True):
        self.out = out
        self.use_color = use_color

    @property
    def REMOVE(self):
        return col_const[self.use_color].REMOVE

    @property
    def ADD(self):
        return col_const[self.use_color].ADD

    @property
    def INFO(self):
        return col_const[self.use_color].INFO

    @property
    def RESET(self):
        return col_const[self.use_color].RESET


DefaultConfig = PrettyPrintConfig()


def format_value(v):
    "Format simple value for printing."
    return pprint.pformat(v, width=MAXWIDTH)


def pretty_print_value(value, prefix, config=DefaultConfig):
    """Print a possibly complex value with all lines prefixed."""
    for line in format_value(value).splitlines():
        config.out.write("%s%s%s\n" % (prefix, line, config.RESET))


def pretty_print_values(values, prefix, config=DefaultConfig):
    for value in values:
        pretty_print_value(value, prefix, config)


def pretty_print_update_action(msg, path, config):
    config.out.write("%s%s %s:%s\n" % (config.INFO, msg, path, config.RESET))


def pretty_print_update_entry(op, path, payload, base=None, config=DefaultConfig):
    old = Missing if base is None else get_path(base, path, Missing)

    if op == UpdateOp.SET:
        if old is Missing:
            pretty_print_update_action("added", path, config)
        else:
            pretty_print_update_action("replaced", path, config)
            pretty_print_value(old, config.REMOVE, config)
        pretty_print_value(payload, config.ADD, config)

    elif op == UpdateOp.UNSET:
        pretty_print_update_action("deleted", path, config)
        if old is not Missing:
            pretty_print_value(old, config.REMOVE, config)

    elif op == UpdateOp.PUSH:
        pretty_print_update_action("appended to", path, config)
        pretty_print_values(payload[EACH], config.ADD, config)

    elif op == UpdateOp.ADD_TO_SET:
        pretty_print_update_action("added to set", path, config)
        pretty_print_values(payload[EACH], config.ADD, config)

    elif op == UpdateOp.PULL:
        if is_in_payload(payload):
            pretty_print_update_action("pulled from", path, config)
            pretty_print_values(payload[IN], config.REMOVE, config)
        else:
            pretty_print_update_action("pulled matching from", path, config)
            pretty_print_value(payload, config.REMOVE, config)

    else:
        raise UpdateFormatError("Invalid update operator {}.".format(op))


def pretty_print_update(update, base=None, config=DefaultConfig):
    """Pretty-print an update document, one block per field path.

    If base is given, replaced and deleted values are looked up
    there and shown as removals.
    """
    for op in UpdateOp.ALL:
        for path, payload in update.get(op, {}).items():
            pretty_print_update_entry(op, path, payload, base, config)
