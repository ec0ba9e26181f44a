# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import json
import os
import sys

from .args import ConfigBackedParser, add_generic_args, add_filename_args, add_output_args
from .log import error, UpdateFormatError
from .patching import apply_update
from .utils import EXPLICIT_MISSING_FILE, read_json, write_json


_description = "Apply a MongoDB update document to a JSON document."


def main_apply(args):
    document_filename = args.document
    update_filename = args.update

    for fn in (document_filename, update_filename):
        if not os.path.exists(fn) and fn != EXPLICIT_MISSING_FILE:
            print("Missing file {}".format(fn))
            return 1

    before = read_json(document_filename, on_null={})
    update = read_json(update_filename, on_null={})

    try:
        after = apply_update(before, update)
    except (UpdateFormatError, TypeError) as e:
        error("%s", e)
        return 1

    if args.output:
        write_json(after, args.output)
    else:
        json.dump(after, sys.stdout, indent=2, sort_keys=True)
        print()

    return 0


def _build_arg_parser(prog=None):
    """Creates an argument parser for the apply command."""
    parser = ConfigBackedParser(
        prog=prog or 'updatebuilder apply',
        description=_description,
        add_help=True,
        )
    add_generic_args(parser)
    add_filename_args(parser, ["document", "update"])
    add_output_args(parser, pretty=False)
    return parser


def main(args=None):
    if args is None:
        args = sys.argv[1:]
    arguments = _build_arg_parser().parse_args(args)
    return main_apply(arguments)


if __name__ == "__main__":
    sys.exit(main())
