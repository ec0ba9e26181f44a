# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import copy

from .log import UpdateFormatError


# Sentinel to allow None as a value
Missing = object()


class UpdateOp:
    "Collection of valid top-level keys in an update document."
    SET = "$set"
    UNSET = "$unset"
    PUSH = "$push"
    PULL = "$pull"
    ADD_TO_SET = "$addToSet"

    # Canonical order, also the merge order of modified paths
    ALL = (SET, UNSET, PUSH, PULL, ADD_TO_SET)

    # Operators whose payload extends an array
    ARRAY_ADD = (PUSH, ADD_TO_SET)


# Payload modifiers
EACH = "$each"
IN = "$in"


def empty_update():
    "Create a fresh pending operation set with every operator empty."
    return {op: {} for op in UpdateOp.ALL}


def op_each(values):
    "Create a payload adding each of values to an array."
    return {EACH: list(values)}

def op_in(values):
    "Create a payload removing array elements equal to any of values."
    return {IN: list(values)}


def is_in_payload(payload):
    "Whether a $pull payload is a value list rather than a matcher shape."
    return isinstance(payload, dict) and IN in payload


def compact_update(ops):
    """Return a deep copy of ops with the empty operators dropped.

    MongoDB rejects degenerate operators such as ``{"$set": {}}``,
    so an operator with no recorded paths is never emitted.
    """
    return copy.deepcopy({op: entries for op, entries in ops.items() if entries})


def is_valid_update(update):
    """Checks whether an update document is well formed.

    Returns a boolean indicating the well-formedness of the update.
    """
    try:
        validate_update(update)
    except UpdateFormatError:
        return False
    return True


def validate_update(update):
    """Check whether an update document is well formed.

    Raises an UpdateFormatError if not well formed.
    """
    if not isinstance(update, dict):
        raise UpdateFormatError("Update must be a dict, not {}.".format(type(update).__name__))
    for op, entries in update.items():
        if op not in UpdateOp.ALL:
            raise UpdateFormatError("Unknown update operator '{}'.".format(op))
        if not isinstance(entries, dict) or not entries:
            raise UpdateFormatError(
                "Operator '{}' expects a non-empty dict of paths.".format(op))
        for path, payload in entries.items():
            validate_update_entry(op, path, payload)
    validate_update_paths(update)


def validate_update_entry(op, path, payload):
    """Check that a single operator entry is well formed.

    Raises an UpdateFormatError if not well formed.
    """
    if not isinstance(path, str) or not path or "" in path.split("."):
        raise UpdateFormatError("Invalid field path {!r} in '{}'.".format(path, op))

    if op == UpdateOp.SET:
        pass  # any value
    elif op == UpdateOp.UNSET:
        if payload is not True:
            raise UpdateFormatError(
                "$unset expects true as marker for '{}', not {!r}.".format(path, payload))
    elif op in UpdateOp.ARRAY_ADD:
        if not isinstance(payload, dict) or set(payload) != {EACH}:
            raise UpdateFormatError(
                "{} expects a {{'$each': [...]}} payload for '{}'.".format(op, path))
        if not isinstance(payload[EACH], list):
            raise UpdateFormatError(
                "{} expects a list of values for '{}', not {!r}.".format(op, path, payload[EACH]))
    elif op == UpdateOp.PULL:
        if not isinstance(payload, dict):
            raise UpdateFormatError(
                "$pull expects a value list or a matcher dict for '{}'.".format(path))
        if IN in payload and not isinstance(payload[IN], list):
            raise UpdateFormatError(
                "$pull expects a list of values for '{}', not {!r}.".format(path, payload[IN]))


def _paths_overlap(a, b):
    return a == b or a.startswith(b + ".") or b.startswith(a + ".")


def validate_update_paths(update):
    """Check that no two entries of an update touch the same field.

    A path conflicts with an equal path under another operator and
    with any path below or above it, e.g. 'a' and 'a.b', as in MongoDB.

    Raises an UpdateFormatError on the first conflict found.
    """
    seen = []
    for op, entries in update.items():
        for path in entries:
            for other_op, other in seen:
                if _paths_overlap(path, other):
                    raise UpdateFormatError(
                        "Updating the path '{}' with {} would create a conflict "
                        "at '{}' ({}).".format(path, op, other, other_op))
            seen.append((op, path))
