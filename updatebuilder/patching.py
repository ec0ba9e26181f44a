# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import copy

from .log import UpdateFormatError
from .update_format import UpdateOp, EACH, IN, Missing, is_in_payload, validate_update
from .utils import get_path, set_path, unset_path, contains_equal, unique_values, is_match


__all__ = ["apply_update"]


def _array_at(obj, path, op):
    value = get_path(obj, path, Missing)
    if value is Missing:
        return None
    if not isinstance(value, list):
        raise UpdateFormatError(
            "Cannot apply {} to a non-array value at '{}'.".format(op, path))
    return value


def apply_set(obj, entries):
    for path, value in entries.items():
        set_path(obj, path, copy.deepcopy(value))


def apply_unset(obj, entries):
    for path in entries:
        unset_path(obj, path)


def apply_push(obj, entries):
    for path, payload in entries.items():
        values = copy.deepcopy(payload[EACH])
        array = _array_at(obj, path, UpdateOp.PUSH)
        if array is None:
            set_path(obj, path, values)
        else:
            array.extend(values)


def apply_add_to_set(obj, entries):
    for path, payload in entries.items():
        array = _array_at(obj, path, UpdateOp.ADD_TO_SET)
        added = copy.deepcopy(unique_values(payload[EACH], array or ()))
        if array is None:
            set_path(obj, path, added)
        else:
            array.extend(added)


def apply_pull(obj, entries):
    for path, payload in entries.items():
        array = _array_at(obj, path, UpdateOp.PULL)
        if not array:
            continue
        if is_in_payload(payload):
            kept = [x for x in array if not contains_equal(payload[IN], x)]
        else:
            kept = [x for x in array if not is_match(x, payload)]
        set_path(obj, path, kept)


_appliers = {
    UpdateOp.SET: apply_set,
    UpdateOp.UNSET: apply_unset,
    UpdateOp.PUSH: apply_push,
    UpdateOp.PULL: apply_pull,
    UpdateOp.ADD_TO_SET: apply_add_to_set,
}


def apply_update(doc, update):
    """Produce an updated copy of doc with the given update document applied.

    Operators are applied in canonical order ($set, $unset, $push,
    $pull, $addToSet), each to its paths in insertion order. The input
    document is left untouched.

    Array operators on a path holding a non-array value raise
    UpdateFormatError, as does a malformed update document.
    """
    validate_update(update)
    newdoc = copy.deepcopy(doc)
    for op in UpdateOp.ALL:
        if op in update:
            _appliers[op](newdoc, update[op])
    return newdoc
