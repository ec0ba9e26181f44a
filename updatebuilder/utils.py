# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import copy
import io
import json
import os
import re
import uuid
from collections.abc import Mapping

from .update_format import Missing


if os.name == 'nt':
    EXPLICIT_MISSING_FILE = 'nul'
else:
    EXPLICIT_MISSING_FILE = '/dev/null'


def read_json(f, on_null):
    """Read and return json from filename

    Parameters:
        f:  The filename to read from or null filename
            ("/dev/null" on *nix, "nul" on Windows).
        on_null: What to return when filename null
    """
    if f == EXPLICIT_MISSING_FILE:
        return copy.deepcopy(on_null)
    with io.open(f, encoding='utf-8') as fo:
        return json.load(fo)


def write_json(obj, f):
    "Write obj as indented json to filename f."
    with io.open(f, 'w', encoding='utf-8') as fo:
        json.dump(obj, fo, indent=2, sort_keys=True)
        fo.write('\n')


r_uuid4 = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE)

r_is_int = re.compile(r"^\d+$")


def new_id():
    "Generate a new document identity, a version 4 UUID string."
    return str(uuid.uuid4())


def is_valid_id(value):
    "Whether value is a version 4 UUID string."
    return isinstance(value, str) and r_uuid4.match(value) is not None


def split_path(path):
    "Split a path on the form 'foo.bar.0' into ['foo', 'bar', '0']."
    if not isinstance(path, str):
        raise TypeError("field path must be a string, got %r" % (path,))
    parts = path.split(".")
    if "" in parts:
        raise ValueError("invalid field path: %r" % (path,))
    return parts


def _child(obj, key):
    """Look up a single path segment, returning Missing if absent.

    Lists are indexed by non-negative integer segments only.
    """
    if isinstance(obj, Mapping):
        return obj.get(key, Missing)
    if isinstance(obj, list) and r_is_int.match(key):
        index = int(key)
        if index < len(obj):
            return obj[index]
    return Missing


def _resolve(obj, parts):
    for key in parts:
        obj = _child(obj, key)
        if obj is Missing:
            break
    return obj


def has_path(obj, path):
    return _resolve(obj, split_path(path)) is not Missing


def get_path(obj, path, default=None):
    value = _resolve(obj, split_path(path))
    return default if value is Missing else value


def _assign(container, key, value):
    if isinstance(container, list):
        index = int(key)
        if index >= len(container):
            container.extend([None] * (index + 1 - len(container)))
        container[index] = value
    else:
        container[key] = value


def set_path(obj, path, value):
    """Set value at path, creating missing intermediate containers.

    Intermediates that are absent or not containers are replaced by dicts.
    Lists are padded with None up to the index being set.
    """
    parts = split_path(path)
    target = obj
    for key in parts[:-1]:
        child = _child(target, key)
        if not isinstance(child, (dict, list)):
            if isinstance(target, list) and not r_is_int.match(key):
                raise TypeError("cannot create field %r in array at %r" % (key, path))
            child = {}
            _assign(target, key, child)
        target = child
    key = parts[-1]
    if isinstance(target, list) and not r_is_int.match(key):
        raise TypeError("cannot create field %r in array at %r" % (key, path))
    _assign(target, key, value)


def unset_path(obj, path):
    """Remove the value at path.

    Returns whether anything was removed. Array slots are nulled
    rather than deleted, so later indices are not shifted.
    """
    parts = split_path(path)
    parent = _resolve(obj, parts[:-1])
    key = parts[-1]
    if _child(parent, key) is Missing:
        return False
    if isinstance(parent, list):
        parent[int(key)] = None
    else:
        del parent[key]
    return True


def deep_equal(a, b):
    """Compare two json-like values structurally.

    Unlike ==, booleans are never equal to numbers.
    """
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    if isinstance(a, Mapping) and isinstance(b, Mapping):
        if a.keys() != b.keys():
            return False
        return all(deep_equal(a[k], b[k]) for k in a)
    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        if len(a) != len(b):
            return False
        return all(deep_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, (Mapping, list, tuple)) or isinstance(b, (Mapping, list, tuple)):
        return False
    return a == b


def contains_equal(values, x):
    "Whether any of values is deep_equal to x."
    return any(deep_equal(x, y) for y in values)


def unique_values(values, existing=()):
    "Values not deep_equal to an element of existing nor to an earlier value."
    unique = []
    for v in values:
        if not contains_equal(existing, v) and not contains_equal(unique, v):
            unique.append(v)
    return unique


def is_match(obj, matcher):
    "Whether obj is a mapping holding every item of matcher with a deep_equal value."
    if not isinstance(obj, Mapping):
        return False
    return all(k in obj and deep_equal(obj[k], v) for k, v in matcher.items())


deep_clone = copy.deepcopy
