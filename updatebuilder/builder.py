# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Build MongoDB update documents from field-level edits.

An UpdateBuilder keeps two copies of a document: the reference copy,
known to match what the backend holds, and a working copy that every
mutation method writes to. Alongside the edits it accumulates the
update operators needed to bring the stored document up to date:

    b = UpdateBuilder.load({"_id": doc_id, "a": 1, "c": ["x"]})
    b.replace("a", 2)
    b.pull_values("c", "x")
    b.get_update()
    # {'$set': {'a': 2}, '$pull': {'c': {'$in': ['x']}}}

Builders created with UpdateBuilder.new record no operators, as the
whole document is inserted on the first persist.

See https://www.mongodb.com/docs/manual/reference/operator/update/
"""

from collections.abc import Mapping

from .config import BuilderOptions
from .log import debug
from .update_format import (
    UpdateOp, EACH, IN, Missing, empty_update, compact_update,
    op_each, op_in, is_in_payload,
)
from .utils import (
    new_id, is_valid_id, split_path, has_path, get_path, set_path, unset_path,
    deep_equal, deep_clone, contains_equal, unique_values, is_match,
)


__all__ = ["UpdateBuilder", "InvalidDocumentError", "PullConflictError", "ID_FIELD"]


ID_FIELD = "_id"


class InvalidDocumentError(ValueError):
    pass


class PullConflictError(ValueError):
    pass


class UpdateBuilder(object):
    """Track edits to one document and compile them to update operators.

    Not safe for concurrent use: mutations run to completion and
    at most one persist should be in flight per builder.
    """

    # Internal state that may be reassigned through attribute access
    _STATE_ATTRS = ('_is_new', '_ref', '_work', '_ops')

    @classmethod
    def new(cls, base=None, **options):
        """Start a builder for a document not yet stored in the backend.

        An _id is generated when base has none.
        """
        base = {} if base is None else base
        if not isinstance(base, Mapping):
            raise InvalidDocumentError(
                "document must be a mapping, got %s" % type(base).__name__)
        base = dict(base)
        if base.get(ID_FIELD) is None:
            base[ID_FIELD] = new_id()
        return cls(base, is_new=True, options=BuilderOptions.from_kwargs(options))

    @classmethod
    def load(cls, base, **options):
        "Start a builder for a document already stored in the backend."
        return cls(base, is_new=False, options=BuilderOptions.from_kwargs(options))

    def __init__(self, base, is_new, options):
        if not isinstance(base, Mapping):
            raise InvalidDocumentError(
                "document must be a mapping, got %s" % type(base).__name__)
        if ID_FIELD not in base:
            raise InvalidDocumentError("%s field required (and required to be a string)" % ID_FIELD)
        if not is_valid_id(base[ID_FIELD]):
            raise InvalidDocumentError(
                "%s must be a version 4 UUID string, got %r" % (ID_FIELD, base[ID_FIELD]))
        self._ref = deep_clone(dict(base))
        self._work = deep_clone(dict(base))
        self._ops = empty_update()
        self._is_new = is_new
        object.__setattr__(self, '_use_version_key', options.use_version_key)

    # Attribute access

    def __getattr__(self, name):
        # Only reached when normal lookup fails, so declared members win
        if name.startswith('_'):
            raise AttributeError(name)
        work = self.__dict__.get('_work', {})
        if name in work:
            return work[name]
        raise AttributeError(
            "%r object has no attribute or document field %r" % (type(self).__name__, name))

    def __setattr__(self, name, value):
        if name not in self._STATE_ATTRS:
            raise TypeError(
                "cannot assign %r on %s; use the mutation methods" % (name, type(self).__name__))
        object.__setattr__(self, name, value)

    def __delattr__(self, name):
        raise TypeError("cannot delete %r on %s" % (name, type(self).__name__))

    def __repr__(self):
        return "<%s %s%s>" % (type(self).__name__, self.id, " (new)" if self._is_new else "")

    @property
    def id(self):
        return self._ref[ID_FIELD]

    @property
    def is_new(self):
        return self._is_new

    @property
    def use_version_key(self):
        return self._use_version_key

    def get(self, path, default=None):
        "Read the working copy value at a dot separated path."
        return get_path(self._work, path, default)

    # Mutations

    def _check_writable(self, path):
        if split_path(path)[0] == ID_FIELD:
            raise InvalidDocumentError("%s cannot be modified, got path %r" % (ID_FIELD, path))

    def replace(self, path, value):
        "Set path to value, see $set."
        self._check_writable(path)
        if has_path(self._work, path) and deep_equal(get_path(self._work, path), value):
            return
        set_path(self._work, path, deep_clone(value))
        if self._is_new:
            return
        self._ops[UpdateOp.SET][path] = deep_clone(value)

    def remove(self, path):
        "Remove path, see $unset."
        self._check_writable(path)
        if not unset_path(self._work, path):
            return
        if self._is_new:
            return
        self._ops[UpdateOp.UNSET][path] = True

    def _array_at(self, path, action):
        """Return the working array at path, or Missing if absent.

        Raises TypeError if the snapshot (or, for new documents, the
        working copy) holds a non-array value at path.
        """
        ref = get_path(self._work if self._is_new else self._ref, path, Missing)
        if ref is not Missing and not isinstance(ref, list):
            raise TypeError("Can't %s existing value of type %s at %r" % (
                action, type(ref).__name__, path))
        working = get_path(self._work, path, Missing)
        if working is not Missing and not isinstance(working, list):
            raise TypeError("Can't %s existing value of type %s at %r" % (
                action, type(working).__name__, path))
        return working

    def _merge_each(self, op, path, values):
        entries = self._ops[op]
        previous = entries[path][EACH] if path in entries else []
        entries[path] = op_each(previous + deep_clone(values))

    def append(self, path, *values):
        """Append values to the array at path, see $push with $each.

        Repeated calls on the same path extend one $each list.
        """
        self._check_writable(path)
        working = self._array_at(path, "push onto")
        values = list(values)
        if working is Missing:
            set_path(self._work, path, deep_clone(values))
        else:
            working.extend(deep_clone(values))
        if self._is_new:
            return
        self._merge_each(UpdateOp.PUSH, path, values)

    def set_insert(self, path, *values):
        """Add values not already in the array at path, see $addToSet.

        Values deep equal to an element, or to an earlier value in the
        same call, are dropped. Only the values actually added are
        recorded.
        """
        self._check_writable(path)
        working = self._array_at(path, "add to")
        added = unique_values(values, () if working is Missing else working)
        if working is Missing:
            set_path(self._work, path, deep_clone(added))
        else:
            working.extend(deep_clone(added))
        if self._is_new or not added:
            return
        self._merge_each(UpdateOp.ADD_TO_SET, path, added)

    def pull_values(self, path, *values):
        "Remove array elements deep equal to any of values, see $pull with $in."
        self._check_writable(path)
        working = self._array_at(path, "pull from")
        pending = self._ops[UpdateOp.PULL].get(path)
        if pending is not None and not is_in_payload(pending):
            raise PullConflictError(
                "Cannot use pull_values after pull_match on %r. "
                "You need to apply two update ops" % (path,))
        if working is Missing or not working:
            # Pulling from an absent or empty array is a no-op
            return
        matching = [x for x in working if contains_equal(values, x)]
        if not matching:
            return
        set_path(self._work, path, [x for x in working if not contains_equal(matching, x)])
        if self._is_new:
            return
        previous = pending[IN] if pending is not None else []
        self._ops[UpdateOp.PULL][path] = op_in(
            previous + deep_clone(unique_values(matching, previous)))

    def pull_match(self, path, matcher):
        """Remove array elements matching every item of matcher, see $pull.

        A path holds at most one pending $pull, so this cannot follow
        another pull on the same path before the next persist.
        """
        if not isinstance(matcher, Mapping):
            raise TypeError("matcher must be a mapping, got %s" % type(matcher).__name__)
        self._check_writable(path)
        working = self._array_at(path, "pull from")
        if path in self._ops[UpdateOp.PULL]:
            raise PullConflictError(
                "Cannot use pull_match after another pull on %r. "
                "You need to apply two update ops" % (path,))
        if working is Missing or not working:
            return
        set_path(self._work, path, [x for x in working if not is_match(x, matcher)])
        if self._is_new:
            return
        self._ops[UpdateOp.PULL][path] = deep_clone(dict(matcher))

    # Compiled views

    def get_value(self):
        return deep_clone(self._work)

    def get_update(self):
        "The update document for the pending operations, empty operators omitted."
        return compact_update(self._ops)

    def modified_paths(self):
        "All pending payloads keyed by path, later operators taking precedence."
        paths = {}
        for op in UpdateOp.ALL:
            paths.update(self._ops[op])
        return deep_clone(paths)

    def is_modified(self):
        return self._is_new or bool(self.get_update())

    # Persistence

    async def persist(self, backend):
        """Store pending changes through backend.

        New documents are inserted whole, others are updated by _id
        with the compiled operators. Nothing is resynchronized if the
        backend raises.
        """
        if self._is_new:
            debug("Inserting new document %s", self.id)
            await backend.insert_new(self.get_value())
            self._is_new = False
        else:
            update = self.get_update()
            if update:
                debug("Updating document %s with %s", self.id, sorted(update))
                await backend.update_by_id(self.id, update)
        self.sync()

    def sync(self):
        "Accept the working copy as persisted and clear pending operations."
        self._ops = empty_update()
        self._ref = deep_clone(self._work)

    def rollback(self):
        "Discard pending operations and restore the working copy."
        self._ops = empty_update()
        self._work = deep_clone(self._ref)
