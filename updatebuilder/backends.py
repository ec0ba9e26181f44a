# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Persistence backends accepted by UpdateBuilder.persist.

A backend provides two coroutines, ``insert_new(document)`` and
``update_by_id(id, update)``, and raises on failure. Returning
normally is taken as success.
"""

from abc import ABC, abstractmethod
import copy

from .log import debug
from .patching import apply_update


__all__ = ["Backend", "CollectionBackend", "MemoryBackend", "PersistenceError"]


class PersistenceError(RuntimeError):
    pass


class Backend(ABC):

    @abstractmethod
    async def insert_new(self, document):
        "Store a new document, which holds its _id."

    @abstractmethod
    async def update_by_id(self, id, update):
        "Apply an update document to the stored document with the given _id."


class CollectionBackend(Backend):
    """Backend storing documents in an async MongoDB collection.

    Any object with awaitable ``insert_one(document)`` and
    ``update_one(filter, update)`` methods returning pymongo style
    results will do, such as a motor or pymongo AsyncCollection.
    """

    def __init__(self, collection):
        self.collection = collection

    async def insert_new(self, document):
        result = await self.collection.insert_one(document)
        if not result.acknowledged:
            raise PersistenceError("Insert of %s was not acknowledged" % document.get("_id"))
        return result

    async def update_by_id(self, id, update):
        result = await self.collection.update_one({"_id": id}, update)
        if not result.acknowledged:
            raise PersistenceError("Update of %s was not acknowledged" % id)
        if result.matched_count == 0:
            raise PersistenceError("No document with _id %s to update" % id)
        return result


class MemoryBackend(Backend):
    """Backend keeping documents in a dict, keyed by _id.

    Updates are applied with apply_update, which rejects the malformed
    and conflicting updates a MongoDB server would reject.
    """

    def __init__(self):
        self.documents = {}

    async def insert_new(self, document):
        id = document["_id"]
        if id in self.documents:
            raise PersistenceError("Duplicate _id %s" % id)
        self.documents[id] = copy.deepcopy(document)
        debug("Stored document %s", id)

    async def update_by_id(self, id, update):
        if id not in self.documents:
            raise PersistenceError("No document with _id %s to update" % id)
        self.documents[id] = apply_update(self.documents[id], update)
        debug("Updated document %s", id)
