# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from ._version import __version__

from .builder import UpdateBuilder, InvalidDocumentError, PullConflictError
from .backends import Backend, CollectionBackend, MemoryBackend, PersistenceError
from .log import UpdateFormatError
from .patching import apply_update
from .update_format import UpdateOp, validate_update, is_valid_update


__all__ = [
    "__version__",
    "UpdateBuilder", "InvalidDocumentError", "PullConflictError",
    "Backend", "CollectionBackend", "MemoryBackend", "PersistenceError",
    "UpdateFormatError", "UpdateOp",
    "apply_update", "validate_update", "is_valid_update",
    ]
