# -*- coding: utf-8 -*-

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import io
import json
import logging
import os
import uuid

from jsonschema import Draft4Validator as Validator
from pytest import fixture

from updatebuilder import UpdateBuilder, MemoryBackend
from updatebuilder.config import _config_cache


pjoin = os.path.join

schema_dir = os.path.abspath(pjoin(os.path.dirname(__file__), ".."))


@fixture
def doc_id():
    return str(uuid.uuid4())


@fixture
def test_doc(doc_id):
    return {"_id": doc_id, "a": 1, "b": "2", "c": ["x"]}


@fixture
def loaded(test_doc):
    """A builder for test_doc, as if read back from the backend."""
    return UpdateBuilder.load(test_doc)


@fixture
def backend():
    return MemoryBackend()


@fixture
def stored(test_doc, backend):
    """A builder for test_doc, with test_doc already in backend."""
    backend.documents[test_doc["_id"]] = json.loads(json.dumps(test_doc))
    return UpdateBuilder.load(test_doc)


@fixture
def reset_log():
    # clear root logger handlers before test and reset afterwards
    handlers = list(logging.getLogger().handlers)
    logging.getLogger().handlers[:] = []
    yield
    logging.getLogger().handlers[:] = handlers


@fixture
def reset_config():
    _config_cache.clear()
    yield
    _config_cache.clear()


@fixture
def json_schema_update(request):
    schema_path = os.path.join(schema_dir, 'update_format.schema.json')
    with io.open(schema_path, encoding="utf8") as f:
        schema_json = json.load(f)
    return schema_json


@fixture
def update_validator(request, json_schema_update):
    return Validator(json_schema_update)
