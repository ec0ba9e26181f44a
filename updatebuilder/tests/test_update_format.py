# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from jsonschema import Draft4Validator as Validator
import pytest

from updatebuilder import UpdateBuilder, UpdateFormatError
from updatebuilder.update_format import (
    UpdateOp, empty_update, compact_update, op_each, op_in,
    validate_update, is_valid_update,
)


def test_check_schema(json_schema_update):
    Validator.check_schema(json_schema_update)


def test_empty_update_is_fresh():
    a = empty_update()
    b = empty_update()
    a[UpdateOp.SET]["x"] = 1
    assert b[UpdateOp.SET] == {}
    assert list(a) == list(UpdateOp.ALL)


def test_compact_update():
    ops = empty_update()
    ops[UpdateOp.PUSH]["l"] = op_each([1])
    compact = compact_update(ops)
    assert compact == {"$push": {"l": {"$each": [1]}}}
    compact["$push"]["l"]["$each"].append(2)
    assert ops[UpdateOp.PUSH]["l"] == {"$each": [1]}


@pytest.mark.parametrize("update", [
    {},
    {"$set": {"a": 1, "b.c": [1]}},
    {"$unset": {"a": True}},
    {"$push": {"a": op_each([1, 2])}},
    {"$addToSet": {"a": op_each([])}},
    {"$pull": {"a": op_in([1])}},
    {"$pull": {"a": {"x": 1}}},
])
def test_valid_updates(update, update_validator):
    validate_update(update)
    assert is_valid_update(update)
    update_validator.validate(update)


@pytest.mark.parametrize("update", [
    [],
    {"$inc": {"a": 1}},
    {"$set": {}},
    {"$set": {"": 1}},
    {"$set": {"a..b": 1}},
    {"$unset": {"a": 1}},
    {"$push": {"a": 1}},
    {"$push": {"a": {"$each": 1}}},
    {"$addToSet": {"a": {"$each": [1], "$slice": 1}}},
    {"$pull": {"a": 1}},
    {"$pull": {"a": {"$in": 1}}},
])
def test_invalid_updates(update, update_validator):
    with pytest.raises(UpdateFormatError):
        validate_update(update)
    assert not is_valid_update(update)
    assert not update_validator.is_valid(update)


def test_validate_builder_update(doc_id, update_validator):
    q = UpdateBuilder.load({"_id": doc_id, "a": 1, "b": 2, "l": [1, {"x": 1}], "m": [1]})
    q.replace("a", {"nested": [1]})
    q.remove("gone")
    q.remove("b")
    q.append("p", 1, 2)
    q.set_insert("s", "x")
    q.pull_values("m", 1)
    q.pull_match("l", {"x": 1})
    update = q.get_update()
    assert set(update) == {"$set", "$unset", "$push", "$addToSet", "$pull"}
    validate_update(update)
    update_validator.validate(update)


@pytest.mark.parametrize("update", [
    {"$push": {"a": op_each([1])}, "$pull": {"a": op_in([2])}},
    {"$set": {"a": 1}, "$unset": {"a": True}},
    {"$set": {"a": {"b": 1}}, "$unset": {"a.b": True}},
    {"$set": {"a.b": 1}, "$addToSet": {"a": op_each([1])}},
    {"$set": {"a": 1, "a.b.c": 2}},
])
def test_conflicting_paths(update):
    with pytest.raises(UpdateFormatError) as e:
        validate_update(update)
    assert "conflict" in str(e.value)
    assert not is_valid_update(update)


def test_sibling_paths_do_not_conflict():
    validate_update({
        "$set": {"a.b": 1, "ab": 2},
        "$unset": {"a.bc": True},
        "$push": {"a.c": op_each([1])},
        "$pull": {"ac": op_in([1])},
    })


def test_builder_can_compile_conflicting_update(doc_id):
    # Pushing to and pulling from one array before persisting
    q = UpdateBuilder.load({"_id": doc_id, "l": [1]})
    q.append("l", 2)
    q.pull_values("l", 1)
    assert not is_valid_update(q.get_update())
