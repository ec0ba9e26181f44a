# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import io

import colorama

from updatebuilder import UpdateBuilder
from updatebuilder.prettyprint import pretty_print_update, PrettyPrintConfig


def render(update, base=None, use_color=False):
    out = io.StringIO()
    pretty_print_update(update, base=base, config=PrettyPrintConfig(out=out, use_color=use_color))
    return out.getvalue()


def test_pretty_print_set_and_unset():
    text = render({"$set": {"a": 2, "n": 1}, "$unset": {"b": True}}, base={"a": 1, "b": "2"})
    assert text == (
        "## replaced a:\n"
        "-  1\n"
        "+  2\n"
        "## added n:\n"
        "+  1\n"
        "## deleted b:\n"
        "-  '2'\n"
    )


def test_pretty_print_without_base():
    text = render({"$unset": {"b": True}})
    assert text == "## deleted b:\n"


def test_pretty_print_array_ops(doc_id):
    q = UpdateBuilder.load({"_id": doc_id, "l": [1, {"x": 1}], "m": ["x"]})
    q.append("p", "a", "b")
    q.set_insert("s", 1)
    q.pull_values("m", "x")
    q.pull_match("l", {"x": 1})
    text = render(q.get_update())
    assert text == (
        "## appended to p:\n"
        "+  'a'\n"
        "+  'b'\n"
        "## pulled from m:\n"
        "-  'x'\n"
        "## pulled matching from l:\n"
        "-  {'x': 1}\n"
        "## added to set s:\n"
        "+  1\n"
    )


def test_pretty_print_colors():
    text = render({"$set": {"a": 2}}, use_color=True)
    assert colorama.Fore.GREEN in text
    assert colorama.Style.RESET_ALL in text
