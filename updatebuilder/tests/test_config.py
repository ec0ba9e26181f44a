# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import json

import pytest
from traitlets import TraitError

from updatebuilder.config import (
    build_config, BuilderOptions, recursive_update, CONFIG_BASENAME,
)


def test_build_config_defaults(tmpdir, monkeypatch, reset_config):
    monkeypatch.chdir(str(tmpdir))
    monkeypatch.delenv('UPDATEBUILDER_CONFIG_DIR', raising=False)
    assert build_config('compile') == {
        'log_level': 'INFO',
        'use_version_key': False,
        'color': True,
        'json': False,
    }
    assert build_config('apply') == {'log_level': 'INFO'}


def test_build_config_unknown_entrypoint():
    with pytest.raises(ValueError):
        build_config('nope')


def test_build_config_from_disk(tmpdir, monkeypatch, reset_config):
    tmpdir.join(CONFIG_BASENAME + '.json').write(json.dumps({
        'BuilderOptions': {'use_version_key': True},
        'Compile': {'json': True},
        'Global': {'log_level': 'DEBUG'},
    }))
    monkeypatch.chdir(str(tmpdir))
    config = build_config('compile')
    assert config['use_version_key'] is True
    assert config['json'] is True
    assert config['log_level'] == 'DEBUG'
    assert build_config('apply') == {'log_level': 'DEBUG'}


def test_build_config_cwd_wins(tmpdir, monkeypatch, reset_config):
    user_dir = tmpdir.mkdir('user')
    user_dir.join(CONFIG_BASENAME + '.json').write(json.dumps({
        'Compile': {'json': True, 'color': False},
    }))
    cwd = tmpdir.mkdir('cwd')
    cwd.join(CONFIG_BASENAME + '.json').write(json.dumps({
        'Compile': {'json': False},
    }))
    monkeypatch.setenv('UPDATEBUILDER_CONFIG_DIR', str(user_dir))
    monkeypatch.chdir(str(cwd))
    config = build_config('compile')
    assert config['json'] is False
    assert config['color'] is False


def test_recursive_update():
    target = {'a': {'b': 1, 'c': 2}, 'd': 3}
    recursive_update(target, {'a': {'b': None, 'e': 4}, 'd': None}, False)
    assert target == {'a': {'c': 2, 'e': 4}}


def test_builder_options():
    assert BuilderOptions.from_kwargs({}).use_version_key is False
    assert BuilderOptions.from_kwargs({'use_version_key': True}).use_version_key is True
    with pytest.raises(TypeError):
        BuilderOptions.from_kwargs({'is_new': True})
    with pytest.raises(TraitError):
        BuilderOptions.from_kwargs({'use_version_key': 'maybe'})
