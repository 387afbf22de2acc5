"""Tests for taskboard.config.Config defaults and env overrides."""

from __future__ import annotations

from pathlib import Path

import pytest

import taskboard
from taskboard.config import DEFAULT_STORAGE_KEY, VERSION, Config, default_store_path


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("TASKBOARD_STORE", raising=False)
    monkeypatch.delenv("TASKBOARD_KEY", raising=False)


def test_defaults():
    cfg = Config()
    assert cfg.store_path == str(default_store_path())
    assert cfg.storage_key == DEFAULT_STORAGE_KEY == "tasks"
    assert cfg.background_saves is True
    assert cfg.verbose is False


def test_default_store_lives_in_home():
    assert default_store_path() == Path.home() / ".taskboard" / "storage.json"


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("TASKBOARD_STORE", str(tmp_path / "x.json"))
    monkeypatch.setenv("TASKBOARD_KEY", "work")
    cfg = Config()
    assert cfg.store_path == str(tmp_path / "x.json")
    assert cfg.storage_key == "work"


def test_explicit_values_beat_env(monkeypatch, tmp_path):
    monkeypatch.setenv("TASKBOARD_STORE", str(tmp_path / "env.json"))
    cfg = Config(store_path=str(tmp_path / "flag.json"), storage_key="k")
    assert cfg.store_path == str(tmp_path / "flag.json")
    assert cfg.storage_key == "k"


def test_package_version_matches_config():
    assert taskboard.__version__ == VERSION
