"""Shared fixtures for the later test suite."""

import pytest
from datetime import date, datetime

from later.models import DateOnly, Entry, ListCollection, Sublist

# Wednesday, March 6th 2024, noon local time
NOW = datetime(2024, 3, 6, 12, 0)
TODAY = NOW.date()


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep every test away from the real config, data and log files."""
    monkeypatch.setenv('LATER_DATA_DIR', str(tmp_path / "data"))
    monkeypatch.setenv('LATER_CONFIG', str(tmp_path / "config.yml"))
    monkeypatch.delenv('LATER_DEBUG', raising=False)
    monkeypatch.delenv('LATER_LOG_LEVEL', raising=False)
    return tmp_path


@pytest.fixture
def data_file(isolated_env):
    return isolated_env / "data" / "later.json"


@pytest.fixture
def sample_tree():
    """
    to-do
    0) a
    1---> b (2024/03/10)
       0) b0
       1) b1
    2---> c
       0) c0
    3) d
    """
    return Sublist(title="to-do", items=[
        Entry(title="a"),
        Sublist(title="b", date=DateOnly(value=date(2024, 3, 10)), items=[
            Entry(title="b0"),
            Entry(title="b1"),
        ]),
        Sublist(title="c", items=[Entry(title="c0")]),
        Entry(title="d"),
    ])


@pytest.fixture
def sample_lists(sample_tree):
    lists = ListCollection()
    lists.root["to-do"] = sample_tree
    lists.root["groceries"] = Sublist(title="groceries", items=[Entry(title="eggs")])
    return lists
