"""Shared test fixtures for Refactor Planner tests."""

import json
import logging

import pytest

from refactor_planner.graph import graph_from_mapping
from refactor_planner.scanning import InMemorySource


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo handler and level changes made by setup_logging()."""
    root = logging.getLogger()
    planner = logging.getLogger("refactor_planner")
    handlers, root_level, planner_level = root.handlers[:], root.level, planner.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(root_level)
    planner.setLevel(planner_level)


@pytest.fixture
def chain_mapping():
    """Chain: a -> b -> c -> d (a depends on b, ...)."""
    return {"a": ["b"], "b": ["c"], "c": ["d"], "d": []}


@pytest.fixture
def star_mapping():
    """Star: four modules depend on a shared core."""
    return {"core": [], "w": ["core"], "x": ["core"], "y": ["core"], "z": ["core"]}


@pytest.fixture
def mutual_mapping():
    """Two modules importing each other."""
    return {"A": ["B"], "B": ["A"]}


@pytest.fixture
def chain_graph(chain_mapping):
    return graph_from_mapping(chain_mapping)


@pytest.fixture
def star_graph(star_mapping):
    return graph_from_mapping(star_mapping)


@pytest.fixture
def mutual_graph(mutual_mapping):
    return graph_from_mapping(mutual_mapping)


@pytest.fixture
def layered_source():
    """A small app with one upward (ui <- core) import and one cycle."""
    return InMemorySource.from_mapping(
        {
            "src/ui/page": ["src/domain/user", "src/core/log"],
            "src/domain/user": ["src/core/log", "src/domain/account"],
            "src/domain/account": ["src/domain/user"],
            "src/core/log": ["src/ui/theme"],
            "src/ui/theme": [],
        },
        layers={
            "src/ui/page": "ui",
            "src/ui/theme": "ui",
            "src/domain/user": "domain",
            "src/domain/account": "domain",
            "src/core/log": "core",
        },
    )


@pytest.fixture
def manifest_file(tmp_path):
    """A manifest on disk with embedded actions."""
    document = {
        "modules": [
            {"id": "src/app/main", "imports": ["src/app/service", "src/lib/util"]},
            {"id": "src/app/service", "imports": ["src/lib/util", "src/lib/old"]},
            {"id": "src/lib/util", "imports": []},
            {"id": "src/lib/old", "imports": ["src/lib/util"]},
        ],
        "actions": [
            {"kind": "merge", "sources": ["src/lib/old", "src/lib/util"], "target": "src/lib/util"},
            {"kind": "delete", "source": "src/lib/old"},
            {"kind": "create-barrel", "sources": ["src/lib/util"], "target": "src/lib/index"},
        ],
    }
    path = tmp_path / "modules.json"
    path.write_text(json.dumps(document), encoding="utf-8")
    return path
