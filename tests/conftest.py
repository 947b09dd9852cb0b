"""
Pytest configuration for the wwwrite test suite.

This conftest.py provides:
- Machine-mode logging (suppresses console output)
- Sample declaration sources and mappings
- A temporary multi-package repository laid out like the real source tree
"""

import json
import os
import shutil
from pathlib import Path

import pytest

from wwwrite.logging_config import setup_logging
from wwwrite.mapping import freeze_mapping

TEST_FILES_DIR = Path(__file__).parent / "test_files"


# ============================================================================
# GLOBAL CONFIGURATION
# ============================================================================

def pytest_configure(config):
    """Keep test output free of log noise."""
    os.environ.setdefault("WWWRITE_MACHINE_MODE", "1")


# ============================================================================
# LOGGING FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def setup_test_logging():
    """
    Machine mode by default - suppress console logs for clean test output.
    """
    setup_logging(level="DEBUG", suppress_console=True, force=True)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Config dataclasses read WWWRITE_* variables; start every test from defaults."""
    for key in list(os.environ):
        if key.startswith("WWWRITE_") and key != "WWWRITE_MACHINE_MODE":
            monkeypatch.delenv(key, raising=False)


# ============================================================================
# SOURCE FIXTURES
# ============================================================================

@pytest.fixture
def lexical_mapping():
    """The mapping the sample repository produces."""
    return freeze_mapping({
        "lexical": "Lexical",
        "@lexical/list": "LexicalList",
        "@lexical/react/LexicalComposer": "LexicalComposer",
        "@lexical/react/useLexicalEditable": "useLexicalEditable",
    })


@pytest.fixture
def composer_source():
    return (TEST_FILES_DIR / "LexicalComposer.js.flow").read_text(encoding="utf-8")


@pytest.fixture
def broken_source():
    return (TEST_FILES_DIR / "Broken.js.flow").read_text(encoding="utf-8")


# ============================================================================
# REPOSITORY FIXTURES
# ============================================================================

def _write_package(root: Path, directory: str, manifest: dict, flow_files=()) -> Path:
    package_dir = root / "packages" / directory
    package_dir.mkdir(parents=True)
    (package_dir / "package.json").write_text(json.dumps(manifest, indent=2), encoding="utf-8")
    if flow_files:
        flow_dir = package_dir / "flow"
        flow_dir.mkdir()
        for name in flow_files:
            shutil.copy(TEST_FILES_DIR / name, flow_dir / name)
    return package_dir


@pytest.fixture
def lexical_repo(tmp_path):
    """
    A source tree with:
        lexical             public, one strict declaration file
        lexical-list        public, no flow directory
        lexical-react       public, subpath exports, one declaration file with nothing to rewrite
        lexical-playground  private, one strict declaration file
    """
    root = tmp_path / "repo"
    _write_package(
        root, "lexical",
        {"name": "lexical", "version": "0.1.0", "exports": {".": {"import": "./Lexical.mjs"}}},
        ["LexicalComposer.js.flow"],
    )
    _write_package(
        root, "lexical-list",
        {"name": "@lexical/list", "version": "0.1.0", "exports": {".": "./LexicalList.mjs", "./package.json": "./package.json"}},
    )
    _write_package(
        root, "lexical-react",
        {
            "name": "@lexical/react",
            "version": "0.1.0",
            "exports": {
                "./LexicalComposer": {"import": "./LexicalComposer.mjs"},
                "./useLexicalEditable": {"import": "./useLexicalEditable.mjs"},
                "./*": "./*.mjs",
            },
        },
        ["LexicalPlain.js.flow"],
    )
    _write_package(
        root, "lexical-playground",
        {"name": "lexical-playground", "private": True},
        ["LexicalComposer.js.flow"],
    )
    (root / "packages" / "scratch").mkdir()  # no package.json
    return root


@pytest.fixture
def broken_repo(lexical_repo):
    """lexical_repo plus a package whose declaration file does not parse."""
    _write_package(
        lexical_repo, "lexical-broken",
        {"name": "@lexical/broken", "version": "0.1.0"},
        ["Broken.js.flow"],
    )
    return lexical_repo
