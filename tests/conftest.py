import logging
import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'fiddler'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from fiddler.core.schemas import load_schema
from fiddler.core.stdlib_logging import reset_stdlib_logging_for_tests
from helpers.project import ProjectTree


@pytest.fixture(autouse=True)
def _isolate_fiddler_env(monkeypatch):
    """Drop FIDDLER_* variables leaking in from the developer's shell."""
    for key in list(os.environ):
        if key.startswith("FIDDLER_"):
            monkeypatch.delenv(key, raising=False)
    yield
    reset_stdlib_logging_for_tests()
    logging.getLogger().setLevel(logging.WARNING)


@pytest.fixture
def project(tmp_path: Path) -> ProjectTree:
    """An empty project root with helpers to write manifests and packages."""
    root = tmp_path / "project"
    root.mkdir()
    return ProjectTree(root)


@pytest.fixture(scope="session")
def manifest_schema() -> dict:
    return load_schema()
