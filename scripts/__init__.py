"""Console entry points for running the sqlcompose test suites."""

import shutil
import subprocess
import sys
from pathlib import Path

UNIT_TESTS = "sqlcompose/tests"
INTEGRATION_TESTS = "tests"
CACHE_DIRS = (".pytest_cache", "build")


def _pytest(*paths: str) -> int:
    return subprocess.run([sys.executable, "-m", "pytest", *paths], check=False).returncode


def run_unit_tests():
    """Run the expression and finalizer unit tests."""
    sys.exit(_pytest(UNIT_TESTS))


def run_integration_tests():
    """Run finalized statements against in-memory SQLite."""
    sys.exit(_pytest(INTEGRATION_TESTS))


def run_all_tests():
    sys.exit(_pytest(UNIT_TESTS, INTEGRATION_TESTS))


def clean_project():
    """Remove pytest caches, build output and every __pycache__ directory."""
    root = Path(".")
    targets = [root / name for name in CACHE_DIRS]
    targets.extend(root.rglob("__pycache__"))
    targets.extend(root.glob("*.egg-info"))

    for target in targets:
        if target.is_dir():
            shutil.rmtree(target)
            print(f"Removed: {target}")
