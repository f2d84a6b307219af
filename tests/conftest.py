"""Shared pytest fixtures: verbose result reporting and throwaway git repos."""

import logging
import os
import sys
from pathlib import Path

import pytest
import structlog
from git import Repo

# Add the parent directory to the path so we can import our modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))


class RecordedResult:
    """Expected and actual values of one check."""
    def __init__(self, test_name, expected, actual, passed, error=None):
        self.test_name = test_name
        self.expected = expected
        self.actual = actual
        self.passed = passed
        self.error = error


class VerboseTestReporter:
    """Prints expected/actual pairs when PYTEST_VERBOSE=true."""
    def __init__(self):
        self.verbose = os.environ.get('PYTEST_VERBOSE', 'false').lower() == 'true'
        self.results = []

    def record_result(self, test_name, expected, actual, passed, error=None):
        result = RecordedResult(test_name, expected, actual, passed, error)
        self.results.append(result)

        if self.verbose:
            print(f"\n{'='*60}")
            print(f"TEST: {result.test_name}")
            print(f"STATUS: {'PASS' if result.passed else 'FAIL'}")
            if result.error:
                print(f"ERROR: {result.error}")
            print(f"EXPECTED: {result.expected}")
            print(f"ACTUAL:   {result.actual}")
            print(f"{'='*60}\n")

    def print_summary(self):
        if self.verbose:
            passed = sum(1 for r in self.results if r.passed)
            print(f"\n{'='*80}")
            print(f"PATCH VIEW TEST SUMMARY: {passed}/{len(self.results)} PASSED")
            for r in self.results:
                if not r.passed:
                    print(f"  - {r.test_name}: {r.error or 'Assertion failed'}")
            print(f"{'='*80}")


@pytest.fixture(scope="session")
def reporter():
    """Session-wide reporter; prints its summary once all tests are done."""
    verbose_reporter = VerboseTestReporter()
    yield verbose_reporter
    verbose_reporter.print_summary()


@pytest.fixture
def git_repo(tmp_path):
    """
    A repository with three commits touching calculator.py and README.md.

    Returns:
        Tuple of (repo path, list of commits in order)
    """
    repo = Repo.init(tmp_path)
    with repo.config_writer() as config:
        config.set_value("user", "name", "Test User")
        config.set_value("user", "email", "test@example.com")

    commits = []

    python_file = Path(tmp_path) / "calculator.py"
    python_file.write_text('''def add(a, b):
    """Add two numbers."""
    return a + b
''')
    repo.index.add([str(python_file)])
    commits.append(repo.index.commit("Initial commit - add function"))

    python_file.write_text('''def add(a, b):
    """Add two numbers."""
    return a + b

def subtract(a, b):
    """Subtract b from a."""
    return a - b
''')
    readme_file = Path(tmp_path) / "README.md"
    readme_file.write_text("# Calculator\n")
    repo.index.add([str(python_file), str(readme_file)])
    commits.append(repo.index.commit("Add subtract function and README"))

    python_file.write_text('''def add(a, b):
    """Add two numbers with validation."""
    if not isinstance(a, (int, float)) or not isinstance(b, (int, float)):
        raise TypeError("Arguments must be numbers")
    return a + b

def subtract(a, b):
    """Subtract b from a."""
    return a - b
''')
    repo.index.add([str(python_file)])
    commits.append(repo.index.commit("Add validation to add function"))

    yield str(tmp_path), commits
    repo.close()


@pytest.fixture
def unconfigured_logging():
    """Run with structlog defaults and a bare root logger, then restore both."""
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    structlog.reset_defaults()
    root.handlers = []
    root.setLevel(logging.WARNING)
    yield
    structlog.reset_defaults()
    root.handlers = saved_handlers
    root.setLevel(saved_level)
