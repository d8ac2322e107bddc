"""
Development tasks for mlevels.

Run 'invoke --list' to see the available tasks.

Copyright © 2024 The mlevels authors.
"""
import platform
import shutil
import sys
import webbrowser
from pathlib import Path

from invoke import task

ROOT_DIR = Path(__file__).parent
SOURCE_DIR = ROOT_DIR / "src" / "mlevels"
TEST_DIR = ROOT_DIR / "tests"
SAMPLE_COUNTS = TEST_DIR / "data" / "sample.counts"
BUILD_DIR = ROOT_DIR / "build"
COVERAGE_DIR = ROOT_DIR / "htmlcov"
PYTHON_PATHS = " ".join(str(p) for p in (SOURCE_DIR, TEST_DIR, ROOT_DIR / "tasks.py"))


def _run(c, command, **kwargs):
    return c.run(command, pty=platform.system() != "Windows", **kwargs)


@task(help={"check": "Only report files black would reformat"})
def format(c, check=False):
    """Format the sources with black and sort imports with ruff."""
    black_flags = "--check --diff" if check else ""
    ruff_flags = "" if check else "--fix"
    _run(c, f"black {black_flags} {PYTHON_PATHS}")
    _run(c, f"ruff check --select I {ruff_flags} {PYTHON_PATHS}")


@task
def lint(c):
    """Run ruff and flake8, failing if either reports a problem."""
    results = [
        c.run(f"ruff check {PYTHON_PATHS}", warn=True),
        c.run(f"flake8 --ignore=E501,W503,E203 {PYTHON_PATHS}", warn=True),
    ]
    if any(result.exited != 0 for result in results):
        print("Linting failed")
        sys.exit(1)
    print("Linting passed")


@task
def typecheck(c):
    """Type check the package with mypy."""
    _run(c, f"mypy {SOURCE_DIR}")


@task(
    help={
        "keyword": "Only run tests matching this pytest -k expression",
        "basetemp": "The base directory for temporary test output",
    }
)
def test(c, keyword=None, basetemp=None):
    """Run the test suite."""
    cmd = "python -m pytest"
    if keyword:
        cmd += f' -k "{keyword}"'
    if basetemp:
        cmd += f' --basetemp="{basetemp}"'
    _run(c, cmd)


@task(help={"open_browser": "Open the html report when done"})
def coverage(c, open_browser=False):
    """Measure test coverage of the package."""
    _run(c, f"coverage run --source {SOURCE_DIR} -m pytest")
    _run(c, "coverage report --show-missing")
    if open_browser:
        _run(c, f"coverage html -d {COVERAGE_DIR}")
        webbrowser.open((COVERAGE_DIR / "index.html").as_uri())


@task(help={"output_format": "Report format, yaml or json"})
def sample(c, output_format="yaml"):
    """Compute the levels report of the bundled sample counts file."""
    output = BUILD_DIR / f"sample.levels.{output_format}"
    _run(
        c,
        f"mlevels --verbose levels -c {SAMPLE_COUNTS} -o {output} "
        f"--format {output_format}",
    )
    print(output.read_text())


@task
def clean(c):
    """Remove build, test and coverage artifacts."""
    for path in (BUILD_DIR, ROOT_DIR / "dist", COVERAGE_DIR, ROOT_DIR / ".pytest_cache"):
        shutil.rmtree(path, ignore_errors=True)
    (ROOT_DIR / ".coverage").unlink(missing_ok=True)
    for cache in ROOT_DIR.rglob("__pycache__"):
        shutil.rmtree(cache, ignore_errors=True)


@task(clean)
def dist(c):
    """Build the source and wheel distributions."""
    _run(c, "poetry build")
