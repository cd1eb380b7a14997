"""Nox sessions."""

import shutil
import sys
from pathlib import Path
from textwrap import dedent

try:
    import nox
    from nox import Session
    from nox import session
except ImportError:
    message = f"""\
    Nox failed to import.

    Please install it using the following command:

    {sys.executable} -m pip install nox"""
    raise SystemExit(dedent(message)) from None

package = "seisdm"
python_versions = ["3.13", "3.12", "3.11"]
nox.needs_version = ">=2025.2.9"
nox.options.sessions = ("lint", "mypy", "tests", "typeguard", "docs-build")


@session(python=python_versions[0])
def lint(session: Session) -> None:
    """Lint and check formatting using ruff."""
    session.install("ruff")
    session.run("ruff", "check", "src", "tests", "noxfile.py", "docs/conf.py")
    session.run("ruff", "format", "--check", "src", "tests", "noxfile.py", "docs/conf.py")


@session(python=python_versions)
def mypy(session: Session) -> None:
    """Type-check using mypy."""
    args = session.posargs or ["src", "tests", "docs/conf.py"]
    session.install(".[test]", "mypy")
    session.run("mypy", *args)
    if not session.posargs:
        session.run("mypy", f"--python-executable={sys.executable}", "noxfile.py")


@session(python=python_versions)
def tests(session: Session) -> None:
    """Run the test suite."""
    session.install(".[test]", "pygments")

    try:
        session.run("coverage", "run", "--parallel", "-m", "pytest", *session.posargs)
    finally:
        if session.interactive:
            session.notify("coverage", posargs=[])


@session(python=python_versions[0])
def coverage(session: Session) -> None:
    """Produce the coverage report."""
    args = session.posargs or ["report"]

    session.install("coverage[toml]")

    if not session.posargs and any(Path().glob(".coverage.*")):
        session.run("coverage", "combine")

    session.run("coverage", *args)


@session(python=python_versions[0])
def typeguard(session: Session) -> None:
    """Runtime type checking using Typeguard."""
    session.install(".[test]", "typeguard", "pygments")
    session.run("pytest", f"--typeguard-packages={package}", *session.posargs)


@session(name="docs-build", python=python_versions[0])
def docs_build(session: Session) -> None:
    """Build the documentation."""
    args = session.posargs or ["docs", "docs/_build"]

    session.install(".", "autodoc-pydantic", "furo", "sphinx", "sphinx-click", "sphinx-copybutton")

    build_dir = Path("docs", "_build")
    if build_dir.exists():
        shutil.rmtree(build_dir)

    session.run("sphinx-build", *args)
