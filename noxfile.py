"""Nox sessions for fontsmith."""

import nox


PYPROJECT = nox.project.load_toml("pyproject.toml")
PYTHON_VERSIONS = nox.project.python_versions(PYPROJECT)
nox.options.default_venv_backend = "uv|virtualenv"
nox.options.sessions = ["tests"]


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run the test suite on every supported interpreter."""
    session.install("-e", ".[test]")
    session.run("pytest", *session.posargs)


@nox.session(python=PYTHON_VERSIONS[-1])
def coverage(session: nox.Session) -> None:
    """Run the test suite once with line coverage of the package."""
    session.install("-e", ".[test]")
    session.run(
        "pytest",
        "--cov=fontsmith",
        "--cov-branch",
        "--cov-report=term-missing",
        *session.posargs,
    )


@nox.session(python=PYTHON_VERSIONS[-1])
def cli(session: nox.Session) -> None:
    """Install the wheel and check the console script starts."""
    session.install(".")
    session.run("fontsmith", "--help", silent=True)
    session.run("fontsmith", "cache", "--help", silent=True)
