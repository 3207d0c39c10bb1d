# type: ignore
from invoke import task


@task
def venv(ctx):
    """Create .venv with the project and its test extras."""
    ctx.run("uv sync --all-extras")


@task
def lint(ctx):
    """
    Check style and types of the package sources.
    """
    ctx.run("ruff check src tests", pty=True)
    ctx.run("ruff format --check src tests", pty=True)
    ctx.run("mypy src", pty=True)


@task
def test(ctx):
    """
    Run tests with coverage information.
    """
    ctx.run("pytest --cov=atvscan --cov-report=term-missing", pty=True)


@task
def scan(ctx, timeout=5.0):
    """Run a live scan on the local network with debug logging."""
    ctx.run(f"LOGLEVEL=DEBUG atvscan scan --timeout {timeout}", pty=True)


@task
def build_package(ctx):
    """
    Build sdist and wheel into dist/.
    """
    ctx.run("rm -rf dist")
    ctx.run("uv build")
