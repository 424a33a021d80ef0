"""changeline CLI layer."""

__all__ = ["cli"]


def cli() -> None:
    """Lazy import and run the CLI."""
    from changeline.cli.main import main as _main

    _main()
