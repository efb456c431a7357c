"""Hostman CLI entry point.

This module allows execution with `python -m hostman` and simply
forwards to the top-level `hostman.cli` entry function.
"""

from __future__ import annotations

from .cli import cli


def main() -> None:  # pragma: no cover – convenience wrapper
    """Invoke the Hostman CLI."""
    cli()


if __name__ == "__main__":  # pragma: no cover – executed via `python -m`
    main()
