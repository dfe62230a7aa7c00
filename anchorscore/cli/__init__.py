"""Command line interface."""

from anchorscore.cli.main import cli


__all__ = ["cli"]
