"""
treasureboard.cli
=================

`treasureboard` command-line entrypoint. See `treasureboard.cli.main`; the
console script runs `treasureboard.cli.main:main`.
"""

from __future__ import annotations

from .main import app  # noqa: F401

__all__ = ["app"]
