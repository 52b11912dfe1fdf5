"""Command line interface (``python -m dashboard_engine.cli``)."""

from .__main__ import main

__all__ = [
    "main",
]
