"""Shared domain services for the financial plan application."""

from __future__ import annotations

from . import edits, exporters, io, remote, storage, validators, wizard

__all__ = [
    "edits",
    "exporters",
    "io",
    "remote",
    "storage",
    "validators",
    "wizard",
]
