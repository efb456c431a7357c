"""Hostman - keep hosts files in sync across the machines of a LAN"""
from __future__ import annotations

__version__ = "0.1.0"

from .parsing import Comment, Document, Mapping, parse_document, parse_line  # noqa: E402
from .region import ManagedRegion, locate_region  # noqa: E402
from .render import render_document  # noqa: E402
from .table import SelfReport, Table, extract_table  # noqa: E402

__all__: list[str] = [
    "Comment",
    "Mapping",
    "Document",
    "parse_line",
    "parse_document",
    "ManagedRegion",
    "locate_region",
    "Table",
    "SelfReport",
    "extract_table",
    "render_document",
]
