from __future__ import annotations

from typing import List, Optional

from .parsing import Document
from .region import END_MARKER, START_MARKER, ManagedRegion
from .table import Table

__all__ = ["render_block", "render_document"]


def _entry_lines(table: Table) -> List[str]:
    return [f"{ip}\t{alias}\n" for alias, ip in table.entries()]


def render_block(table: Table) -> str:
    """Return a complete managed block, sentinels included."""
    lines = [START_MARKER.to_text() + "\n"]
    lines += _entry_lines(table)
    lines.append(END_MARKER.to_text() + "\n")
    return "".join(lines)


def render_document(
    document: Document, region: Optional[ManagedRegion], table: Table
) -> str:
    """Render *document* with the managed block replaced by *table*.

    Lines outside the block are copied verbatim. Without a region the block
    is appended at the end. Every line ends with ``\\n``.
    """
    if region is None:
        out = [f"{raw}\n" for raw in document.raw]
        out.append(render_block(table))
        return "".join(out)

    out = [f"{raw}\n" for raw in document.raw[: region.start]]
    out += _entry_lines(table)
    out += [f"{raw}\n" for raw in document.raw[region.end:]]
    return "".join(out)
