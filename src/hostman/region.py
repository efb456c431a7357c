"""Locate the block of a hosts file owned by hostman.

The block sits between two sentinel comments::

    # hostman:start
    192.168.1.5	box1
    # hostman:end

Everything outside the block belongs to the user and is never touched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .exceptions import RegionError
from .parsing import Comment, Document

logger = logging.getLogger("hostman.region")

__all__ = ["START_MARKER", "END_MARKER", "ManagedRegion", "locate_region"]

START_MARKER = Comment(" hostman:start")
END_MARKER = Comment(" hostman:end")


@dataclass(frozen=True)
class ManagedRegion:
    """Half-open ``[start, end)`` range of the lines inside the block.

    The start sentinel sits at ``start - 1`` and the end sentinel at ``end``.
    """

    start: int
    end: int

    def __contains__(self, index: object) -> bool:
        return isinstance(index, int) and self.start <= index < self.end

    def __len__(self) -> int:
        return self.end - self.start


def _first_index(document: Document, marker: Comment) -> Optional[int]:
    for index, line in enumerate(document.lines):
        if line == marker:
            return index
    return None


def locate_region(document: Document) -> Optional[ManagedRegion]:
    """Return the managed region of *document*, or ``None`` if there is none.

    Each sentinel is searched for independently from the top of the file.
    A missing sentinel means hostman has not written this file yet. An end
    sentinel at or before the start sentinel raises ``RegionError``.
    """
    start = _first_index(document, START_MARKER)
    end = _first_index(document, END_MARKER)

    if start is None or end is None:
        logger.debug("No managed region found")
        return None

    if end <= start:
        raise RegionError(
            f"'#{END_MARKER.text}' on line {end + 1} is not after "
            f"'#{START_MARKER.text}' on line {start + 1}",
            {"start_line": start + 1, "end_line": end + 1},
        )

    region = ManagedRegion(start + 1, end)
    logger.debug(f"Managed region spans lines {region.start + 1}-{region.end}")
    return region
