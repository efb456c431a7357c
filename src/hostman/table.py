"""The alias -> IP table exchanged between agent and service.

On the wire a table is a JSON object::

    {"host_mapping": {"box1": "192.168.1.5"},
     "current": {"host": "box1", "ips": ["192.168.1.5"]}}

``current`` is the agent's self-report and is omitted when there is none.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .parsing import Document, Mapping, is_address, is_alias
from .region import ManagedRegion

logger = logging.getLogger("hostman.table")

__all__ = ["SelfReport", "Table", "extract_table"]


@dataclass
class SelfReport:
    """This machine's hostname and its non-loopback IPv4 addresses."""

    host: str
    ips: List[str]

    @property
    def primary_ip(self) -> str:
        return self.ips[0]

    def to_dict(self) -> Dict[str, Any]:
        return {"host": self.host, "ips": list(self.ips)}

    @classmethod
    def from_dict(cls, data: Any) -> "SelfReport":
        if not isinstance(data, dict):
            raise ValueError("'current' must be an object")
        host = data.get("host")
        ips = data.get("ips")
        if not isinstance(host, str):
            raise ValueError("'current.host' must be a string")
        if not isinstance(ips, list) or not all(isinstance(ip, str) for ip in ips):
            raise ValueError("'current.ips' must be a list of strings")
        return cls(host, list(ips))


@dataclass
class Table:
    """Alias -> IP mapping plus the optional self-report."""

    host_mapping: Dict[str, str] = field(default_factory=dict)
    current: Optional[SelfReport] = None

    def __len__(self) -> int:
        return len(self.host_mapping)

    def upsert(self, alias: str, ip: str) -> None:
        """Insert or overwrite one entry. This is the only merge the service does."""
        self.host_mapping[alias] = ip

    def validate(self) -> None:
        """Raise ``ValueError`` unless every entry would render as a parsable mapping line."""
        for alias, ip in self.host_mapping.items():
            if not is_alias(alias):
                raise ValueError(f"invalid alias {alias!r}")
            if not is_address(ip):
                raise ValueError(f"invalid address {ip!r} for {alias!r}")

    def entries(self) -> Iterator[Tuple[str, str]]:
        """Yield ``(alias, ip)`` pairs sorted by alias."""
        for alias in sorted(self.host_mapping):
            yield alias, self.host_mapping[alias]

    # ------------------------------------------------------------------
    # Wire format
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"host_mapping": dict(self.entries())}
        if self.current is not None:
            data["current"] = self.current.to_dict()
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: Any) -> "Table":
        """Build a table from decoded JSON, raising ``ValueError`` if malformed."""
        if not isinstance(data, dict):
            raise ValueError("table payload must be an object")
        mapping = data.get("host_mapping", {})
        if not isinstance(mapping, dict):
            raise ValueError("'host_mapping' must be an object")
        for alias, ip in mapping.items():
            if not isinstance(alias, str) or not isinstance(ip, str):
                raise ValueError("'host_mapping' entries must map strings to strings")
        current = data.get("current")
        return cls(
            host_mapping=dict(mapping),
            current=SelfReport.from_dict(current) if current is not None else None,
        )

    @classmethod
    def from_json(cls, text: str | bytes) -> "Table":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"table payload is not JSON: {exc}") from exc
        return cls.from_dict(data)


def extract_table(document: Document, region: Optional[ManagedRegion]) -> Table:
    """Collect the mappings inside *region*; a later alias overwrites an earlier one."""
    table = Table()
    if region is None:
        return table

    for line in document.lines[region.start:region.end]:
        if isinstance(line, Mapping):
            for alias in line.aliases:
                table.upsert(alias, line.ip)

    logger.debug(f"Extracted {len(table)} managed entries")
    return table
