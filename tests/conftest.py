"""Pytest configuration and reusable fixtures for Hostman tests."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterator

import pytest

# ---------------------------------------------------------------------------
# Test path setup – make sure `src/` is importable when tests are invoked from
# the project root without an editable install.
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"

if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from hostman.store import TableStore  # noqa: E402
from hostman.table import SelfReport, Table  # noqa: E402


# ---------------------------------------------------------------------------
# Generic fixtures
# ---------------------------------------------------------------------------

SAMPLE_HOSTS = (
    "127.0.0.1\tlocalhost\n"
    "::1\tlocalhost ip6-localhost\n"
    "# hostman:start\n"
    "1.1.1.1\told\n"
    "# hostman:end\n"
    "10.0.0.1\tfoo\n"
)


@pytest.fixture()
def hosts_file(tmp_path: Path) -> Path:
    """A hosts file with an existing managed block."""
    path = tmp_path / "hosts"
    path.write_text(SAMPLE_HOSTS, encoding="utf-8")
    return path


@pytest.fixture()
def memory_store() -> Iterator[TableStore]:
    store = TableStore(":memory:")
    try:
        yield store
    finally:
        store.close()


class FakeClient:
    """Stands in for ``SyncClient`` and records every call."""

    def __init__(self, table: Table | None = None, error: Exception | None = None):
        self.table = table or Table()
        self.error = error
        self.calls: list[tuple] = []

    def report(self, hostname: str, ip: str) -> Table:
        self.calls.append(("report", hostname, ip))
        if self.error:
            raise self.error
        self.table.upsert(hostname, ip)
        return Table(host_mapping=dict(self.table.host_mapping))

    def fetch(self) -> Table:
        self.calls.append(("fetch",))
        if self.error:
            raise self.error
        return Table(host_mapping=dict(self.table.host_mapping))


@pytest.fixture()
def fake_client() -> FakeClient:
    return FakeClient()


@pytest.fixture()
def box1_report() -> SelfReport:
    return SelfReport(host="box1", ips=["192.168.1.5", "10.8.0.2"])
