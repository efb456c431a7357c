"""One synchronization cycle of the hostman agent.

read file -> parse -> locate managed region -> report/fetch -> render -> write

The cycle is strictly sequential. Every step that can fail runs before the
file is opened for writing, so a failed cycle leaves the file untouched.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from .client import SyncClient
from .exceptions import ErrorHandler, NetworkError, ParseError, WriteError
from .interfaces import discover_self_report
from .parsing import Document, parse_document
from .region import ManagedRegion, locate_region
from .render import render_document
from .table import SelfReport, Table, extract_table

logger = logging.getLogger("hostman.agent")

__all__ = ["SyncAgent", "SyncResult", "read_hosts"]


@dataclass
class SyncResult:
    """Outcome of one sync cycle."""

    local: Table
    remote: Table
    reported: bool
    changed: bool
    rendered: str


def read_hosts(hosts_file: Path) -> tuple[str, Document, Optional[ManagedRegion]]:
    """Read and parse *hosts_file*, returning its text, document and region."""
    try:
        text = Path(hosts_file).read_bytes().decode("utf-8")
    except UnicodeDecodeError as e:
        raise ParseError(0, f"{hosts_file} is not valid UTF-8", {"original_error": str(e)}) from e
    except OSError as e:
        raise ParseError(0, f"Cannot read {hosts_file}: {e.strerror or e}") from e

    document = parse_document(text)
    return text, document, locate_region(document)


class SyncAgent:
    """Keeps one hosts file in step with the hostman service."""

    def __init__(
        self,
        hosts_file: Path,
        client: SyncClient,
        discover: Callable[[], Optional[SelfReport]] = discover_self_report,
    ) -> None:
        self.hosts_file = Path(hosts_file)
        self.client = client
        self.discover = discover
        self.error_handler = ErrorHandler(logger)

    def _backup(self) -> None:
        backup_path = self.hosts_file.with_name(self.hosts_file.name + ".bak")
        try:
            shutil.copy2(self.hosts_file, backup_path)
        except OSError as e:
            self.error_handler.log_and_raise(
                WriteError, f"Cannot back up to {backup_path}", e, {"path": str(backup_path)}
            )
        logger.debug(f"Backed up original to {backup_path}")

    def run(self, dry_run: bool = False, backup: bool = False) -> SyncResult:
        """Run one sync cycle."""
        logger.info(f"🔄 Syncing {self.hosts_file}")
        original, document, region = read_hosts(self.hosts_file)
        local = extract_table(document, region)
        local.current = self.discover()

        if local.current is not None:
            remote = self.client.report(local.current.host, local.current.primary_ip)
            reported = True
        else:
            remote = self.client.fetch()
            reported = False
        logger.info(f"📦 Received {len(remote)} entries from service")

        try:
            remote.validate()
        except ValueError as e:
            self.error_handler.log_and_raise(
                NetworkError, "Service returned an entry that cannot be written", e
            )

        rendered = render_document(document, region, remote)
        changed = rendered != original

        if dry_run:
            logger.info("Dry run: not writing hosts file")
        elif not changed:
            logger.info("✅ Hosts file already up to date")
        else:
            if backup:
                self._backup()
            try:
                self.hosts_file.write_bytes(rendered.encode("utf-8"))
            except OSError as e:
                self.error_handler.log_and_raise(
                    WriteError, f"Cannot write {self.hosts_file}", e, {"path": str(self.hosts_file)}
                )
            logger.info(f"✅ Wrote {len(remote)} managed entries to {self.hosts_file}")

        return SyncResult(
            local=local,
            remote=remote,
            reported=reported,
            changed=changed,
            rendered=rendered,
        )
