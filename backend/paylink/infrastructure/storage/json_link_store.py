"""Single-file JSON store for payment links.

Storage layout:
    <storage_path>    — one JSON object: {"<id>": {"amount", "createdAt", "expiresAt"}}

The whole mapping is rewritten on every mutation; there is no append log and
no partial update. Writes go to a sibling temp file that is then renamed over
the target, so readers see either the old or the new document.
"""

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from anyio import to_thread

from paylink.application.interfaces import PaymentLinkRepository
from paylink.domain.entities import PaymentLink
from paylink.domain.exceptions import DuplicateEntityError, StorageError

logger = logging.getLogger(__name__)


def _read_document(path: Path) -> dict[str, Any] | None:
    """Return the decoded document, or None when the file does not exist yet."""
    try:
        raw = path.read_text("utf-8")
    except FileNotFoundError:
        return None
    return json.loads(raw)


def _write_document(path: Path, document: dict[str, Any]) -> None:
    """Serialize ``document`` next to ``path`` and atomically swap it in."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(document, fh, indent=2)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class JsonFileLinkStore(PaymentLinkRepository):
    """Implements the PaymentLinkRepository port on top of one JSON file.

    All access goes through a single ``asyncio.Lock`` so ``create``'s
    load → check → persist sequence is atomic with respect to every other
    call on the same instance. One instance per file per process.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    # ── Whole-mapping I/O ───────────────────────────────────────────

    async def load(self) -> dict[str, PaymentLink]:
        """Read the full mapping. A missing file is an empty mapping."""
        try:
            document = await to_thread.run_sync(_read_document, self._path)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.error("Could not read %s: %s", self._path, exc)
            raise StorageError(str(self._path), str(exc)) from exc

        if document is None:
            logger.debug("No store at %s yet, starting empty", self._path)
            return {}
        if not isinstance(document, dict):
            raise StorageError(str(self._path), "top-level JSON value is not an object")

        mapping: dict[str, PaymentLink] = {}
        for link_id, entry in document.items():
            if not isinstance(entry, dict):
                raise StorageError(str(self._path), f"entry '{link_id}' is not an object")
            try:
                mapping[link_id] = PaymentLink.from_document(link_id, entry)
            except (KeyError, TypeError, ValueError, OverflowError) as exc:
                raise StorageError(str(self._path), f"entry '{link_id}' is malformed: {exc}") from exc
        return mapping

    async def persist(self, mapping: dict[str, PaymentLink]) -> None:
        """Atomically overwrite the file with the full serialized mapping."""
        document = {link_id: link.to_document() for link_id, link in mapping.items()}
        try:
            await to_thread.run_sync(_write_document, self._path, document)
        except OSError as exc:
            logger.error("Could not write %s: %s", self._path, exc)
            raise StorageError(str(self._path), str(exc)) from exc
        logger.debug("Persisted %d payment links to %s", len(document), self._path)

    # ── Repository port ─────────────────────────────────────────────

    async def get_by_id(self, link_id: str) -> PaymentLink | None:
        async with self._lock:
            mapping = await self.load()
        return mapping.get(link_id)

    async def get_all(self) -> dict[str, PaymentLink]:
        async with self._lock:
            return await self.load()

    async def create(self, link: PaymentLink) -> PaymentLink:
        async with self._lock:
            mapping = await self.load()
            if link.id in mapping:
                raise DuplicateEntityError("PaymentLink", "id", link.id)
            mapping[link.id] = link
            await self.persist(mapping)
        logger.info("Stored payment link %s in %s", link.id, self._path)
        return link
