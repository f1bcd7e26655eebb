"""JSON-file-backed implementation of PersistenceGateway.

Each collection lives in ``<data_dir>/<collection>.json`` as a JSON list.
Writes go to temporary files first.  Targets are replaced only once
every file of a save has been written, so a failed save leaves the
previous snapshots in place.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from grocer.domain.exceptions import CollectionNotFoundError, PersistenceError
from grocer.domain.repository.persistence_gateway import PersistenceGateway

logger = logging.getLogger(__name__)


class JsonGateway(PersistenceGateway):

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = Path(data_dir)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    # --- PersistenceGateway interface -----------------------------------------

    def save(self, collection: str, records: list[dict]) -> None:
        self.save_many({collection: records})

    def save_many(self, snapshots: dict[str, list[dict]]) -> None:
        payloads = [
            (self._path_for(collection), self._encode(collection, records))
            for collection, records in snapshots.items()
        ]

        staged: list[tuple[Path, Path]] = []
        try:
            for target, payload in payloads:
                staged.append((self._write_temp(target, payload), target))
            for tmp, target in staged:
                os.replace(tmp, target)
        except OSError as exc:
            for tmp, _ in staged:
                tmp.unlink(missing_ok=True)
            raise PersistenceError(f"Error saving data to {self._data_dir}: {exc}") from exc

        for collection, records in snapshots.items():
            logger.debug("Saved %d record(s) to %s", len(records), self._path_for(collection))

    def load(self, collection: str) -> list[dict]:
        source = self._path_for(collection)
        if not source.exists():
            raise CollectionNotFoundError(f"File not found: {source}")

        try:
            raw = json.loads(source.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise PersistenceError(f"Error loading data from {source}: {exc}") from exc

        if not isinstance(raw, list) or not all(isinstance(r, dict) for r in raw):
            raise PersistenceError(f"Error loading data from {source}: expected a list of records")

        logger.debug("Loaded %d record(s) from %s", len(raw), source)
        return raw

    # --- File helpers ---------------------------------------------------------

    @staticmethod
    def _encode(collection: str, records: list[dict]) -> str:
        try:
            return json.dumps(records, indent=2) + "\n"
        except (TypeError, ValueError) as exc:
            raise PersistenceError(f"Cannot encode '{collection}': {exc}") from exc

    @staticmethod
    def _write_temp(target: Path, payload: str) -> Path:
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{target.stem}.", suffix=".tmp", dir=target.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        return Path(tmp_name)

    def _path_for(self, collection: str) -> Path:
        if not collection or not collection.replace("_", "").isalnum():
            raise PersistenceError(f"Invalid collection name: {collection!r}")
        return self._data_dir / f"{collection}.json"
