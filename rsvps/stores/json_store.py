"""JSON file implementation of the SnapshotStore."""

import json
import logging
import os
import tempfile
from pathlib import Path

from django.conf import settings

from rsvps.domain import Snapshot
from rsvps.domain.errors import StorageError
from rsvps.stores.codec import decode_snapshot, encode_snapshot
from rsvps.stores.interfaces import SnapshotStore

logger = logging.getLogger(__name__)

DEFAULT_DATA_FILE = "rsvp-data.json"


class JsonFileSnapshotStore(SnapshotStore):
    """Single-file store; every save rewrites the whole document."""

    def __init__(self, storage_dir: str | os.PathLike | None = None) -> None:
        if storage_dir is None:
            storage_dir = getattr(settings, "RSVP_STORAGE_DIR", None) or Path.cwd() / "data"
        self.storage_path = Path(storage_dir)
        self.data_file = self.storage_path / getattr(
            settings, "RSVP_DATA_FILE", DEFAULT_DATA_FILE
        )

    def load(self) -> Snapshot:
        if not self.data_file.exists():
            logger.debug("No snapshot at %s, starting empty", self.data_file)
            return Snapshot()

        try:
            with self.data_file.open(encoding="utf-8") as fh:
                document = json.load(fh)
        except (OSError, ValueError) as exc:
            raise StorageError(f"Failed to load data: {exc}") from exc
        return decode_snapshot(document)

    def save(self, snapshot: Snapshot) -> None:
        document = encode_snapshot(snapshot)
        try:
            self.storage_path.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.storage_path, prefix=".rsvp-", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(document, fh, indent=2)
                os.replace(tmp_name, self.data_file)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageError(f"Failed to save data: {exc}") from exc
        logger.debug("Saved snapshot to %s", self.data_file)
