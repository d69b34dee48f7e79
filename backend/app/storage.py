"""Ephemeral on-disk storage for uploaded answer files.

Files live in a process-local temporary directory. The hosting platform may
reclaim it at any time, so nothing here is durable.
"""
import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional

from starlette.concurrency import run_in_threadpool

from .errors import NotFoundError, PersistenceError
from .utils import make_stored_file_name


logger = logging.getLogger(__name__)


@dataclass
class StoredFile:
    """Result of saving an upload."""
    file_name: str
    file_path: str
    mime_type: Optional[str]


class UploadStorage:
    """Save, look up and remove files under the upload directory."""

    def __init__(self, upload_dir: str):
        self.upload_dir = Path(upload_dir)

    def ensure_directory(self) -> None:
        """Create the upload directory if absent."""
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    async def save(self, original_name: str, source: BinaryIO, mime_type: Optional[str]) -> StoredFile:
        """Stream an upload to disk under a timestamp-prefixed name."""
        # Only the final path component is kept so the file stays in upload_dir.
        file_name = make_stored_file_name(Path(original_name).name)
        path = self.upload_dir / file_name
        try:
            await run_in_threadpool(self._write, path, source)
        except OSError as e:
            raise PersistenceError("Error uploading answer", str(e)) from e

        return StoredFile(file_name=file_name, file_path=str(path), mime_type=mime_type)

    def _write(self, path: Path, source: BinaryIO) -> None:
        self.ensure_directory()
        source.seek(0)
        with open(path, "wb") as target:
            shutil.copyfileobj(source, target)

    def resolve(self, file_name: str) -> Path:
        """Return the path of a stored file.

        Raises:
            NotFoundError: the file is missing or the name points outside upload_dir
        """
        root = self.upload_dir.resolve()
        path = (self.upload_dir / file_name).resolve()
        if path.parent != root or not path.is_file():
            raise NotFoundError(
                "File not found. It may have been cleared from temporary storage."
            )
        return path

    def remove_quietly(self, file_path: Optional[str]) -> None:
        """Best-effort delete; failures are logged and never raised."""
        if not file_path or not os.path.exists(file_path):
            return
        try:
            os.remove(file_path)
            logger.info("Deleted temp file %s", file_path)
        except OSError as e:
            logger.error("Error deleting temp file %s: %s", file_path, e)
