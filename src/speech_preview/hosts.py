"""Filesystem audio host for running the form outside a browser.

Playable handles are temporary ``.mp3`` files that any media player can
open; a download is written into a chosen directory.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


class DirectoryHost:
    """AudioHost backed by temporary files and a downloads directory.

    Parameters
    ----------
    download_dir:
        Where finalized audio is saved.  Created on first use.
    scratch_dir:
        Where preview files live.  Defaults to the system temp directory.
    """

    def __init__(self, download_dir: str | Path, scratch_dir: str | Path | None = None) -> None:
        self.download_dir = Path(download_dir)
        self.scratch_dir = Path(scratch_dir) if scratch_dir is not None else None
        self._handles: set[Path] = set()

    @property
    def open_handles(self) -> frozenset[Path]:
        return frozenset(self._handles)

    def create_playable_handle(self, audio: bytes) -> Path:
        with tempfile.NamedTemporaryFile(
            prefix="speech-preview-", suffix=".mp3", dir=self.scratch_dir, delete=False
        ) as tmp:
            tmp.write(audio)
            path = Path(tmp.name)
        self._handles.add(path)
        return path

    def release(self, handle: Path) -> None:
        self._handles.discard(handle)
        handle.unlink(missing_ok=True)

    def persist(self, audio: bytes, filename: str) -> Path:
        self.download_dir.mkdir(parents=True, exist_ok=True)
        target = self.download_dir / Path(filename).name
        target.write_bytes(audio)
        logger.info("Saved %d bytes to %s", len(audio), target)
        return target
