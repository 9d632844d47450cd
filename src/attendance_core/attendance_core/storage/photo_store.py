from __future__ import annotations

import base64
import binascii
import logging
import re
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

_DATA_URL_PREFIX = re.compile(r"^data:image/\w+;base64,")


class PhotoStore(Protocol):
    def write(self, key: str, data: bytes) -> str:
        """Persist ``data`` under ``key`` and return its reference path."""
        raise NotImplementedError


def decode_image_payload(image: str) -> bytes:
    """Decode a base64 payload, with or without a ``data:image/...`` prefix."""
    try:
        return base64.b64decode(_DATA_URL_PREFIX.sub("", image.strip()), validate=False)
    except (binascii.Error, ValueError) as e:
        raise ValueError("image payload is not valid base64") from e


class LocalPhotoStore(PhotoStore):
    """Writes photos below ``base_dir``; references are relative to its parent."""

    def __init__(self, base_dir: str | Path, *, prefix: str = "uploads/images"):
        self._base_dir = Path(base_dir)
        self._prefix = prefix.strip("/")

    def reference_for(self, key: str) -> str:
        return f"{self._prefix}/{key}"

    def write(self, key: str, data: bytes) -> str:
        self._base_dir.mkdir(parents=True, exist_ok=True)
        (self._base_dir / key).write_bytes(data)
        return self.reference_for(key)


class BackgroundPhotoWriter:
    """Fire-and-forget photo writes on a small thread pool.

    ``submit`` returns immediately; decoding and storage happen on a worker
    thread and failures are logged, never raised to the request that
    triggered them.
    """

    def __init__(self, store: PhotoStore, *, max_workers: int = 2, prefix: str = "uploads/images"):
        self._store = store
        self._prefix = prefix.strip("/")
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="photo-writer")

    def reference_for(self, key: str) -> str:
        return f"{self._prefix}/{key}"

    def submit(self, key: str, image: str) -> Future:
        future = self._executor.submit(self._write, key, image)
        future.add_done_callback(self._log_failure)
        return future

    def _write(self, key: str, image: str) -> str:
        return self._store.write(key, decode_image_payload(image))

    @staticmethod
    def _log_failure(future: Future) -> None:
        error = future.exception()
        if error is not None:
            logger.error("photo write failed: %s", error, exc_info=error)

    def shutdown(self, *, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
