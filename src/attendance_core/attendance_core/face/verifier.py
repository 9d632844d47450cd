from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Hashable, Optional

import numpy as np

from ..core.constants import FACE_MATCH_THRESHOLD
from .cache import DescriptorCache
from .matcher import parse_descriptor, squared_distance_with_early_exit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FaceCheck:
    matched: bool
    cause: str = ""


class FaceVerifier:
    """Compare an incoming descriptor against an employee's stored one.

    Stored descriptors are parsed once per employee and kept in
    ``stored_cache``. Incoming descriptors are single-use and go through
    ``incoming_cache`` with no key, which skips caching.

    Callers only see matched / not matched. The cause (missing stored data,
    unparseable input, distance) is logged, not returned to end users.
    """

    def __init__(
        self,
        *,
        stored_cache: DescriptorCache[np.ndarray] | None = None,
        incoming_cache: DescriptorCache[np.ndarray] | None = None,
        threshold: float = FACE_MATCH_THRESHOLD,
    ):
        self._stored_cache = stored_cache if stored_cache is not None else DescriptorCache()
        self._incoming_cache = incoming_cache if incoming_cache is not None else DescriptorCache()
        self._threshold_sq = float(threshold) * float(threshold)

    def stored_descriptor(self, key: Hashable, raw: object) -> Optional[np.ndarray]:
        return self._stored_cache.get_or_parse(key, raw, parse_descriptor)

    def verify(self, *, key: Hashable, stored_raw: object, incoming_raw: object) -> FaceCheck:
        stored = self.stored_descriptor(key, stored_raw)
        if stored is None:
            logger.warning("face check failed for %s: stored descriptor missing or unparseable", key)
            return FaceCheck(matched=False, cause="stored-missing")

        incoming = self._incoming_cache.get_or_parse(None, incoming_raw, parse_descriptor)
        if incoming is None:
            logger.info("face check failed for %s: incoming descriptor unparseable", key)
            return FaceCheck(matched=False, cause="incoming-unparseable")

        if len(stored) != len(incoming):
            logger.warning(
                "face check failed for %s: length mismatch (stored=%d incoming=%d)", key, len(stored), len(incoming)
            )
            return FaceCheck(matched=False, cause="length-mismatch")

        if squared_distance_with_early_exit(stored, incoming, self._threshold_sq) == float("inf"):
            logger.info("face check failed for %s: distance above threshold", key)
            return FaceCheck(matched=False, cause="distance")

        return FaceCheck(matched=True)
