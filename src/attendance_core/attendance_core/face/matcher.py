"""Face descriptor parsing and bounded-distance matching.

Descriptors arrive as native sequences, JSON array strings, comma-separated
strings or packed float32 bytes. Parsing is lenient on purpose: every element
is coerced to a number and anything non-numeric becomes 0. Only a structural
problem (not a flat list, too short, undecodable) yields ``None``.
"""

from __future__ import annotations

import json
import math
from typing import Optional

import numpy as np

from ..core.constants import FACE_MATCH_THRESHOLD, MIN_DESCRIPTOR_LENGTH

# Components summed between threshold checks.
_BLOCK = 16


def _coerce(value: object) -> Optional[float]:
    """Element coercion; None means the element is nested (not flat)."""
    if isinstance(value, (list, tuple, dict, set, np.ndarray)):
        return None
    if isinstance(value, (bool, int, float, np.number)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
    elif value is None:
        return 0.0
    else:
        try:
            number = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return 0.0
    return number if math.isfinite(number) else 0.0


def _elements(raw: object) -> Optional[list]:
    if isinstance(raw, np.ndarray):
        return raw.tolist() if raw.ndim == 1 else None
    if isinstance(raw, (list, tuple)):
        return list(raw)
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        if text.startswith("["):
            try:
                decoded = json.loads(text)
            except ValueError:
                return None
            return decoded if isinstance(decoded, list) else None
        return text.split(",")
    return None


def parse_descriptor(raw: object, *, min_length: int = MIN_DESCRIPTOR_LENGTH) -> Optional[np.ndarray]:
    """Parse ``raw`` into a flat float32 vector, or None when unparseable."""
    if raw is None:
        return None

    if isinstance(raw, (bytes, bytearray, memoryview)):
        buf = bytes(raw)
        if not buf or len(buf) % 4:
            return None
        vec = np.frombuffer(buf, dtype=np.float32).copy()
        vec[~np.isfinite(vec)] = 0.0
        return vec if vec.size >= min_length else None

    items = _elements(raw)
    if items is None:
        return None

    numbers = []
    for item in items:
        number = _coerce(item)
        if number is None:
            return None
        numbers.append(number)

    if len(numbers) < min_length:
        return None
    return np.asarray(numbers, dtype=np.float32)


def squared_distance_with_early_exit(a: Optional[np.ndarray], b: Optional[np.ndarray], threshold_sq: float) -> float:
    """Squared euclidean distance, or ``inf`` once it exceeds ``threshold_sq``.

    Missing vectors and length mismatches return ``inf`` straight away. The
    running sum is checked every few components and the remaining ones are
    never read after it crosses the threshold.
    """
    if a is None or b is None or len(a) != len(b):
        return math.inf

    total = 0.0
    for start in range(0, len(a), _BLOCK):
        diff = np.asarray(a[start:start + _BLOCK], dtype=np.float64) - np.asarray(b[start:start + _BLOCK], dtype=np.float64)
        for d in diff.tolist():
            total += d * d
            if total > threshold_sq:
                return math.inf
    return total


def is_match(a: Optional[np.ndarray], b: Optional[np.ndarray], *, threshold: float = FACE_MATCH_THRESHOLD) -> bool:
    return squared_distance_with_early_exit(a, b, threshold * threshold) != math.inf


def descriptor_supplied(raw: object) -> bool:
    """False for None and empty payloads; never evaluates an array's truth value."""
    if raw is None:
        return False
    if isinstance(raw, np.ndarray):
        return raw.size > 0
    if isinstance(raw, str):
        return bool(raw.strip())
    if isinstance(raw, (bytes, bytearray, memoryview, list, tuple)):
        return len(raw) > 0
    return True
