from __future__ import annotations

import json
import math

import numpy as np
import pytest

from src.attendance_core.attendance_core.face.matcher import (
    descriptor_supplied,
    is_match,
    parse_descriptor,
    squared_distance_with_early_exit,
)

THRESHOLD_SQ = 0.6 * 0.6


def _vec(values):
    return np.asarray(values, dtype=np.float32)


@pytest.mark.parametrize(
    "raw",
    [
        [0.25] * 128,
        tuple([0.25] * 128),
        json.dumps([0.25] * 128),
        ",".join(["0.25"] * 128),
        np.full(128, 0.25, dtype=np.float32).tobytes(),
        np.full(128, 0.25),
    ],
)
def test_parse_accepts_every_supported_shape(raw):
    vec = parse_descriptor(raw)
    assert vec is not None
    assert vec.dtype == np.float32
    assert vec.shape == (128,)
    assert float(vec[0]) == pytest.approx(0.25)


def test_parse_coerces_non_numeric_elements_to_zero():
    raw = [0.5] * 40
    raw[3] = "abc"
    raw[4] = None
    vec = parse_descriptor(raw)
    assert vec is not None
    assert vec[3] == 0.0
    assert vec[4] == 0.0
    assert vec[5] == pytest.approx(0.5)


@pytest.mark.parametrize(
    "raw",
    [
        None,
        "",
        "not json [",
        "[1, 2",
        {"a": 1},
        [[0.1] * 128],
        [0.1] * 31,
        b"\x00\x01\x02",
        42,
    ],
)
def test_parse_returns_none_for_structurally_invalid_input(raw):
    assert parse_descriptor(raw) is None


def test_self_match():
    v = parse_descriptor([0.3, -0.2, 0.9, 0.0] * 32)
    assert is_match(v, v)
    assert squared_distance_with_early_exit(v, v, THRESHOLD_SQ) == 0.0


def test_distance_is_symmetric():
    rng = np.random.default_rng(7)
    a = rng.normal(0, 0.01, 128).astype(np.float32)
    b = rng.normal(0, 0.01, 128).astype(np.float32)
    assert squared_distance_with_early_exit(a, b, THRESHOLD_SQ) == squared_distance_with_early_exit(b, a, THRESHOLD_SQ)


def test_early_exit_agrees_with_full_sum():
    rng = np.random.default_rng(11)
    for _ in range(200):
        a = rng.normal(0, 0.05, 128).astype(np.float32)
        b = rng.normal(0, 0.05, 128).astype(np.float32)
        full = float(np.sum((a.astype(np.float64) - b.astype(np.float64)) ** 2))
        result = squared_distance_with_early_exit(a, b, THRESHOLD_SQ)
        if full > THRESHOLD_SQ:
            assert result == math.inf
        else:
            assert result == pytest.approx(full)


def test_early_exit_inside_first_block():
    a = _vec([0.0] * 128)
    b = _vec([1.0] + [0.0] * 127)
    assert squared_distance_with_early_exit(a, b, THRESHOLD_SQ) == math.inf


def test_length_mismatch_is_no_match_and_never_raises():
    assert is_match(_vec([1, 2, 3]), _vec([1, 2])) is False
    assert is_match([1, 2, 3], [1, 2]) is False
    assert squared_distance_with_early_exit(None, _vec([1.0]), THRESHOLD_SQ) == math.inf


def test_threshold_is_tunable():
    a = _vec([0.0] * 64)
    b = _vec([0.1] * 64)  # squared distance 0.64
    assert not is_match(a, b, threshold=0.6)
    assert is_match(a, b, threshold=0.9)


@pytest.mark.parametrize("raw", [None, "", "  ", [], (), b"", np.array([], dtype=np.float32)])
def test_descriptor_supplied_is_false_for_empty_payloads(raw):
    assert descriptor_supplied(raw) is False


@pytest.mark.parametrize("raw", [[0.1] * 128, "0.1,0.2", b"\x00\x00\x80?", _vec([0.1] * 128)])
def test_descriptor_supplied_never_needs_array_truthiness(raw):
    assert descriptor_supplied(raw) is True
