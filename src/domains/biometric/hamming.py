"""Bit-level distances between binary feature descriptors."""

import math
from collections.abc import Sequence

import numpy as np

# Set-bit count of every byte value
POPCOUNT = np.array([bin(i).count("1") for i in range(256)], dtype=np.uint8)

# Upper bound on bytes in one XOR block; template rows are processed in chunks
CHUNK_BYTES = 4 * 1024 * 1024


def hamming_distance(a: bytes, b: bytes) -> float:
    """Count of differing bits between two byte strings.

    Descriptors of different lengths cannot be compared and are infinitely
    far apart, so they never win a nearest-neighbour search.
    """
    if len(a) != len(b):
        return math.inf
    xor = np.bitwise_xor(
        np.frombuffer(a, dtype=np.uint8), np.frombuffer(b, dtype=np.uint8)
    )
    return float(POPCOUNT[xor].sum(dtype=np.int64))


def _pack(descriptors: Sequence[bytes], length: int) -> np.ndarray:
    packed = np.frombuffer(b"".join(descriptors), dtype=np.uint8)
    return packed.reshape(len(descriptors), length)


def _chunk_rows(live_count: int, length: int) -> int:
    return max(1, CHUNK_BYTES // max(1, live_count * length))


def nearest_distances(template: Sequence[bytes], live: Sequence[bytes]) -> np.ndarray:
    """Minimum Hamming distance from each template descriptor to any live one.

    Returns a float array aligned with ``template``. Entries are ``inf`` when
    no live descriptor shares the template descriptor's length (including
    when ``live`` is empty).
    """
    best = np.full(len(template), np.inf)
    if not template or not live:
        return best

    live_by_length: dict[int, list[bytes]] = {}
    for d in live:
        live_by_length.setdefault(len(d), []).append(d)

    template_by_length: dict[int, list[int]] = {}
    for idx, d in enumerate(template):
        template_by_length.setdefault(len(d), []).append(idx)

    for length, indices in template_by_length.items():
        candidates = live_by_length.get(length)
        if not candidates:
            continue
        t = _pack([template[i] for i in indices], length)
        lv = _pack(candidates, length)
        rows = _chunk_rows(len(candidates), length)
        for start in range(0, len(indices), rows):
            block = t[start : start + rows]
            # (rows, 1, n) ^ (1, |L|, n) -> (rows, |L|, n) byte-wise XOR
            xor = np.bitwise_xor(block[:, None, :], lv[None, :, :])
            distances = POPCOUNT[xor].sum(axis=2, dtype=np.int32)
            best[indices[start : start + rows]] = distances.min(axis=1)

    return best
