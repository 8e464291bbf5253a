#!/usr/bin/env python3
# src/sse_stream_server/randomness.py
"""Deterministic pseudo-random payload strings.

Resuming a stream at cursor ``n`` must reproduce the value the server would
have sent originally, so the generator is a pure function of its seed.
"""

import random
import string

ALPHABET = string.ascii_letters + string.digits


def generate_random_string(seed: int, length: int) -> str:
    """Return ``length`` alphanumeric characters derived only from ``seed``."""
    if length < 0:
        raise ValueError(f"length must be non-negative, got {length}")
    rng = random.Random(seed)
    return "".join(rng.choices(ALPHABET, k=length))
