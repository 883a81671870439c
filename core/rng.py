"""
core.rng
Seeded RNG for the turn engine.

engine.pipeline builds one Random per accepted action from
(base_seed, kind, action_seq): kind names the draw ("turn", "scenario",
"terminate", "project", "game-id") and action_seq is the count of accepted
actions so far. Two draws of different kinds in the same action never share a
stream, and a career replays exactly from its seed plus its action log.
"""

from __future__ import annotations

import hashlib
import json
import random
from typing import Any


def stable_int_seed(*parts: Any, salt: str = "musicsim") -> int:
    """Hash (salt, parts) to a 32-bit seed.

    Python's hash() is salted per process, so seeds go through SHA-256 of the
    parts as JSON instead; dates and other values fall back to str().
    """
    payload = json.dumps(parts, sort_keys=True, ensure_ascii=False, separators=(",", ":"), default=str)
    h = hashlib.sha256((salt + "|" + payload).encode("utf-8")).digest()
    return int.from_bytes(h[:4], "big", signed=False)


def rng_from(*parts: Any, base_seed: int) -> random.Random:
    """Random for one draw site, e.g. rng_from("turn", state.action_seq, base_seed=cfg.base_seed)."""
    return random.Random(stable_int_seed(base_seed, *parts))


def weighted_index(weights: list, rng: random.Random) -> int:
    """Draw an index uniformly over the cumulative weight sum."""
    total = float(sum(weights))
    if total <= 0:
        return rng.randrange(len(weights))
    roll = rng.random() * total
    acc = 0.0
    for i, w in enumerate(weights):
        acc += float(w)
        if roll < acc:
            return i
    return len(weights) - 1
