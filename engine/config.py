"""engine.config

Engine configuration passed from the host (UI, runner or tests).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "MUSICSIM_"


@dataclass(frozen=True)
class EngineConfig:
    base_seed: int
    random_events: bool = True
    history_interval_weeks: int = 4
    max_log_entries: int = 100
    fallback_limit: int = 3
    recency_window: int = 11
    label_offer_lookback: int = 5
    scenario_delay_seconds: float = 0.5
    data_dir: str = ".musicsim"


def _env_bool(raw: Optional[str], default: bool) -> bool:
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def config_from_env(env: Optional[Mapping[str, str]] = None, *, base_seed: Optional[int] = None) -> EngineConfig:
    """Build an EngineConfig from MUSICSIM_* variables (missing ones keep defaults)."""
    env = os.environ if env is None else env
    defaults = EngineConfig(base_seed=0)

    def get(name: str) -> Optional[str]:
        return env.get(ENV_PREFIX + name)

    seed = base_seed if base_seed is not None else int(get("SEED") or 0)
    return EngineConfig(
        base_seed=int(seed),
        random_events=_env_bool(get("RANDOM_EVENTS"), defaults.random_events),
        history_interval_weeks=int(get("HISTORY_INTERVAL_WEEKS") or defaults.history_interval_weeks),
        max_log_entries=int(get("MAX_LOG_ENTRIES") or defaults.max_log_entries),
        fallback_limit=int(get("FALLBACK_LIMIT") or defaults.fallback_limit),
        recency_window=int(get("RECENCY_WINDOW") or defaults.recency_window),
        label_offer_lookback=int(get("LABEL_OFFER_LOOKBACK") or defaults.label_offer_lookback),
        scenario_delay_seconds=float(get("SCENARIO_DELAY_SECONDS") or defaults.scenario_delay_seconds),
        data_dir=str(get("DATA_DIR") or defaults.data_dir),
    )
