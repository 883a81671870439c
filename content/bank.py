"""content.bank

The content bank: an enumerable, static collection of scenarios plus the
distinguished filler ("nothing happened") scenario.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, List, Mapping, Optional, Sequence, Union

from .schemas import Scenario, scenario_from_dict

FILLER_TITLE = "An Uneventful Week"


@dataclass(frozen=True)
class ContentBank:
    scenarios: List[Scenario]
    filler: Scenario

    def __iter__(self) -> Iterator[Scenario]:
        return iter(self.scenarios)

    def __len__(self) -> int:
        return len(self.scenarios)

    def get(self, title: str) -> Optional[Scenario]:
        if title == self.filler.title:
            return self.filler
        return next((s for s in self.scenarios if s.title == title), None)

    def is_filler(self, scenario: Scenario) -> bool:
        return scenario.title == self.filler.title


def bank_from_records(records: Sequence[Mapping[str, Any]], filler: Mapping[str, Any]) -> ContentBank:
    scenarios = [scenario_from_dict(r) for r in records]
    titles = [s.title for s in scenarios]
    dupes = sorted({t for t in titles if titles.count(t) > 1})
    if dupes:
        raise ValueError(f"duplicate scenario titles: {dupes}")
    return ContentBank(scenarios=scenarios, filler=scenario_from_dict(filler))


def load_bank(path: Union[str, Path]) -> ContentBank:
    """Load a bank from JSON: {"filler": {...}, "scenarios": [{...}, ...]}."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict) or "scenarios" not in data:
        raise ValueError("bank file must be an object with a 'scenarios' list")
    return bank_from_records(list(data.get("scenarios") or []), data.get("filler") or _default_filler())


def _default_filler() -> Mapping[str, Any]:
    from .scenarios import FILLER

    return FILLER


def default_bank() -> ContentBank:
    from .scenarios import FILLER, SCENARIOS

    return bank_from_records(SCENARIOS, FILLER)
