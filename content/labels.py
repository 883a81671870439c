"""content.labels

Record-label reference data. Signing copies one of these into
GameState.current_label; the terms are stored, not simulated.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from core.state import RecordLabel

LABELS: List[RecordLabel] = [
    RecordLabel(
        id="INDIE",
        name="Vinyl Heart Records",
        type="indie",
        tier=1,
        advance=5_000,
        royalty_rate=15,
        term_years=3,
        creative_control=85,
        recoupment_rate=70,
        album_commitment=2,
    ),
    RecordLabel(
        id="DISTRIBUTION_ONLY",
        name="DistroFlow Digital",
        type="indie",
        tier=1,
        advance=0,
        royalty_rate=85,
        term_years=2,
        creative_control=100,
        recoupment_rate=0,
        album_commitment=1,
    ),
    RecordLabel(
        id="MAJOR_ROYALTIES",
        name="Visionary Music Group",
        type="major",
        tier=2,
        advance=50_000,
        royalty_rate=18,
        term_years=5,
        creative_control=70,
        recoupment_rate=80,
        album_commitment=3,
    ),
    RecordLabel(
        id="360_DEAL",
        name="Empire Sound Entertainment",
        type="major",
        tier=2,
        advance=100_000,
        royalty_rate=10,
        term_years=6,
        creative_control=40,
        recoupment_rate=100,
        album_commitment=4,
        cross_collateralized=True,
        option_clause=True,
    ),
    RecordLabel(
        id="MAJOR_ADVANCE",
        name="Global Records",
        type="major",
        tier=2,
        advance=250_000,
        royalty_rate=8,
        term_years=7,
        creative_control=25,
        recoupment_rate=100,
        album_commitment=5,
        cross_collateralized=True,
        option_clause=True,
    ),
]

_BY_ID: Dict[str, RecordLabel] = {label.id: label for label in LABELS}


def get_label(label_id: Optional[str]) -> Optional[RecordLabel]:
    if not label_id:
        return None
    return _BY_ID.get(str(label_id)) or next((l for l in LABELS if l.name == label_id), None)
