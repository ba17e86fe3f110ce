"""
Network Design Kernel — Cabling Guide Deriver

Pure projection of topology links onto a cabling bill of materials.
"""

from __future__ import annotations

from typing import Sequence, Tuple

from .domain_types import CablingEntry, MediaType, TopologyLink

FIBER_CABLE = "Fiber Optic"
COPPER_CABLE = "Copper Straight-Through"


def cable_type(media: MediaType) -> str:
    return FIBER_CABLE if media is MediaType.FIBER else COPPER_CABLE


def derive_cabling_guide(links: Sequence[TopologyLink]) -> Tuple[CablingEntry, ...]:
    """One entry per link, in link order."""
    return tuple(
        CablingEntry(from_id=l.source_id, to_id=l.target_id, cable_type=cable_type(l.media_type))
        for l in links
    )
