"""
Deterministic RNG — Seeded random wrapper.

All randomness in the generator passes through a single DeterministicRNG
instance. Identical (seed) → identical call sequence → identical results.
"""

from __future__ import annotations

import random

from net_kernel.constants import DMZ_RANGE, ROUTED_BASE_RANGE, SOHO_BASE_RANGE
from net_kernel.domain_types import AddressPlan, Tier


class DeterministicRNG:
    """Local seeded RNG. No global random state touched."""

    def __init__(self, seed: int) -> None:
        self._rng = random.Random(seed)

    def rand_int(self, low: int, high: int) -> int:
        """Return random integer in [low, high] inclusive."""
        return self._rng.randint(low, high)

    def draw_address_plan(self, tier: Tier) -> AddressPlan:
        """Draw base and DMZ octets in the ranges the tier uses."""
        low, high = SOHO_BASE_RANGE if tier is Tier.SOHO else ROUTED_BASE_RANGE
        base = self.rand_int(low, high)
        dmz = self.rand_int(*DMZ_RANGE)
        return AddressPlan(base_octet=base, dmz_octet=dmz)
