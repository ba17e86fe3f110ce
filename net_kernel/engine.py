"""
Network Design Kernel — Engine v1.0

Top-level pipeline. Runs every stage in dependency order on an input
snapshot and returns a fresh Design:

  1. catalog     tier -> device catalog
  2. addressing  VLAN table + server roster
  3. topology    node/link graph + starting layout
  4. configs     per-device scripts (consumes 1-3)
  5. cabling     link projection
  6. invariants  hard-fail validation of the result

No I/O, no module-level state; concurrent calls never share data.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Sequence

from .addressing import allocate_servers, allocate_vlans
from .cabling import derive_cabling_guide
from .catalog import policy_for
from .configs import synthesize_configs
from .domain_types import AddressPlan, Department, Design, ServiceFlags, Tier
from .invariants import validate_design
from .topology import build_topology

logger = logging.getLogger(__name__)


def synthesize_design(
    tier: Tier,
    departments: Sequence[Department],
    services: ServiceFlags,
    plan: AddressPlan,
) -> Design:
    """
    Run the full synthesis pipeline.

    Inputs are assumed pre-validated (non-empty names, employees >= 1).
    Raises InvariantViolationError if the result breaks a design invariant.
    """
    policy = policy_for(tier)
    roster = tuple(departments)

    vlans = allocate_vlans(tier, roster, plan)
    servers = allocate_servers(tier, services, plan)
    topology = build_topology(tier, roster, servers, services)

    draft = Design(
        tier=tier,
        devices=policy.catalog,
        address_plan=plan,
        departments=roster,
        services=services,
        vlans=vlans,
        servers=servers,
        topology=topology,
        configs={},
        cabling_guide=(),
    )
    design = dataclasses.replace(
        draft,
        configs=synthesize_configs(draft),
        cabling_guide=derive_cabling_guide(topology.links),
    )
    validate_design(design)

    logger.debug(
        "synthesized %s design: departments=%d vlans=%d nodes=%d links=%d",
        tier.value, len(roster), len(vlans),
        len(topology.nodes), len(topology.links),
    )
    return design
