"""
Network Design Kernel — Cost Estimator

hardware     = fixed per-tier backbone + access switches (+ voice gateway)
installation = hardware * tier install rate
total        = hardware + installation

Values are currency-agnostic; formatting belongs to the presentation layer.
"""

from __future__ import annotations

from .catalog import policy_for
from .constants import DEVICE_PRICES
from .domain_types import CostEstimate, Design, ServiceFlags, Tier
from .invariants import InvariantViolationError
from .topology import access_switches


def price_of(model: str) -> int:
    try:
        return DEVICE_PRICES[model]
    except KeyError:
        raise InvariantViolationError("price_table", f"No price for model {model!r}") from None


def hardware_cost(tier: Tier, access_switch_count: int, services: ServiceFlags) -> float:
    catalog = policy_for(tier).catalog
    if tier is Tier.SOHO:
        return price_of(catalog.router) + price_of(catalog.access_switch)

    total = access_switch_count * price_of(catalog.access_switch)
    total += catalog.core_switch_count * price_of(catalog.core_switch)
    if tier is Tier.ENTERPRISE:
        total += price_of(catalog.firewall)
        if services.voip:
            total += price_of(catalog.voice_gateway)
    else:
        total += price_of(catalog.router)
    return total


def estimate_cost(tier: Tier, access_switch_count: int, services: ServiceFlags) -> CostEstimate:
    hardware = hardware_cost(tier, access_switch_count, services)
    installation = hardware * policy_for(tier).install_rate
    return CostEstimate(
        hardware_cost=hardware,
        installation_cost=installation,
        total=hardware + installation,
    )


def estimate_design_cost(design: Design) -> CostEstimate:
    """Cost of a generated design, counting its per-department access switches."""
    return estimate_cost(design.tier, len(access_switches(design.topology)), design.services)
