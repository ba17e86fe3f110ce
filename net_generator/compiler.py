"""
Design Compiler — Deterministic generator producing validated designs.

compile_design(request) → Design

Resolves the address plan (explicit plan → seeded RNG → fixed default),
then runs the kernel pipeline. The kernel validates every design before
it is returned.
"""

from __future__ import annotations

from net_kernel.domain_types import AddressPlan, Design
from net_kernel.engine import synthesize_design
from net_kernel.invariants import InvariantViolationError

from .deterministic_rng import DeterministicRNG
from .design_request import DesignRequest

DEFAULT_ADDRESS_PLAN = AddressPlan(base_octet=1, dmz_octet=0)


class GeneratorInvariantError(Exception):
    """Raised when a generated design fails kernel validation."""

    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"Generated design failed validation: {cause}")


def resolve_address_plan(request: DesignRequest) -> AddressPlan:
    if request.address_plan is not None:
        return request.address_plan
    if request.seed is not None:
        return DeterministicRNG(request.seed).draw_address_plan(request.tier)
    return DEFAULT_ADDRESS_PLAN


def compile_design(request: DesignRequest) -> Design:
    """
    Compile a request into a Design.

    Raises GeneratorInvariantError if the design breaks a kernel invariant.
    """
    plan = resolve_address_plan(request)
    try:
        return synthesize_design(request.tier, request.departments, request.services, plan)
    except InvariantViolationError as exc:
        raise GeneratorInvariantError(exc) from exc
