"""
Design Request — Frozen dataclass defining generator inputs.

A request is the full input snapshot of one generation pass: tier,
department roster, service flags, floor count and the (optional)
address-plan injection.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from net_kernel.catalog import policy_for
from net_kernel.domain_types import AddressPlan, Department, ServiceFlags, Tier

MIN_DEPARTMENT_VLAN = 2
MAX_DEPARTMENT_VLAN = 254

DEFAULT_FLOORS = 3

DEFAULT_DEPARTMENTS: Tuple[Department, ...] = (
    Department(id=1, name="Sales & Marketing", employees=18, vlan_id=20),
    Department(id=2, name="Finance & Acc", employees=12, vlan_id=30),
    Department(id=3, name="HR & Logistics", employees=10, vlan_id=40),
    Department(id=4, name="ICT", employees=15, vlan_id=50),
)


class RequestValidationError(ValueError):
    """Raised when a design request is not fit for generation."""

    def __init__(self, field_name: str, detail: str) -> None:
        self.field = field_name
        self.detail = detail
        super().__init__(f"[{field_name}] {detail}")


@dataclass(frozen=True)
class DesignRequest:
    """Immutable input snapshot for deterministic design generation."""

    tier: Tier
    departments: Tuple[Department, ...]
    services: ServiceFlags = field(default_factory=ServiceFlags.defaults)
    floors: int = DEFAULT_FLOORS
    seed: Optional[int] = None
    address_plan: Optional[AddressPlan] = None

    @property
    def total_employees(self) -> int:
        return sum(d.employees for d in self.departments)

    def with_changes(self, **changes) -> "DesignRequest":
        return replace(self, **changes)

    def to_dict(self) -> dict:
        """Serialise to plain dict for JSON export."""
        return {
            "tier": self.tier.value,
            "floors": self.floors,
            "departments": [d.to_dict() for d in self.departments],
            "services": self.services.to_dict(),
            "seed": self.seed,
            "address_plan": self.address_plan.to_dict() if self.address_plan else None,
        }


def default_request(tier: Tier = Tier.ENTERPRISE) -> DesignRequest:
    return DesignRequest(tier=tier, departments=DEFAULT_DEPARTMENTS)


def validate_request(request: DesignRequest) -> None:
    """
    Reject input the engine must never see. Raises RequestValidationError
    on the first problem found.
    """
    if request.floors <= 0:
        raise RequestValidationError("floors", f"Floor count must be positive, got {request.floors}")
    if not request.departments:
        raise RequestValidationError("departments", "At least one department is required")

    reserved = policy_for(request.tier).reserved_vlans
    seen_ids = set()
    seen_vlans = set()
    for dept in request.departments:
        if not dept.name or not dept.name.strip():
            raise RequestValidationError("departments", f"Department {dept.id} has an empty name")
        if dept.employees <= 0:
            raise RequestValidationError(
                "departments",
                f"Department {dept.name!r} must have at least one employee, got {dept.employees}",
            )
        if dept.id in seen_ids:
            raise RequestValidationError("departments", f"Duplicate department id {dept.id}")
        seen_ids.add(dept.id)

        if dept.vlan_id in seen_vlans:
            raise RequestValidationError("departments", f"Duplicate department VLAN {dept.vlan_id}")
        seen_vlans.add(dept.vlan_id)

        # SOHO runs one flat LAN, so range and reservation do not apply
        if request.tier is Tier.SOHO:
            continue
        if not MIN_DEPARTMENT_VLAN <= dept.vlan_id <= MAX_DEPARTMENT_VLAN:
            raise RequestValidationError(
                "departments",
                f"Department {dept.name!r} VLAN {dept.vlan_id} outside "
                f"{MIN_DEPARTMENT_VLAN}..{MAX_DEPARTMENT_VLAN}",
            )
        if dept.vlan_id in reserved:
            raise RequestValidationError(
                "departments",
                f"Department {dept.name!r} VLAN {dept.vlan_id} is reserved on {request.tier.value}",
            )

    if request.address_plan is not None:
        try:
            request.address_plan.check_tier(request.tier)
        except ValueError as exc:
            raise RequestValidationError("address_plan", str(exc)) from exc
