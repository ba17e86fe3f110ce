"""
Roster editing helpers.

Departments get id = max(id) + 1 and vlan = max(vlan) + 10 at creation;
neither is ever reassigned afterwards. All helpers return a new tuple
and leave the caller's roster untouched.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Sequence, Tuple

from net_kernel.domain_types import Department

VLAN_STEP = 10
DEFAULT_EMPLOYEES = 5


def add_department(
    roster: Sequence[Department],
    name: str = "",
    employees: int = DEFAULT_EMPLOYEES,
) -> Tuple[Department, ...]:
    if roster:
        new_id = max(d.id for d in roster) + 1
        vlan = max(d.vlan_id for d in roster) + VLAN_STEP
    else:
        new_id, vlan = 1, VLAN_STEP
    return tuple(roster) + (Department(id=new_id, name=name, employees=employees, vlan_id=vlan),)


def update_department(roster: Sequence[Department], dept_id: int, **fields) -> Tuple[Department, ...]:
    """Change name and/or employees of one department. The vlan id is fixed."""
    unknown = set(fields) - {"name", "employees"}
    if unknown:
        raise ValueError(f"Cannot update department fields: {sorted(unknown)}")
    if not any(d.id == dept_id for d in roster):
        raise KeyError(dept_id)
    return tuple(replace(d, **fields) if d.id == dept_id else d for d in roster)


def remove_department(roster: Sequence[Department], dept_id: int) -> Tuple[Department, ...]:
    """Drop one department. The last remaining department is kept."""
    if len(roster) <= 1:
        return tuple(roster)
    return tuple(d for d in roster if d.id != dept_id)


def remove_department_by_name(roster: Sequence[Department], name: str) -> Tuple[Department, ...]:
    """Case-insensitive removal by name. The last remaining department is kept."""
    if len(roster) <= 1:
        return tuple(roster)
    key = name.lower()
    return tuple(d for d in roster if d.name.lower() != key)
