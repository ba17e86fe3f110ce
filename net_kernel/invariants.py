"""
Network Design Kernel — Invariant Checks v1.0

Hard-fail validation of a generated Design. Every check raises
InvariantViolationError on failure; nothing is silently dropped.
"""

from __future__ import annotations

from typing import Set

from .domain_types import Design


class InvariantViolationError(Exception):
    """Raised when a design invariant or a synthesis precondition is violated."""

    def __init__(self, rule: str, detail: str) -> None:
        self.rule = rule
        self.detail = detail
        super().__init__(f"[INVARIANT:{rule}] {detail}")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def validate_design(design: Design) -> None:
    """
    Run all design checks. Raises InvariantViolationError on the
    first failure.
    """
    _check_node_ids_unique(design)
    _check_link_refs(design)
    _check_vlan_ids_unique(design)
    _check_department_vlans(design)
    _check_cabling_projection(design)
    _check_config_targets(design)


# ---------------------------------------------------------------------------
# Individual checks (private)
# ---------------------------------------------------------------------------

def _check_node_ids_unique(design: Design) -> None:
    seen: Set[str] = set()
    for node in design.topology.nodes:
        if node.id in seen:
            raise InvariantViolationError(
                "node_id_unique", f"Duplicate topology node id {node.id!r}"
            )
        seen.add(node.id)


def _check_link_refs(design: Design) -> None:
    """Every link endpoint must be a node of the same generation pass."""
    ids = {n.id for n in design.topology.nodes}
    for link in design.topology.links:
        for endpoint in (link.source_id, link.target_id):
            if endpoint not in ids:
                raise InvariantViolationError(
                    "link_refs",
                    f"Link {link.source_id!r} -> {link.target_id!r} "
                    f"references unknown node {endpoint!r}",
                )


def _check_vlan_ids_unique(design: Design) -> None:
    ids = [v.vlan_id for v in design.vlans]
    if len(ids) != len(set(ids)):
        raise InvariantViolationError(
            "vlan_id_unique", f"Duplicate VLAN ids in {ids}"
        )


def _check_department_vlans(design: Design) -> None:
    """Segmented tiers carry exactly one VLAN per department, keyed by its vlan id."""
    if not any(n.vlan_id is not None for n in design.topology.nodes):
        return
    vlan_ids = {v.vlan_id for v in design.vlans}
    for dept in design.departments:
        if dept.vlan_id not in vlan_ids:
            raise InvariantViolationError(
                "department_vlan",
                f"Department {dept.name!r} has no VLAN {dept.vlan_id}",
            )


def _check_cabling_projection(design: Design) -> None:
    if len(design.cabling_guide) != len(design.topology.links):
        raise InvariantViolationError(
            "cabling_projection",
            f"{len(design.cabling_guide)} cabling entries for "
            f"{len(design.topology.links)} links",
        )


def _check_config_targets(design: Design) -> None:
    labels = {n.label for n in design.topology.nodes}
    for device_name in design.configs:
        if device_name not in labels:
            raise InvariantViolationError(
                "config_role",
                f"Config emitted for {device_name!r} which is not a topology node",
            )
