"""
Network Design Kernel — Diagnostics v1.0

Compute a diagnostic snapshot of a generated design.
"""

from __future__ import annotations

from typing import Dict, List

from .constants import ACCESS_SWITCH_PORTS
from .domain_types import END_DEVICE_TYPES, Design, MediaType, NodeType, Tier
from .topology import access_switch_count, access_switches


def compute_diagnostics(design: Design) -> dict:
    """Return a diagnostic dict summarising the design and its soft warnings."""
    topo = design.topology
    switches = access_switches(topo)

    uplinks: Dict[str, int] = {}
    for core in topo.nodes_of_type(NodeType.MLSWITCH):
        switch_ids = {s.id for s in switches}
        uplinks[core.label] = sum(
            1 for l in topo.links if l.source_id == core.id and l.target_id in switch_ids
        )

    fiber = sum(1 for l in topo.links if l.media_type is MediaType.FIBER)

    warnings: List[str] = []

    for dept in design.departments:
        groups = access_switch_count(dept.employees)
        if dept.employees > groups * ACCESS_SWITCH_PORTS:
            warnings.append(
                f"Department {dept.name!r}: {dept.employees} employees exceed "
                f"{groups * ACCESS_SWITCH_PORTS} access ports"
            )

    if design.tier is Tier.ENTERPRISE and not design.services.voip:
        warnings.append("VoIP disabled but VLAN 70 is still reserved")
    if design.services.web and design.tier is not Tier.ENTERPRISE:
        warnings.append(
            f"Web service requested but {design.tier.value} has no DMZ, no web server placed"
        )
    active_cloud = sorted(k for k, v in design.services.cloud.items() if v)
    if active_cloud:
        warnings.append(
            f"Cloud services {', '.join(active_cloud)} are recorded only and do not change the design"
        )

    return {
        "tier": design.tier.value,
        "node_count": len(topo.nodes),
        "link_count": len(topo.links),
        "vlan_count": len(design.vlans),
        "server_count": len(design.servers),
        "access_switch_count": len(switches),
        "end_device_count": sum(1 for n in topo.nodes if n.type in END_DEVICE_TYPES),
        "core_uplinks": uplinks,
        "fiber_links": fiber,
        "copper_links": len(topo.links) - fiber,
        "config_count": len(design.configs),
        "warnings": warnings,
    }
