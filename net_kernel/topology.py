"""
Network Design Kernel — Topology Graph Builder

Deterministic node/link graph plus 2-D starting layout.

Build order:
  1. Tier backbone (internet, firewall/router, core switch(es)) and its links
  2. Voice gateway (Enterprise + VoIP) on the primary core switch
  3. Servers: DMZ servers beside the firewall, the rest in a row on core 1
  4. Per-department access switches, ceil(employees / 20) each, alternating
     between core switches, each with four end devices underneath
"""

from __future__ import annotations

import math
from typing import Dict, List, Sequence, Set, Tuple

from .catalog import NodeSlot, TierPolicy, policy_for
from .constants import (
    ACCESS_SWITCH_PITCH,
    ACCESS_SWITCH_START_X,
    DIAGRAM_HEIGHT,
    DIAGRAM_MARGIN,
    DIAGRAM_MIN_WIDTH,
    DMZ_SERVER_POSITION,
    EMPLOYEES_PER_ACCESS_SWITCH,
    END_DEVICE_ROW_OFFSET,
    END_DEVICE_X_OFFSETS,
    SERVER_PITCH,
    SERVER_ROW_Y,
    SERVER_START_X,
)
from .domain_types import (
    Department,
    MediaType,
    NodeType,
    ServerRecord,
    ServiceFlags,
    Tier,
    Topology,
    TopologyLink,
    TopologyNode,
    alnum_only,
)


# (id prefix, label, type) in left-to-right order under each switch
END_DEVICE_TEMPLATE: Tuple[Tuple[str, str, NodeType], ...] = (
    ("pc", "PC", NodeType.PC),
    ("phone", "IP Phone", NodeType.IPPHONE),
    ("laptop", "Laptop", NodeType.LAPTOP),
    ("printer", "Printer", NodeType.PRINTER),
)


def access_switch_count(employees: int) -> int:
    """Access switches needed for a headcount; always >= 1 for employees >= 1."""
    return max(1, math.ceil(employees / EMPLOYEES_PER_ACCESS_SWITCH))


def access_switch_prefixes(departments: Sequence[Department]) -> Dict[int, str]:
    """
    Department id -> access switch name stem ('Access-SALE').

    Stems come from the first four alphanumerics of the name; a later
    department whose stem is already taken gets its department id
    appended ('Access-SALE-2'). Department ids are unique on every tier,
    vlan ids are not (SOHO ignores them).
    """
    stems: Dict[int, str] = {}
    taken: Set[str] = set()
    for dept in departments:
        short = alnum_only(dept.name)[:4].upper() or "DEPT"
        stem = f"Access-{short}"
        if stem in taken:
            stem = f"Access-{short}-{dept.id}"
        taken.add(stem)
        stems[dept.id] = stem
    return stems


def _slot_node(slot: NodeSlot) -> TopologyNode:
    return TopologyNode(id=slot.id, label=slot.label, type=slot.type, x=slot.x, y=slot.y)


def _add_backbone(
    policy: TierPolicy,
    services: ServiceFlags,
    nodes: List[TopologyNode],
    links: List[TopologyLink],
) -> None:
    nodes.extend(_slot_node(s) for s in policy.backbone)
    links.extend(TopologyLink(a, b, media) for a, b, media in policy.backbone_links)

    if policy.voice_gateway is not None and services.voip:
        gw = policy.voice_gateway
        nodes.append(_slot_node(gw))
        links.append(TopologyLink(gw.id, policy.uplink_ids[0], MediaType.COPPER))


def _add_servers(
    policy: TierPolicy,
    servers: Sequence[ServerRecord],
    nodes: List[TopologyNode],
    links: List[TopologyLink],
) -> None:
    server_x = SERVER_START_X
    for server in servers:
        if server.vlan_name == "DMZ":
            x, y = DMZ_SERVER_POSITION
            nodes.append(TopologyNode(server.name, server.name, NodeType.SERVER, x, y))
            links.append(TopologyLink(policy.edge_id, server.name, MediaType.COPPER))
        else:
            nodes.append(TopologyNode(server.name, server.name, NodeType.SERVER, server_x, SERVER_ROW_Y))
            links.append(TopologyLink(policy.server_uplink_id, server.name, MediaType.COPPER))
            server_x += SERVER_PITCH


def _add_access_layer(
    policy: TierPolicy,
    departments: Sequence[Department],
    nodes: List[TopologyNode],
    links: List[TopologyLink],
) -> int:
    """Emit access switches and end devices. Returns the number of access groups."""
    stems = access_switch_prefixes(departments)
    y = policy.access_row_y
    x = ACCESS_SWITCH_START_X
    switch_index = 0

    for dept in departments:
        for j in range(access_switch_count(dept.employees)):
            switch_id = f"{stems[dept.id]}-SW{j + 1}"

            if policy.per_department_switches:
                uplink = policy.uplink_ids[switch_index % len(policy.uplink_ids)]
                nodes.append(TopologyNode(
                    switch_id, switch_id, NodeType.SWITCH, x, y, vlan_id=dept.vlan_id,
                ))
                links.append(TopologyLink(uplink, switch_id, MediaType.FIBER))
                parent = switch_id
            else:
                # single shared LAN switch
                parent = policy.uplink_ids[0]

            for (prefix, label, node_type), dx in zip(END_DEVICE_TEMPLATE, END_DEVICE_X_OFFSETS):
                device_id = f"{prefix}-{switch_id}"
                nodes.append(TopologyNode(
                    device_id, label, node_type, x + dx, y + END_DEVICE_ROW_OFFSET,
                ))
                links.append(TopologyLink(parent, device_id, MediaType.COPPER))

            x += ACCESS_SWITCH_PITCH
            switch_index += 1

    return switch_index


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def diagram_width(total_access_groups: int) -> int:
    return max(DIAGRAM_MIN_WIDTH, total_access_groups * ACCESS_SWITCH_PITCH + DIAGRAM_MARGIN)


def build_topology(
    tier: Tier,
    departments: Sequence[Department],
    servers: Sequence[ServerRecord],
    services: ServiceFlags,
) -> Topology:
    """Synthesize the node/link graph for one generation pass."""
    policy = policy_for(tier)
    nodes: List[TopologyNode] = []
    links: List[TopologyLink] = []

    _add_backbone(policy, services, nodes, links)
    _add_servers(policy, servers, nodes, links)
    groups = _add_access_layer(policy, departments, nodes, links)

    return Topology(
        nodes=tuple(nodes),
        links=tuple(links),
        width=diagram_width(groups),
        height=DIAGRAM_HEIGHT,
    )


def access_switches(topology: Topology) -> List[TopologyNode]:
    """Per-department access switches (the shared SOHO LAN switch is excluded)."""
    return [n for n in topology.nodes if n.type is NodeType.SWITCH and n.vlan_id is not None]
