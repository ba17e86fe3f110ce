"""
Network Design Kernel — Device Catalog & Tier Policies

One TierPolicy per tier bundles everything the pipeline needs to know
about that tier: hardware catalog, backbone nodes and links, uplink
targets, access-row geometry, reserved VLANs and install rate.

Every stage of the pipeline consults TIER_POLICIES; there are no
per-tier generator copies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional, Tuple

from .constants import (
    DMZ_VLAN_ID,
    MANAGEMENT_VLAN_ID,
    SERVERS_VLAN_ID,
    VOIP_VLAN_ID,
)
from .domain_types import Design, DeviceCatalog, MediaType, NodeType, Tier
from .invariants import InvariantViolationError


@dataclass(frozen=True)
class NodeSlot:
    """A fixed-position node of the tier backbone."""

    id: str
    label: str
    type: NodeType
    x: int
    y: int


@dataclass(frozen=True)
class TierPolicy:
    tier: Tier
    catalog: DeviceCatalog
    install_rate: float
    backbone: Tuple[NodeSlot, ...]
    backbone_links: Tuple[Tuple[str, str, MediaType], ...]
    uplink_ids: Tuple[str, ...]          # access switches alternate across these
    server_uplink_id: str
    edge_id: str                         # firewall or router facing the internet
    access_row_y: int
    per_department_switches: bool
    reserved_vlans: FrozenSet[int] = frozenset()
    voice_gateway: Optional[NodeSlot] = None

    def slot(self, node_id: str) -> NodeSlot:
        for s in self.backbone:
            if s.id == node_id:
                return s
        if self.voice_gateway is not None and self.voice_gateway.id == node_id:
            return self.voice_gateway
        raise InvariantViolationError(
            "tier_policy", f"{self.tier.value} has no backbone node {node_id!r}"
        )


CORE_SWITCH_MODEL = "3650-24PS"
ACCESS_SWITCH_MODEL = "2960-24TT"

TIER_POLICIES: Dict[Tier, TierPolicy] = {
    Tier.ENTERPRISE: TierPolicy(
        tier=Tier.ENTERPRISE,
        catalog=DeviceCatalog(
            firewall="ASA 5506-X",
            core_switch=CORE_SWITCH_MODEL,
            core_switch_count=2,
            access_switch=ACCESS_SWITCH_MODEL,
            voice_gateway="2911 Router",
        ),
        install_rate=0.30,
        backbone=(
            NodeSlot("cloud", "Internet", NodeType.CLOUD, 600, 80),
            NodeSlot("firewall", "ASA-FW", NodeType.FIREWALL, 600, 180),
            NodeSlot("core1", "Core-SW1", NodeType.MLSWITCH, 400, 320),
            NodeSlot("core2", "Core-SW2", NodeType.MLSWITCH, 800, 320),
        ),
        backbone_links=(
            ("cloud", "firewall", MediaType.COPPER),
            ("firewall", "core1", MediaType.FIBER),
            ("firewall", "core2", MediaType.FIBER),
            ("core1", "core2", MediaType.FIBER),
        ),
        uplink_ids=("core1", "core2"),
        server_uplink_id="core1",
        edge_id="firewall",
        access_row_y=600,
        per_department_switches=True,
        reserved_vlans=frozenset({MANAGEMENT_VLAN_ID, VOIP_VLAN_ID, SERVERS_VLAN_ID, DMZ_VLAN_ID}),
        voice_gateway=NodeSlot("voipgw", "Voice-GW", NodeType.ROUTER, 150, 320),
    ),
    Tier.STANDARD: TierPolicy(
        tier=Tier.STANDARD,
        catalog=DeviceCatalog(
            router="4321 ISR",
            core_switch=CORE_SWITCH_MODEL,
            core_switch_count=1,
            access_switch=ACCESS_SWITCH_MODEL,
        ),
        install_rate=0.25,
        backbone=(
            NodeSlot("cloud", "Internet", NodeType.CLOUD, 450, 80),
            NodeSlot("router", "Edge-RTR", NodeType.ROUTER, 450, 180),
            NodeSlot("core1", "Core-L3-SW", NodeType.MLSWITCH, 450, 320),
        ),
        backbone_links=(
            ("cloud", "router", MediaType.COPPER),
            ("router", "core1", MediaType.COPPER),
        ),
        uplink_ids=("core1",),
        server_uplink_id="core1",
        edge_id="router",
        access_row_y=600,
        per_department_switches=True,
        reserved_vlans=frozenset({SERVERS_VLAN_ID}),
    ),
    Tier.SOHO: TierPolicy(
        tier=Tier.SOHO,
        catalog=DeviceCatalog(
            router="1941 ISR",
            access_switch=ACCESS_SWITCH_MODEL,
        ),
        install_rate=0.20,
        backbone=(
            NodeSlot("cloud", "Internet", NodeType.CLOUD, 300, 80),
            NodeSlot("router", "SOHO-RTR", NodeType.ROUTER, 300, 180),
            NodeSlot("switch", "LAN-SW", NodeType.SWITCH, 300, 280),
        ),
        backbone_links=(
            ("cloud", "router", MediaType.COPPER),
            ("router", "switch", MediaType.COPPER),
        ),
        uplink_ids=("switch",),
        server_uplink_id="switch",
        edge_id="router",
        access_row_y=400,
        per_department_switches=False,
    ),
}


def policy_for(tier: Tier) -> TierPolicy:
    try:
        return TIER_POLICIES[tier]
    except KeyError:
        raise InvariantViolationError("tier_policy", f"No policy for tier {tier!r}") from None


# ---------------------------------------------------------------------------
# Node-type dispatch tables
# ---------------------------------------------------------------------------

GENERIC_MODELS: Dict[NodeType, str] = {
    NodeType.CLOUD: "Internet",
    NodeType.SERVER: "Generic Server",
    NodeType.PC: "PC-PT",
    NodeType.LAPTOP: "Laptop-PT",
    NodeType.IPPHONE: "7960 IP Phone",
    NodeType.PRINTER: "Printer-PT",
}

NODE_GLYPHS: Dict[NodeType, str] = {
    NodeType.CLOUD: "cloud",
    NodeType.FIREWALL: "shield",
    NodeType.ROUTER: "router",
    NodeType.MLSWITCH: "layers",
    NodeType.SWITCH: "switch",
    NodeType.SERVER: "server",
    NodeType.PC: "monitor",
    NodeType.LAPTOP: "laptop",
    NodeType.PRINTER: "printer",
    NodeType.IPPHONE: "phone",
}


def device_model(design: Design, node_type: NodeType) -> str:
    """Hardware model shown for a node of the given type in this design."""
    devices = design.devices
    if node_type is NodeType.FIREWALL:
        model = devices.firewall
    elif node_type is NodeType.MLSWITCH:
        model = devices.core_switch
    elif node_type is NodeType.SWITCH:
        model = devices.access_switch
    elif node_type is NodeType.ROUTER:
        if design.services.voip and devices.voice_gateway:
            model = devices.voice_gateway
        else:
            model = devices.router
    else:
        model = GENERIC_MODELS[node_type]
    if model is None:
        raise InvariantViolationError(
            "config_role",
            f"{design.tier.value} catalog has no model for {node_type.value!r}",
        )
    return model


def node_glyph(node_type: NodeType) -> str:
    return NODE_GLYPHS[node_type]
