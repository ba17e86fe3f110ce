"""
Network Design Kernel — Device Configuration Synthesizer

Emits one IOS-style configuration script per infrastructure node.
Scripts are write-only design artifacts (e.g. for import into a network
simulator); they are never parsed back or validated against hardware.

Every script opens with the same security baseline. A template requested
for a role the tier catalog or topology lacks raises
InvariantViolationError instead of emitting partial text.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from .addressing import netmask_of, subnet_prefix, wildcard_of
from .catalog import TierPolicy, policy_for
from .constants import (
    DHCP_FIRST_HOST,
    DHCP_NONE,
    HSRP_PRIMARY_PRIORITY,
    HSRP_SECONDARY_PRIORITY,
    SECURITY_BASELINE,
    VOICE_EXTENSION_POOL,
    VOIP_VLAN_ID,
)
from .domain_types import Design, NodeType, Tier, TopologyNode, VlanRecord
from .invariants import InvariantViolationError

BASE_SUMMARY_MASK = "255.255.0.0"
BASE_SUMMARY_WILDCARD = "0.0.255.255"
TRANSIT_OCTET = 1
ISP_GATEWAY_PLACEHOLDER = "[YOUR_ISP_GATEWAY_IP]"
PUBLIC_DNS = "8.8.8.8"


# ---------------------------------------------------------------------------
# Shared stanzas
# ---------------------------------------------------------------------------

def _preamble(title: str, hostname: str) -> List[str]:
    return [
        f"! {title}",
        "enable",
        "conf t",
        f"hostname {hostname}",
        *SECURITY_BASELINE.splitlines(),
    ]


def _vlan_block(vlan_id: int, name: str) -> List[str]:
    return [f"vlan {vlan_id}", f" name {name}", "exit"]


def _has_svi(vlan: VlanRecord) -> bool:
    return vlan.name != "DMZ" and DHCP_NONE not in (vlan.gateway, vlan.dhcp_range)


def _require_node(design: Design, node_id: str, model: Optional[str], role: str) -> TopologyNode:
    if not model:
        raise InvariantViolationError(
            "config_role", f"{design.tier.value} catalog has no {role}"
        )
    try:
        return design.topology.node(node_id)
    except KeyError:
        raise InvariantViolationError(
            "config_role", f"No topology node {node_id!r} for {role} config"
        ) from None


def _require_vlan(design: Design, name: str) -> VlanRecord:
    vlan = design.vlan_named(name)
    if vlan is None:
        raise InvariantViolationError(
            "config_role", f"{design.tier.value} design has no {name} VLAN"
        )
    return vlan


# ---------------------------------------------------------------------------
# Role templates
# ---------------------------------------------------------------------------

def _firewall_config(design: Design, policy: TierPolicy) -> Dict[str, str]:
    node = _require_node(design, policy.edge_id, design.devices.firewall, "firewall")
    dmz = _require_vlan(design, "DMZ")
    base = design.base_network
    web = next((s for s in design.servers if s.vlan_name == "DMZ"), None)

    lines = _preamble(f"ASA Firewall Configuration ({design.devices.firewall})", node.label) + [
        "! Interfaces",
        "interface GigabitEthernet1/1",
        " nameif outside",
        " security-level 0",
        " ip address dhcp",
        " no shutdown",
        "interface GigabitEthernet1/2",
        " nameif inside",
        " security-level 100",
        " no ip address",
        " no shutdown",
        "interface GigabitEthernet1/2.10",
        " vlan 10",
        " nameif inside_link",
        f" ip address {base}.{TRANSIT_OCTET}.253 255.255.255.0",
        " no shutdown",
        "interface GigabitEthernet1/3",
        " nameif dmz",
        " security-level 50",
        f" ip address {dmz.gateway} {netmask_of(dmz.subnet)}",
        " no shutdown",
        "! NAT & PAT",
        "object network INSIDE_SUBNETS",
        f" subnet {base}.0.0 {BASE_SUMMARY_MASK}",
        "nat (inside,outside) after-auto source dynamic INSIDE_SUBNETS interface",
    ]
    if web is not None:
        lines += [
            "object network WEB_SERVER",
            f" host {web.ip}",
            " nat (dmz,outside) static interface service tcp www www",
            "! Access Rules",
            "access-list outside_access_in extended permit tcp any object WEB_SERVER eq www",
            "access-group outside_access_in in interface outside",
        ]
    lines += [
        "! Default Route",
        f"route outside 0.0.0.0 0.0.0.0 {ISP_GATEWAY_PLACEHOLDER} 1",
        "exit",
    ]
    return {node.label: "\n".join(lines)}


def _core_switch_configs(design: Design, policy: TierPolicy) -> Dict[str, str]:
    base = design.base_network
    redundant = len(policy.uplink_ids) > 1
    out: Dict[str, str] = {}

    for i, core_id in enumerate(policy.uplink_ids):
        node = _require_node(design, core_id, design.devices.core_switch, "core switch")
        lines = _preamble(f"{node.label} Configuration ({design.devices.core_switch})", node.label)
        for v in design.vlans:
            lines += _vlan_block(v.vlan_id, v.name.replace(" ", "_").upper())
        lines.append("ip routing")

        for v in filter(_has_svi, design.vlans):
            prefix = subnet_prefix(v.subnet)
            mask = netmask_of(v.subnet)
            lines += [f"interface Vlan{v.vlan_id}", f" description {v.name} SVI"]
            if redundant:
                # each core owns .2/.3, the gateway address floats between them
                priority = HSRP_PRIMARY_PRIORITY if i == 0 else HSRP_SECONDARY_PRIORITY
                lines += [
                    f" ip address {prefix}.{2 + i} {mask}",
                    f" standby {v.vlan_id} ip {v.gateway}",
                    f" standby {v.vlan_id} priority {priority}",
                    f" standby {v.vlan_id} preempt",
                ]
            else:
                lines.append(f" ip address {v.gateway} {mask}")
            lines += [" no shutdown", "exit"]

        if not redundant:
            lines += [
                "! Router Uplink",
                "interface GigabitEthernet1/0/24",
                " no switchport",
                f" ip address {base}.{TRANSIT_OCTET}.1 255.255.255.0",
                " no shutdown",
                "exit",
            ]

        lines += [
            "! OSPF Routing",
            "router ospf 1",
            f" router-id 1.1.1.{i + 1}",
            f" network {base}.0.0 {BASE_SUMMARY_WILDCARD} area 0",
        ]
        if redundant:
            lines.append(" default-information originate")
        lines.append("exit")
        if not redundant:
            lines.append(f"ip route 0.0.0.0 0.0.0.0 {base}.{TRANSIT_OCTET}.254")
        out[node.label] = "\n".join(lines)

    return out


def _edge_router_config(design: Design, policy: TierPolicy) -> Dict[str, str]:
    node = _require_node(design, policy.edge_id, design.devices.router, "router")
    base = design.base_network
    lines = _preamble(f"Edge Router ({design.devices.router}) Configuration", node.label) + [
        "! WAN Interface",
        "interface GigabitEthernet0/0/0",
        " ip address dhcp",
        " ip nat outside",
        " no shutdown",
        "! LAN Interface",
        "interface GigabitEthernet0/0/1",
        f" ip address {base}.{TRANSIT_OCTET}.254 255.255.255.0",
        " ip nat inside",
        " no shutdown",
        "! NAT Overload",
        "ip nat inside source list 1 interface GigabitEthernet0/0/0 overload",
        f"access-list 1 permit {base}.0.0 {BASE_SUMMARY_WILDCARD}",
        "! Internal Routes",
        f"ip route {base}.0.0 {BASE_SUMMARY_MASK} {base}.{TRANSIT_OCTET}.1",
        "! Default Route",
        "ip route 0.0.0.0 0.0.0.0 GigabitEthernet0/0/0",
        "exit",
    ]
    return {node.label: "\n".join(lines)}


def _soho_router_config(design: Design, policy: TierPolicy) -> Dict[str, str]:
    node = _require_node(design, policy.edge_id, design.devices.router, "router")
    lan = design.vlans[0]
    prefix = subnet_prefix(lan.subnet)
    mask = netmask_of(lan.subnet)
    lines = _preamble(f"SOHO Router ({design.devices.router}) Configuration", node.label) + [
        "! WAN Interface",
        "interface GigabitEthernet0/0",
        " ip address dhcp",
        " ip nat outside",
        " no shutdown",
        "! LAN Interface",
        "interface GigabitEthernet0/1",
        f" ip address {lan.gateway} {mask}",
        " ip nat inside",
        " no shutdown",
        "! DHCP Pool",
        f"ip dhcp excluded-address {prefix}.1 {prefix}.{DHCP_FIRST_HOST - 1}",
        "ip dhcp pool SOHO_LAN",
        f" network {prefix}.0 {mask}",
        f" default-router {lan.gateway}",
        f" dns-server {PUBLIC_DNS}",
        "! NAT Overload",
        "ip nat inside source list 1 interface GigabitEthernet0/0 overload",
        f"access-list 1 permit {prefix}.0 {wildcard_of(lan.subnet)}",
        "! Default Route",
        "ip route 0.0.0.0 0.0.0.0 GigabitEthernet0/0",
        "exit",
    ]
    return {node.label: "\n".join(lines)}


def _lan_switch_config(design: Design, policy: TierPolicy) -> Dict[str, str]:
    node = _require_node(design, policy.uplink_ids[0], design.devices.access_switch, "LAN switch")
    lan = design.vlans[0]
    lines = _preamble(f"LAN Switch ({design.devices.access_switch}) Configuration", node.label)
    lines += _vlan_block(lan.vlan_id, lan.name)
    lines += [
        "! Interface Configs",
        "interface range FastEthernet0/1 - 24",
        " switchport mode access",
        f" switchport access vlan {lan.vlan_id}",
        " spanning-tree portfast",
        " spanning-tree bpduguard enable",
        "exit",
    ]
    return {node.label: "\n".join(lines)}


def _voice_gateway_config(design: Design, policy: TierPolicy) -> Dict[str, str]:
    node = _require_node(design, policy.voice_gateway.id, design.devices.voice_gateway, "voice gateway")
    voip = _require_vlan(design, "VoIP")
    pool = VOICE_EXTENSION_POOL
    lines = _preamble(f"Voice Gateway Configuration ({design.devices.voice_gateway})", node.label) + [
        "! CME Config",
        "telephony-service",
        f" max-ephones {pool}",
        f" max-dn {pool}",
        f" ip source-address {voip.gateway} port 2000",
        f" auto assign 1 to {pool}",
        "exit",
        "! Ephone-DNs",
        "ephone-dn 1",
        " number 1001",
        "exit",
        "ephone-dn 2",
        " number 1002",
        "exit",
    ]
    return {node.label: "\n".join(lines)}


def _access_switch_config(design: Design, node: TopologyNode) -> str:
    try:
        vlan = design.vlan(node.vlan_id)
    except KeyError:
        raise InvariantViolationError(
            "config_role", f"{node.label} tagged with unknown VLAN {node.vlan_id}"
        ) from None
    voice = design.services.voip and design.tier is not Tier.SOHO and vlan.vlan_id != VOIP_VLAN_ID

    lines = _preamble(f"{node.label} Configuration ({design.devices.access_switch})", node.label)
    lines += _vlan_block(vlan.vlan_id, vlan.name)
    if voice:
        lines += _vlan_block(VOIP_VLAN_ID, "VoIP")
    lines += [
        "! Interface Configs",
        "interface range FastEthernet0/1 - 24",
        " switchport mode access",
        f" switchport access vlan {vlan.vlan_id}",
    ]
    if voice:
        lines.append(f" switchport voice vlan {VOIP_VLAN_ID}")
    lines += [
        " spanning-tree portfast",
        " spanning-tree bpduguard enable",
        "exit",
        "! Uplink Config",
        "interface GigabitEthernet0/1",
        " switchport mode trunk",
        "exit",
    ]
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def synthesize_configs(design: Design) -> Dict[str, str]:
    """
    Device name -> configuration script, in backbone-first order.

    `design` only needs its catalog, VLANs, servers and topology populated;
    its own configs/cabling fields are ignored.
    """
    policy = policy_for(design.tier)
    configs: Dict[str, str] = {}

    if design.devices.firewall:
        configs.update(_firewall_config(design, policy))
    elif design.tier is Tier.SOHO:
        configs.update(_soho_router_config(design, policy))
    else:
        configs.update(_edge_router_config(design, policy))

    if design.devices.core_switch:
        configs.update(_core_switch_configs(design, policy))

    if policy.voice_gateway is not None and design.services.voip:
        configs.update(_voice_gateway_config(design, policy))

    if not policy.per_department_switches:
        configs.update(_lan_switch_config(design, policy))

    for node in design.topology.nodes_of_type(NodeType.SWITCH):
        if node.vlan_id is not None:
            configs[node.label] = _access_switch_config(design, node)

    return configs
