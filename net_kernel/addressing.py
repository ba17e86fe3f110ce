"""
Network Design Kernel — VLAN / Subnet Allocator

Builds the ordered VLAN table and the server roster of a design.
Department subnets take their third octet straight from the vlan id
against one shared base prefix, so subnets never overlap.
"""

from __future__ import annotations

import ipaddress
from typing import List, Sequence, Tuple

from .constants import (
    AAA_SERVER_HOST,
    DHCP_FIRST_HOST,
    DHCP_NONE,
    DHCP_SERVER_HOST,
    DHCP_STATIC,
    DMZ_VLAN_ID,
    DNS_SERVER_HOST,
    MANAGEMENT_GATEWAY,
    MANAGEMENT_SUBNET,
    MANAGEMENT_VLAN_ID,
    SERVERS_VLAN_ID,
    SOHO_LAN_VLAN_ID,
    VOIP_VLAN_ID,
    WEB_SERVER_HOST,
)
from .domain_types import (
    AddressPlan,
    Department,
    ServerRecord,
    ServiceFlags,
    Tier,
    VlanRecord,
    alnum_only,
)


# ---------------------------------------------------------------------------
# Address helpers
# ---------------------------------------------------------------------------

def subnet_of(prefix: str) -> str:
    """'10.4.20' -> '10.4.20.0/24'"""
    return f"{prefix}.0/24"


def gateway_of(prefix: str) -> str:
    return f"{prefix}.1"


def host_in(prefix: str, host: int) -> str:
    return f"{prefix}.{host}"


def dynamic_range(prefix: str) -> str:
    return f"{prefix}.{DHCP_FIRST_HOST} - .254"


def subnet_prefix(subnet: str) -> str:
    """'10.4.20.0/24' -> '10.4.20'"""
    return subnet.split("/")[0].rsplit(".", 1)[0]


def netmask_of(subnet: str) -> str:
    return str(ipaddress.IPv4Network(subnet, strict=False).netmask)


def wildcard_of(subnet: str) -> str:
    return str(ipaddress.IPv4Network(subnet, strict=False).hostmask)


def department_vlan_name(dept: Department) -> str:
    return f"Data_{alnum_only(dept.name).upper()}"


def _dynamic_vlan(vlan_id: int, name: str, prefix: str) -> VlanRecord:
    return VlanRecord(
        vlan_id=vlan_id,
        name=name,
        subnet=subnet_of(prefix),
        gateway=gateway_of(prefix),
        dhcp_range=dynamic_range(prefix),
    )


def _static_vlan(vlan_id: int, name: str, prefix: str) -> VlanRecord:
    return VlanRecord(
        vlan_id=vlan_id,
        name=name,
        subnet=subnet_of(prefix),
        gateway=gateway_of(prefix),
        dhcp_range=DHCP_STATIC,
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def allocate_vlans(
    tier: Tier,
    departments: Sequence[Department],
    plan: AddressPlan,
) -> Tuple[VlanRecord, ...]:
    """
    Ordered VLAN table for a tier.

    Enterprise: Management, departments, VoIP, SERVERS, DMZ.
    Standard:   departments, SERVERS.
    SOHO:       one flat LAN.
    """
    base = plan.base_network(tier)

    if tier is Tier.SOHO:
        return (_dynamic_vlan(SOHO_LAN_VLAN_ID, "LAN", base),)

    vlans: List[VlanRecord] = []
    if tier is Tier.ENTERPRISE:
        vlans.append(VlanRecord(
            vlan_id=MANAGEMENT_VLAN_ID,
            name="Management",
            subnet=MANAGEMENT_SUBNET,
            gateway=MANAGEMENT_GATEWAY,
            dhcp_range=DHCP_NONE,
        ))

    for dept in departments:
        vlans.append(_dynamic_vlan(
            dept.vlan_id, department_vlan_name(dept), f"{base}.{dept.vlan_id}"
        ))

    if tier is Tier.ENTERPRISE:
        vlans.append(_dynamic_vlan(VOIP_VLAN_ID, "VoIP", f"{base}.{VOIP_VLAN_ID}"))

    vlans.append(_static_vlan(SERVERS_VLAN_ID, "SERVERS", f"{base}.{SERVERS_VLAN_ID}"))

    if tier is Tier.ENTERPRISE:
        vlans.append(_static_vlan(DMZ_VLAN_ID, "DMZ", plan.dmz_network))

    return tuple(vlans)


def allocate_servers(
    tier: Tier,
    services: ServiceFlags,
    plan: AddressPlan,
) -> Tuple[ServerRecord, ...]:
    """
    Server roster from the enabled on-prem services.

    The AAA/RADIUS server is always present on Enterprise. The web
    server needs a DMZ, which only Enterprise has.
    """
    if tier is Tier.SOHO:
        return ()

    servers_prefix = f"{plan.base_network(tier)}.{SERVERS_VLAN_ID}"
    servers: List[ServerRecord] = []
    if services.dhcp:
        servers.append(ServerRecord("DHCP_Server", host_in(servers_prefix, DHCP_SERVER_HOST), "SERVERS"))
    if services.dns:
        servers.append(ServerRecord("DNS_Server", host_in(servers_prefix, DNS_SERVER_HOST), "SERVERS"))
    if tier is Tier.ENTERPRISE:
        servers.append(ServerRecord("AAA_RADIUS", host_in(servers_prefix, AAA_SERVER_HOST), "SERVERS"))
        if services.web:
            servers.append(ServerRecord("Web_Server", host_in(plan.dmz_network, WEB_SERVER_HOST), "DMZ"))
    return tuple(servers)
