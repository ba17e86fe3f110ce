"""
Network Design Kernel — Core Domain Types v1.0

Pure data. No behaviour, no synthesis logic.
Engine outputs are frozen; every type serialises to a plain dict
using the wire names consumed by the presentation layer.

────────────────────────────────────────────────
DOMAIN GLOSSARY
────────────────────────────────────────────────

Tier:
    SOHO, Standard Business or Enterprise. Selects the device catalog,
    VLAN policy and layout policy.

SVI:
    Switch virtual interface, a routable address bound to a VLAN.

Access switch:
    Layer-2 device aggregating the end devices of one department.

────────────────────────────────────────────────
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .constants import DMZ_RANGE, ROUTED_BASE_RANGE, SOHO_BASE_RANGE


# ── Name Sanitising ───────────────────────────────────────────
NON_ALNUM_PATTERN = re.compile(r"[^A-Za-z0-9]")


def alnum_only(text: str) -> str:
    """Strip every non-alphanumeric character."""
    return NON_ALNUM_PATTERN.sub("", text)


# ── Enumerations ──────────────────────────────────────────────

class Tier(str, Enum):
    SOHO = "SOHO"
    STANDARD = "Standard Business"
    ENTERPRISE = "Enterprise"

    @classmethod
    def parse(cls, value: "str | Tier") -> "Tier":
        """Accept a member, its value, its name or the short key (soho/standard/enterprise)."""
        if isinstance(value, Tier):
            return value
        key = str(value).strip().lower()
        for tier in cls:
            if key in (tier.value.lower(), tier.name.lower()):
                return tier
        raise ValueError(
            f"Unknown tier {value!r}. Valid: {[t.name.lower() for t in cls]}"
        )


class NodeType(str, Enum):
    CLOUD = "cloud"
    FIREWALL = "firewall"
    ROUTER = "router"
    MLSWITCH = "mlswitch"
    SWITCH = "switch"
    SERVER = "server"
    PC = "pc"
    LAPTOP = "laptop"
    PRINTER = "printer"
    IPPHONE = "ipphone"


END_DEVICE_TYPES = frozenset({NodeType.PC, NodeType.LAPTOP, NodeType.PRINTER, NodeType.IPPHONE})


class MediaType(str, Enum):
    COPPER = "Copper"
    FIBER = "Fiber"


# ── Inputs ────────────────────────────────────────────────────

@dataclass(frozen=True)
class Department:
    """One roster entry. vlan_id is assigned at creation and never reassigned."""

    id: int
    name: str
    employees: int
    vlan_id: int

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "employees": self.employees,
            "vlanId": self.vlan_id,
        }


ON_PREM_SERVICES: Tuple[str, ...] = ("voip", "file", "web", "dhcp", "dns")
CLOUD_SERVICES: Tuple[str, ...] = ("m365", "aws")


@dataclass(frozen=True)
class ServiceFlags:
    """
    On-premise and cloud service selections.

    Cloud flags are carried as inert metadata: they never influence
    topology, configs or cost.
    """

    on_prem: Dict[str, bool] = field(default_factory=dict)
    cloud: Dict[str, bool] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "on_prem", {
            k: bool(self.on_prem.get(k, False)) for k in ON_PREM_SERVICES
        })
        object.__setattr__(self, "cloud", {
            k: bool(self.cloud.get(k, False)) for k in CLOUD_SERVICES
        })

    @classmethod
    def defaults(cls) -> "ServiceFlags":
        return cls(
            on_prem={k: True for k in ON_PREM_SERVICES},
            cloud={k: True for k in CLOUD_SERVICES},
        )

    def with_service(self, name: str, enabled: bool) -> "ServiceFlags":
        """Return a copy with one flag changed."""
        if name in ON_PREM_SERVICES:
            return ServiceFlags(on_prem={**self.on_prem, name: enabled}, cloud=self.cloud)
        if name in CLOUD_SERVICES:
            return ServiceFlags(on_prem=self.on_prem, cloud={**self.cloud, name: enabled})
        raise ValueError(f"Unknown service {name!r}")

    @property
    def voip(self) -> bool:
        return self.on_prem["voip"]

    @property
    def web(self) -> bool:
        return self.on_prem["web"]

    @property
    def dhcp(self) -> bool:
        return self.on_prem["dhcp"]

    @property
    def dns(self) -> bool:
        return self.on_prem["dns"]

    def to_dict(self) -> dict:
        return {"on_prem": dict(self.on_prem), "cloud": dict(self.cloud)}


@dataclass(frozen=True)
class AddressPlan:
    """
    Injected base-network values for one generation pass.

    base_octet: R of 10.R (Enterprise/Standard) or 192.168.R (SOHO).
    dmz_octet:  x of the Enterprise DMZ prefix 172.16.x.0/24.
    """

    base_octet: int
    dmz_octet: int = 0

    def __post_init__(self) -> None:
        # tier-free bound; the routed tiers narrow it in check_tier
        low, high = SOHO_BASE_RANGE
        if not low <= self.base_octet <= high:
            raise ValueError(f"base_octet out of range {low}..{high}: {self.base_octet}")
        low, high = DMZ_RANGE
        if not low <= self.dmz_octet <= high:
            raise ValueError(f"dmz_octet out of range {low}..{high}: {self.dmz_octet}")

    def check_tier(self, tier: Tier) -> None:
        """Raise ValueError unless base_octet fits the tier's base network."""
        low, high = SOHO_BASE_RANGE if tier is Tier.SOHO else ROUTED_BASE_RANGE
        if not low <= self.base_octet <= high:
            raise ValueError(
                f"base_octet out of range {low}..{high} on {tier.value}: {self.base_octet}"
            )

    def base_network(self, tier: Tier) -> str:
        self.check_tier(tier)
        if tier is Tier.SOHO:
            return f"192.168.{self.base_octet}"
        return f"10.{self.base_octet}"

    @property
    def dmz_network(self) -> str:
        return f"172.16.{self.dmz_octet}"

    def to_dict(self) -> dict:
        return {"base_octet": self.base_octet, "dmz_octet": self.dmz_octet}


# ── Engine Outputs ────────────────────────────────────────────

@dataclass(frozen=True)
class VlanRecord:
    vlan_id: int
    name: str
    subnet: str
    gateway: str
    dhcp_range: str  # "a.b.c.10 - .254" | "Static" | "N/A"

    def to_dict(self) -> dict:
        return {
            "vlanId": self.vlan_id,
            "name": self.name,
            "subnet": self.subnet,
            "gateway": self.gateway,
            "dhcpRange": self.dhcp_range,
        }


@dataclass(frozen=True)
class ServerRecord:
    name: str
    ip: str
    vlan_name: str

    def to_dict(self) -> dict:
        return {"name": self.name, "ip": self.ip, "vlanName": self.vlan_name}


@dataclass(frozen=True)
class TopologyNode:
    id: str
    label: str
    type: NodeType
    x: float
    y: float
    vlan_id: Optional[int] = None

    def to_dict(self) -> dict:
        d = {
            "id": self.id,
            "label": self.label,
            "type": self.type.value,
            "x": self.x,
            "y": self.y,
        }
        if self.vlan_id is not None:
            d["vlanId"] = self.vlan_id
        return d


@dataclass(frozen=True)
class TopologyLink:
    source_id: str
    target_id: str
    media_type: MediaType = MediaType.COPPER

    def to_dict(self) -> dict:
        return {
            "source": self.source_id,
            "target": self.target_id,
            "type": self.media_type.value,
        }


@dataclass(frozen=True)
class Topology:
    nodes: Tuple[TopologyNode, ...]
    links: Tuple[TopologyLink, ...]
    width: int
    height: int

    def node(self, node_id: str) -> TopologyNode:
        for n in self.nodes:
            if n.id == node_id:
                return n
        raise KeyError(node_id)

    def nodes_of_type(self, node_type: NodeType) -> List[TopologyNode]:
        return [n for n in self.nodes if n.type is node_type]

    def to_dict(self) -> dict:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "links": [l.to_dict() for l in self.links],
            "width": self.width,
            "height": self.height,
        }


@dataclass(frozen=True)
class CablingEntry:
    from_id: str
    to_id: str
    cable_type: str  # "Fiber Optic" | "Copper Straight-Through"

    def to_dict(self) -> dict:
        return {"from": self.from_id, "to": self.to_id, "cableType": self.cable_type}


@dataclass(frozen=True)
class CostEstimate:
    hardware_cost: float
    installation_cost: float
    total: float

    def to_dict(self) -> dict:
        return {
            "hardwareCost": self.hardware_cost,
            "installationCost": self.installation_cost,
            "total": self.total,
        }


@dataclass(frozen=True)
class DeviceCatalog:
    """Fixed hardware role set of one tier. Absent roles are None."""

    access_switch: str
    firewall: Optional[str] = None
    core_switch: Optional[str] = None
    core_switch_count: int = 0
    router: Optional[str] = None
    voice_gateway: Optional[str] = None

    def to_dict(self) -> dict:
        d: Dict[str, object] = {"accessSwitch": {"name": self.access_switch}}
        if self.firewall:
            d["firewall"] = {"name": self.firewall}
        if self.core_switch:
            d["coreSwitch"] = {"name": self.core_switch, "count": self.core_switch_count}
        if self.router:
            d["router"] = {"name": self.router}
        if self.voice_gateway:
            d["voipGateway"] = {"name": self.voice_gateway}
        return d


@dataclass(frozen=True)
class Design:
    """
    Root aggregate of one generation pass.

    Created fresh on every call; never patched. Node coordinates are a
    starting layout only, repositioning lives in a separate overlay.
    """

    tier: Tier
    devices: DeviceCatalog
    address_plan: AddressPlan
    departments: Tuple[Department, ...]
    services: ServiceFlags
    vlans: Tuple[VlanRecord, ...]
    servers: Tuple[ServerRecord, ...]
    topology: Topology
    configs: Dict[str, str]
    cabling_guide: Tuple[CablingEntry, ...]

    @property
    def base_network(self) -> str:
        return self.address_plan.base_network(self.tier)

    @property
    def cloud_services(self) -> Dict[str, bool]:
        return dict(self.services.cloud)

    def vlan(self, vlan_id: int) -> VlanRecord:
        for v in self.vlans:
            if v.vlan_id == vlan_id:
                return v
        raise KeyError(vlan_id)

    def vlan_named(self, name: str) -> Optional[VlanRecord]:
        for v in self.vlans:
            if v.name == name:
                return v
        return None

    def to_dict(self) -> dict:
        return {
            "tier": self.tier.value,
            "devices": self.devices.to_dict(),
            "addressPlan": self.address_plan.to_dict(),
            "departments": [d.to_dict() for d in self.departments],
            "services": self.services.to_dict(),
            "ipSchema": {"vlans": [v.to_dict() for v in self.vlans]},
            "servers": [s.to_dict() for s in self.servers],
            "topology": self.topology.to_dict(),
            "configs": dict(self.configs),
            "cablingGuide": [c.to_dict() for c in self.cabling_guide],
        }
