"""
Network Design Kernel v1.0
Deterministic, in-memory synthesis of a network design (VLAN plan,
topology, device configs, cabling, cost) from a department roster,
service flags and a design tier.
"""

from .domain_types import (
    Tier, NodeType, MediaType, Department, ServiceFlags, AddressPlan,
    VlanRecord, ServerRecord, TopologyNode, TopologyLink, Topology,
    CablingEntry, CostEstimate, DeviceCatalog, Design,
)
from .catalog import TIER_POLICIES, TierPolicy, policy_for, device_model, node_glyph
from .addressing import allocate_vlans, allocate_servers
from .topology import build_topology, access_switch_count, access_switches
from .configs import synthesize_configs
from .cabling import derive_cabling_guide
from .cost import estimate_cost, estimate_design_cost
from .engine import synthesize_design
from .invariants import InvariantViolationError, validate_design
from .hashing import canonical_serialize, canonical_hash
from .diagnostics import compute_diagnostics

__all__ = [
    "Tier",
    "NodeType",
    "MediaType",
    "Department",
    "ServiceFlags",
    "AddressPlan",
    "VlanRecord",
    "ServerRecord",
    "TopologyNode",
    "TopologyLink",
    "Topology",
    "CablingEntry",
    "CostEstimate",
    "DeviceCatalog",
    "Design",
    "TIER_POLICIES",
    "TierPolicy",
    "policy_for",
    "device_model",
    "node_glyph",
    "allocate_vlans",
    "allocate_servers",
    "build_topology",
    "access_switch_count",
    "access_switches",
    "synthesize_configs",
    "derive_cabling_guide",
    "estimate_cost",
    "estimate_design_cost",
    "synthesize_design",
    "InvariantViolationError",
    "validate_design",
    "canonical_serialize",
    "canonical_hash",
    "compute_diagnostics",
]
