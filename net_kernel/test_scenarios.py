"""
Network Design Kernel v1.0 — Test Scenarios

Executable scenarios + canonical hash verification:
  1. Enterprise reference roster (8 VLANs, 4 access switches, voice gateway)
  2. SOHO single department (one flat LAN, shared switch, cost x 1.20)
  3. Standard with every on-prem service off (no servers, static SERVERS VLAN)
  4. Graph closure, cabling projection and cost formula on all tiers
  5. Config templates (HSRP, SVIs, voice VLAN, DMZ NAT)
  6. Dangling link / missing catalog role -> InvariantViolationError
  7. Idempotence and hash stability

Run:  py -3 -m net_kernel.test_scenarios
"""

from __future__ import annotations

import dataclasses
import math
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from net_kernel.cabling import COPPER_CABLE, FIBER_CABLE
from net_kernel.catalog import NODE_GLYPHS, device_model, policy_for
from net_kernel.configs import synthesize_configs
from net_kernel.cost import estimate_design_cost
from net_kernel.diagnostics import compute_diagnostics
from net_kernel.domain_types import (
    AddressPlan,
    Department,
    DeviceCatalog,
    MediaType,
    NodeType,
    ServiceFlags,
    Tier,
    TopologyLink,
)
from net_kernel.engine import synthesize_design
from net_kernel.hashing import canonical_hash
from net_kernel.invariants import InvariantViolationError, validate_design
from net_kernel.topology import access_switch_count, access_switches

PLAN = AddressPlan(base_octet=1, dmz_octet=0)

ROSTER = (
    Department(id=1, name="Sales & Marketing", employees=18, vlan_id=20),
    Department(id=2, name="Finance & Acc", employees=12, vlan_id=30),
    Department(id=3, name="HR & Logistics", employees=10, vlan_id=40),
    Department(id=4, name="ICT", employees=15, vlan_id=50),
)

ALL_ON = ServiceFlags.defaults()
ALL_OFF = ServiceFlags()


def _design(tier: Tier, departments=ROSTER, services=ALL_ON, plan=PLAN):
    return synthesize_design(tier, departments, services, plan)


def _lines(text: str):
    return text.splitlines()


# ───────────────────────────────────────────────────────────────
# Scenario 1: Enterprise reference roster
# ───────────────────────────────────────────────────────────────

def test_enterprise_vlan_table():
    design = _design(Tier.ENTERPRISE)
    assert len(design.vlans) == 1 + len(ROSTER) + 1 + 1 + 1
    assert [v.vlan_id for v in design.vlans] == [10, 20, 30, 40, 50, 70, 90, 102]
    assert [v.name for v in design.vlans] == [
        "Management", "Data_SALESMARKETING", "Data_FINANCEACC",
        "Data_HRLOGISTICS", "Data_ICT", "VoIP", "SERVERS", "DMZ",
    ]

    sales = design.vlan(20)
    assert sales.subnet == "10.1.20.0/24"
    assert sales.gateway == "10.1.20.1"
    assert sales.dhcp_range == "10.1.20.10 - .254"

    assert design.vlan(10).dhcp_range == "N/A"
    assert design.vlan(90).dhcp_range == "Static"
    assert design.vlan(102).subnet == "172.16.0.0/24"


def test_enterprise_access_layer():
    design = _design(Tier.ENTERPRISE)
    switches = access_switches(design.topology)
    assert [s.id for s in switches] == [
        "Access-SALE-SW1", "Access-FINA-SW1", "Access-HRLO-SW1", "Access-ICT-SW1",
    ]
    assert [s.vlan_id for s in switches] == [20, 30, 40, 50]

    # round-robin across the two cores
    uplinks = {l.target_id: l.source_id for l in design.topology.links}
    assert [uplinks[s.id] for s in switches] == ["core1", "core2", "core1", "core2"]

    for s in switches:
        children = [l.target_id for l in design.topology.links if l.source_id == s.id]
        assert children == [f"pc-{s.id}", f"phone-{s.id}", f"laptop-{s.id}", f"printer-{s.id}"]


def test_enterprise_voice_gateway():
    design = _design(Tier.ENTERPRISE)
    assert design.topology.node("voipgw").type is NodeType.ROUTER
    assert any(l.source_id == "voipgw" and l.target_id == "core1" for l in design.topology.links)

    no_voip = _design(Tier.ENTERPRISE, services=ALL_ON.with_service("voip", False))
    assert "voipgw" not in {n.id for n in no_voip.topology.nodes}
    assert "Voice-GW" not in no_voip.configs
    # VLAN 70 is kept in the table either way
    assert no_voip.vlan(70).name == "VoIP"


def test_enterprise_servers():
    design = _design(Tier.ENTERPRISE)
    assert [(s.name, s.ip, s.vlan_name) for s in design.servers] == [
        ("DHCP_Server", "10.1.90.10", "SERVERS"),
        ("DNS_Server", "10.1.90.11", "SERVERS"),
        ("AAA_RADIUS", "10.1.90.12", "SERVERS"),
        ("Web_Server", "172.16.0.10", "DMZ"),
    ]
    links = {(l.source_id, l.target_id) for l in design.topology.links}
    assert ("firewall", "Web_Server") in links
    assert ("core1", "DHCP_Server") in links
    assert ("core1", "AAA_RADIUS") in links


# ───────────────────────────────────────────────────────────────
# Scenario 2: SOHO single department
# ───────────────────────────────────────────────────────────────

def test_soho_single_department():
    design = _design(Tier.SOHO, departments=(Department(1, "Office", 5, 10),))
    assert len(design.vlans) == 1
    lan = design.vlans[0]
    assert lan.vlan_id == 1
    assert lan.subnet == "192.168.1.0/24"
    assert lan.subnet.startswith("192.168.") and lan.subnet.endswith("/24")

    topo = design.topology
    assert len(topo.nodes_of_type(NodeType.ROUTER)) == 1
    assert len(topo.nodes_of_type(NodeType.SWITCH)) == 1
    assert access_switches(topo) == []
    end_devices = [n for n in topo.nodes if n.type in (
        NodeType.PC, NodeType.IPPHONE, NodeType.LAPTOP, NodeType.PRINTER)]
    assert len(end_devices) == 4
    assert all(
        l.source_id == "switch" for l in topo.links if l.target_id in {n.id for n in end_devices}
    )

    assert design.servers == ()
    assert set(design.configs) == {"SOHO-RTR", "LAN-SW"}

    cost = estimate_design_cost(design)
    assert cost.hardware_cost == 25000 + 6000
    assert math.isclose(cost.total, (25000 + 6000) * 1.20)


def test_soho_ignores_department_vlans():
    design = _design(Tier.SOHO)
    assert [v.vlan_id for v in design.vlans] == [1]
    # one group of four end devices per access group, all on the shared switch
    assert len(design.topology.nodes) == 3 + 4 * len(ROSTER)


# ───────────────────────────────────────────────────────────────
# Scenario 3: Standard with every on-prem service off
# ───────────────────────────────────────────────────────────────

def test_standard_all_services_off():
    design = _design(Tier.STANDARD, services=ALL_OFF)
    assert design.servers == ()
    servers_vlan = design.vlan_named("SERVERS")
    assert servers_vlan is not None
    assert servers_vlan.dhcp_range == "Static"
    assert design.topology.nodes_of_type(NodeType.SERVER) == []


def test_standard_has_no_dmz_or_voip():
    design = _design(Tier.STANDARD)
    assert [v.vlan_id for v in design.vlans] == [20, 30, 40, 50, 90]
    assert [s.name for s in design.servers] == ["DHCP_Server", "DNS_Server"]
    diag = compute_diagnostics(design)
    assert any("no DMZ" in w for w in diag["warnings"])


# ───────────────────────────────────────────────────────────────
# Scenario 4: Cross-tier properties
# ───────────────────────────────────────────────────────────────

def test_access_switch_count():
    assert access_switch_count(1) == 1
    assert access_switch_count(20) == 1
    assert access_switch_count(21) == 2
    assert access_switch_count(45) == 3

    roster = (Department(1, "Warehouse", 45, 20), Department(2, "Admin", 3, 30))
    design = _design(Tier.STANDARD, departments=roster)
    per_vlan = {}
    for s in access_switches(design.topology):
        per_vlan[s.vlan_id] = per_vlan.get(s.vlan_id, 0) + 1
    assert per_vlan == {20: 3, 30: 1}


def test_graph_closure_all_tiers():
    for tier in Tier:
        design = _design(tier)
        ids = {n.id for n in design.topology.nodes}
        assert len(ids) == len(design.topology.nodes)
        for link in design.topology.links:
            assert link.source_id in ids and link.target_id in ids


def test_cabling_projection_all_tiers():
    for tier in Tier:
        design = _design(tier)
        assert len(design.cabling_guide) == len(design.topology.links)
        for link, entry in zip(design.topology.links, design.cabling_guide):
            assert (entry.from_id, entry.to_id) == (link.source_id, link.target_id)
            expected = FIBER_CABLE if link.media_type is MediaType.FIBER else COPPER_CABLE
            assert entry.cable_type == expected


def test_cost_formula_all_tiers():
    rates = {Tier.SOHO: 0.20, Tier.STANDARD: 0.25, Tier.ENTERPRISE: 0.30}
    for tier, rate in rates.items():
        assert policy_for(tier).install_rate == rate
        cost = estimate_design_cost(_design(tier))
        assert math.isclose(cost.total, cost.hardware_cost + cost.hardware_cost * rate)

    enterprise = estimate_design_cost(_design(Tier.ENTERPRISE))
    assert enterprise.hardware_cost == 4 * 6000 + 2 * 35000 + 30000 + 25000

    standard = estimate_design_cost(_design(Tier.STANDARD))
    assert standard.hardware_cost == 4 * 6000 + 35000 + 38000


def test_diagram_width_grows_with_switches():
    small = _design(Tier.STANDARD)
    assert small.topology.width == 1200
    assert small.topology.height == 800

    big = _design(Tier.STANDARD, departments=(Department(1, "Plant", 120, 20),))
    assert len(access_switches(big.topology)) == 6
    assert big.topology.width == 6 * 250 + 100
    xs = [s.x for s in access_switches(big.topology)]
    assert xs == sorted(set(xs))


def test_switch_name_collision():
    roster = (Department(1, "Sales", 5, 20), Department(2, "Sales Ops", 5, 30))
    design = _design(Tier.STANDARD, departments=roster)
    assert [s.id for s in access_switches(design.topology)] == [
        "Access-SALE-SW1", "Access-SALE-2-SW1",
    ]


def test_soho_colliding_names_keep_node_ids_unique():
    # SOHO does not look at vlan ids, so a roster may repeat them
    roster = (
        Department(1, "Sales A", 5, 0),
        Department(2, "Sales B", 5, 0),
        Department(3, "Sales C", 5, 0),
    )
    design = _design(Tier.SOHO, departments=roster)
    ids = [n.id for n in design.topology.nodes]
    assert len(ids) == len(set(ids))
    assert "pc-Access-SALE-3-SW1" in ids
    validate_design(design)


def test_device_model_dispatch():
    enterprise = _design(Tier.ENTERPRISE)
    assert device_model(enterprise, NodeType.ROUTER) == "2911 Router"
    assert device_model(enterprise, NodeType.FIREWALL) == "ASA 5506-X"
    assert device_model(enterprise, NodeType.MLSWITCH) == "3650-24PS"
    assert device_model(enterprise, NodeType.PC) == "PC-PT"

    standard = _design(Tier.STANDARD)
    assert device_model(standard, NodeType.ROUTER) == "4321 ISR"
    try:
        device_model(standard, NodeType.FIREWALL)
        raise AssertionError("expected InvariantViolationError")
    except InvariantViolationError as e:
        assert e.rule == "config_role"

    assert set(NODE_GLYPHS) == set(NodeType)


# ───────────────────────────────────────────────────────────────
# Scenario 5: Config templates
# ───────────────────────────────────────────────────────────────

def test_enterprise_config_set():
    design = _design(Tier.ENTERPRISE)
    assert list(design.configs) == [
        "ASA-FW", "Core-SW1", "Core-SW2", "Voice-GW",
        "Access-SALE-SW1", "Access-FINA-SW1", "Access-HRLO-SW1", "Access-ICT-SW1",
    ]
    for name, text in design.configs.items():
        lines = _lines(text)
        assert f"hostname {name}" in lines
        assert "enable secret class" in lines
        assert "service password-encryption" in lines


def test_core_switch_redundancy():
    design = _design(Tier.ENTERPRISE)
    core1 = _lines(design.configs["Core-SW1"])
    core2 = _lines(design.configs["Core-SW2"])

    assert "interface Vlan20" in core1
    assert " ip address 10.1.20.2 255.255.255.0" in core1
    assert " ip address 10.1.20.3 255.255.255.0" in core2
    assert " standby 20 ip 10.1.20.1" in core1
    assert " standby 20 priority 110" in core1
    assert " standby 20 priority 100" in core2

    # management and DMZ carry no SVI
    assert "interface Vlan10" not in core1
    assert "interface Vlan102" not in core1
    assert "vlan 102" in core1

    assert " network 10.1.0.0 0.0.255.255 area 0" in core1
    assert " router-id 1.1.1.2" in core2


def test_standard_core_switch():
    design = _design(Tier.STANDARD)
    core = _lines(design.configs["Core-L3-SW"])
    assert " ip address 10.1.20.1 255.255.255.0" in core
    assert not any(l.startswith(" standby") for l in core)
    assert "ip route 0.0.0.0 0.0.0.0 10.1.1.254" in core

    router = _lines(design.configs["Edge-RTR"])
    assert " ip address 10.1.1.254 255.255.255.0" in router
    assert "ip route 10.1.0.0 255.255.0.0 10.1.1.1" in router


def test_access_switch_voice_vlan():
    on = _lines(_design(Tier.ENTERPRISE).configs["Access-ICT-SW1"])
    assert " switchport access vlan 50" in on
    assert " switchport voice vlan 70" in on
    assert "interface GigabitEthernet0/1" in on

    off = _design(Tier.ENTERPRISE, services=ALL_ON.with_service("voip", False))
    assert " switchport voice vlan 70" not in _lines(off.configs["Access-ICT-SW1"])


def test_firewall_web_rules_follow_web_server():
    with_web = _design(Tier.ENTERPRISE).configs["ASA-FW"]
    assert " host 172.16.0.10" in _lines(with_web)
    assert "access-group outside_access_in in interface outside" in _lines(with_web)

    without = _design(Tier.ENTERPRISE, services=ALL_ON.with_service("web", False)).configs["ASA-FW"]
    assert "WEB_SERVER" not in without


def test_voice_gateway_source_address():
    gw = _lines(_design(Tier.ENTERPRISE).configs["Voice-GW"])
    assert " ip source-address 10.1.70.1 port 2000" in gw
    assert " number 1001" in gw


# ───────────────────────────────────────────────────────────────
# Scenario 6: Intentional failures
# ───────────────────────────────────────────────────────────────

def test_dangling_link_rejected():
    design = _design(Tier.STANDARD)
    broken_topo = dataclasses.replace(
        design.topology,
        links=design.topology.links + (TopologyLink("core1", "ghost"),),
    )
    broken = dataclasses.replace(design, topology=broken_topo)
    try:
        validate_design(broken)
        raise AssertionError("expected InvariantViolationError")
    except InvariantViolationError as e:
        assert e.rule == "link_refs"
        assert "ghost" in str(e)


def test_missing_catalog_role_rejected():
    design = _design(Tier.ENTERPRISE)
    stripped = dataclasses.replace(
        design, devices=DeviceCatalog(access_switch="2960-24TT", core_switch="3650-24PS"),
    )
    try:
        synthesize_configs(stripped)
        raise AssertionError("expected InvariantViolationError")
    except InvariantViolationError as e:
        assert e.rule == "config_role"


# ───────────────────────────────────────────────────────────────
# Scenario 7: Idempotence / hashing
# ───────────────────────────────────────────────────────────────

def test_idempotence():
    for tier in Tier:
        a = _design(tier)
        b = _design(tier)
        assert a.to_dict() == b.to_dict()
        assert canonical_hash(a) == canonical_hash(b)
        assert estimate_design_cost(a) == estimate_design_cost(b)


def test_hash_ignores_coordinates_and_cloud_flags():
    design = _design(Tier.ENTERPRISE)
    moved_nodes = tuple(
        dataclasses.replace(n, x=n.x + 40, y=n.y - 10) for n in design.topology.nodes
    )
    moved = dataclasses.replace(
        design, topology=dataclasses.replace(design.topology, nodes=moved_nodes, width=5000),
    )
    assert canonical_hash(moved) == canonical_hash(design)

    no_cloud = _design(Tier.ENTERPRISE, services=ServiceFlags(on_prem=ALL_ON.on_prem))
    assert canonical_hash(no_cloud) == canonical_hash(design)
    assert no_cloud.cloud_services != design.cloud_services


def test_hash_tracks_address_plan():
    a = _design(Tier.ENTERPRISE)
    b = _design(Tier.ENTERPRISE, plan=AddressPlan(base_octet=7, dmz_octet=3))
    assert canonical_hash(a) != canonical_hash(b)
    assert b.vlan(20).subnet == "10.7.20.0/24"
    assert b.vlan(102).subnet == "172.16.3.0/24"


def test_diagnostics_warnings():
    design = _design(Tier.ENTERPRISE, services=ALL_ON.with_service("voip", False))
    diag = compute_diagnostics(design)
    assert diag["vlan_count"] == 8
    assert diag["access_switch_count"] == 4
    assert diag["core_uplinks"] == {"Core-SW1": 2, "Core-SW2": 2}
    assert any("VLAN 70" in w for w in diag["warnings"])
    assert any("m365" in w for w in diag["warnings"])
    assert diag["fiber_links"] + diag["copper_links"] == diag["link_count"]


# ───────────────────────────────────────────────────────────────
# Runner
# ───────────────────────────────────────────────────────────────

_pass = 0
_fail = 0


def _test(name, fn):
    global _pass, _fail
    try:
        fn()
        print(f"  [PASS] {name}")
        _pass += 1
    except Exception as exc:
        print(f"  [FAIL] {name}: {exc!r}")
        _fail += 1


def main() -> None:
    tests = [(name, fn) for name, fn in globals().items()
             if name.startswith("test_") and callable(fn)]

    print(f"\nRunning {len(tests)} kernel scenarios...\n")
    for name, fn in tests:
        _test(name, fn)

    print(f"\n{'='*60}")
    print(f"  RESULTS: {_pass}/{_pass + _fail} scenarios passed")
    print(f"{'='*60}")
    sys.exit(0 if _fail == 0 else 1)


if __name__ == "__main__":
    main()
