# file: net_runtime/test_runtime.py
"""
Design Runtime v1.0 -- Integration Test

Scenario:
  Phase 1: Open a session on the default Enterprise request
  Phase 2: Roster edits regenerate the whole design and record drift
  Phase 3: Tier and service switches
  Phase 4: Rejected edits leave the session untouched
  Phase 5: Layout overlay (drag) never touches the design
  Phase 6: Rendering + observability
  Phase 7: Seeded sessions are reproducible

Exit 0 on success, 1 on failure.
"""

from __future__ import annotations

import math
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from net_kernel.domain_types import Department, Tier
from net_kernel.hashing import canonical_hash

from net_generator.design_request import RequestValidationError, default_request

from net_runtime.drift import compare_designs
from net_runtime.observability import collect_metrics
from net_runtime.session import DesignSession


def _session(tier: Tier = Tier.ENTERPRISE) -> DesignSession:
    return DesignSession(default_request(tier))


# ================================================================
# PHASE 1: Open session
# ================================================================

def test_open_session():
    session = _session()
    assert session.generation == 1
    assert session.last_drift is None
    assert session.design.tier is Tier.ENTERPRISE
    assert len(session.design.vlans) == 8
    assert session.layout.overrides == {}


# ================================================================
# PHASE 2: Roster edits
# ================================================================

def test_add_department_regenerates():
    session = _session()
    before = session.design

    session.add_department("Legal", 8)
    dept = session.request.departments[-1]
    assert (dept.id, dept.name, dept.employees, dept.vlan_id) == (5, "Legal", 8, 60)

    assert session.generation == 2
    assert session.design is not before
    assert before.vlan_named("Data_LEGAL") is None

    drift = session.last_drift
    assert drift["added_vlans"] == [60]
    assert drift["removed_vlans"] == []
    assert "Access-LEGA-SW1" in drift["added_nodes"]
    assert "pc-Access-LEGA-SW1" in drift["added_nodes"]
    assert drift["link_count_delta"] == 5
    assert "Access-LEGA-SW1" in drift["changed_configs"]
    assert math.isclose(drift["total_cost_delta"], 6000 * 1.30)


def test_update_and_remove_department():
    session = _session()
    session.update_department(1, employees=45)
    switches = [n.id for n in session.design.topology.nodes if n.id.startswith("Access-SALE-")]
    assert switches == ["Access-SALE-SW1", "Access-SALE-SW2", "Access-SALE-SW3"]
    assert session.design.vlan(20).name == "Data_SALESMARKETING"

    session.remove_department(1)
    assert [d.id for d in session.request.departments] == [2, 3, 4]
    assert 20 in session.last_drift["removed_vlans"]
    assert "Access-SALE-SW1" in session.last_drift["removed_nodes"]


def test_last_department_is_kept():
    session = DesignSession(default_request(Tier.STANDARD).with_changes(
        departments=(Department(1, "Office", 12, 20),),
    ))
    session.remove_department(1)
    assert [d.name for d in session.request.departments] == ["Office"]
    assert session.last_drift["added_nodes"] == []
    assert session.last_drift["removed_nodes"] == []


# ================================================================
# PHASE 3: Tier / service switches
# ================================================================

def test_switch_tier():
    session = _session()
    session.set_tier("standard")
    drift = session.last_drift
    assert drift["tier_changed"] is True
    assert "firewall" in drift["removed_nodes"]
    assert "core2" in drift["removed_nodes"]
    assert "voipgw" in drift["removed_nodes"]
    assert "router" in drift["added_nodes"]
    assert drift["removed_vlans"] == [10, 70, 102]
    assert session.design.base_network == "10.1"

    session.set_tier(Tier.SOHO)
    assert [v.vlan_id for v in session.design.vlans] == [1]
    assert session.design.base_network == "192.168.1"


def test_toggle_voip():
    session = _session()
    session.set_service("voip", False)
    drift = session.last_drift
    assert drift["removed_nodes"] == ["voipgw"]
    assert "Voice-GW" in drift["changed_configs"]
    assert "Access-ICT-SW1" in drift["changed_configs"]
    assert math.isclose(drift["total_cost_delta"], -25000 * 1.30)


def test_cloud_flags_are_inert():
    session = _session()
    before = session.design_hash()
    session.set_service("aws", False)
    assert session.design_hash() == before
    assert session.last_drift["changed_configs"] == []
    assert session.last_drift["total_cost_delta"] == 0
    assert session.design.cloud_services["aws"] is False


# ================================================================
# PHASE 4: Rejected edits
# ================================================================

def test_rejected_edit_keeps_design():
    session = _session()
    design, generation = session.design, session.generation

    for edit in (
        lambda: session.update_department(1, employees=0),
        lambda: session.update_department(2, name="   "),
        lambda: session.set_floors(0),
        # VLAN 70 is reserved for VoIP on Enterprise
        lambda: session.set_departments(
            session.request.departments + (Department(9, "Voice", 3, 70),)
        ),
    ):
        try:
            edit()
            raise AssertionError("expected RequestValidationError")
        except RequestValidationError:
            pass

    assert session.design is design
    assert session.generation == generation
    assert session.last_drift is None


def test_unknown_service_and_department():
    session = _session()
    try:
        session.set_service("fax", True)
        raise AssertionError("expected ValueError")
    except ValueError:
        pass
    try:
        session.update_department(99, employees=4)
        raise AssertionError("expected KeyError")
    except KeyError:
        pass


# ================================================================
# PHASE 5: Layout overlay
# ================================================================

def test_move_node_only_touches_overlay():
    session = _session()
    design = session.design
    before_hash = session.design_hash()

    session.move_node("core1", 10, 20)
    rendered = {n["id"]: n for n in session.render()["diagram"]["nodes"]}
    assert (rendered["core1"]["x"], rendered["core1"]["y"]) == (10, 20)
    assert (rendered["core2"]["x"], rendered["core2"]["y"]) == (800, 320)

    assert session.design is design
    original = design.topology.node("core1")
    assert (original.x, original.y) == (400, 320)
    assert session.design_hash() == before_hash

    try:
        session.move_node("ghost", 0, 0)
        raise AssertionError("expected KeyError")
    except KeyError:
        pass


def test_regeneration_resets_overlay():
    session = _session()
    session.move_node("firewall", 1, 1)
    assert session.layout.overrides == {"firewall": (1, 1)}
    session.set_service("dns", False)
    assert session.layout.overrides == {}


# ================================================================
# PHASE 6: Rendering + observability
# ================================================================

def test_render_views():
    session = _session()
    view = session.render()
    assert set(view) == {"tier", "ip_plan", "servers", "diagram", "cabling", "configs", "cost"}
    assert view["tier"] == "Enterprise"
    assert [v["vlanId"] for v in view["ip_plan"]] == [10, 20, 30, 40, 50, 70, 90, 102]
    assert len(view["cabling"]) == len(view["diagram"]["links"])
    assert set(view["configs"]) == set(session.design.configs)
    assert view["cost"]["total"] == session.cost.total

    nodes = {n["id"]: n for n in view["diagram"]["nodes"]}
    assert (nodes["core1"]["model"], nodes["core1"]["glyph"]) == ("3650-24PS", "layers")
    assert (nodes["firewall"]["model"], nodes["firewall"]["glyph"]) == ("ASA 5506-X", "shield")
    assert nodes["voipgw"]["model"] == "2911 Router"
    assert nodes["pc-Access-SALE-SW1"]["glyph"] == "monitor"
    assert all(n["model"] and n["glyph"] for n in nodes.values())


def test_render_soho_node_models():
    nodes = {n["id"]: n for n in _session(Tier.SOHO).render()["diagram"]["nodes"]}
    assert nodes["switch"]["model"] == "2960-24TT"
    assert nodes["router"]["model"] == "1941 ISR"
    assert nodes["cloud"]["glyph"] == "cloud"


def test_collect_metrics():
    session = _session()
    metrics = collect_metrics(session)
    assert metrics.generation == 1
    assert metrics.generation_latency_ms >= 0
    assert metrics.node_count == len(session.design.topology.nodes)
    assert metrics.link_count == len(session.design.topology.links)
    assert metrics.vlan_count == 8
    assert metrics.access_switch_count == 4
    assert metrics.total_cost == session.cost.total
    assert metrics.design_hash == canonical_hash(session.design)
    # metrics collection must not advance the session
    assert session.generation == 1


def test_compare_identical_designs():
    session = _session()
    d = session.design.to_dict()
    drift = compare_designs(d, d)
    assert drift["tier_changed"] is False
    assert drift["added_nodes"] == [] and drift["removed_nodes"] == []
    assert drift["link_count_delta"] == 0
    assert drift["changed_configs"] == []
    assert drift["total_cost_delta"] == 0.0


# ================================================================
# PHASE 7: Seeded sessions
# ================================================================

def test_seeded_sessions_reproducible():
    request = default_request(Tier.ENTERPRISE).with_changes(seed=1234)
    a = DesignSession(request)
    b = DesignSession(request)
    assert a.design_hash() == b.design_hash()
    assert a.design.address_plan == b.design.address_plan
    assert 1 <= a.design.address_plan.base_octet <= 250
    assert 0 <= a.design.address_plan.dmz_octet <= 9


# ================================================================
# Runner
# ================================================================

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

    print(f"\nRunning {len(tests)} runtime phases...\n")
    for name, fn in tests:
        _test(name, fn)

    print(f"\n{'='*60}")
    print(f"  {_pass} passed, {_fail} failed out of {_pass + _fail}")
    print(f"{'='*60}")
    sys.exit(0 if _fail == 0 else 1)


if __name__ == "__main__":
    main()
