# file: net_runtime/drift.py
"""
Design Drift Comparator — pure function, no side effects.

Computes a structured diff between two design dicts (the output of
Design.to_dict()), e.g. before and after a roster edit.
"""

from __future__ import annotations

from typing import Dict, Optional, Set


def compare_designs(design_a: dict, design_b: dict,
                    cost_a: Optional[dict] = None, cost_b: Optional[dict] = None) -> dict:
    """
    Compare two design dicts and return a structured diff.

    Returns dict with:
        tier_changed, added_nodes, removed_nodes, link_count_delta,
        added_vlans, removed_vlans, changed_configs, total_cost_delta
    """
    nodes_a: Set[str] = {n["id"] for n in design_a.get("topology", {}).get("nodes", [])}
    nodes_b: Set[str] = {n["id"] for n in design_b.get("topology", {}).get("nodes", [])}

    vlans_a: Set[int] = {v["vlanId"] for v in design_a.get("ipSchema", {}).get("vlans", [])}
    vlans_b: Set[int] = {v["vlanId"] for v in design_b.get("ipSchema", {}).get("vlans", [])}

    links_a = len(design_a.get("topology", {}).get("links", []))
    links_b = len(design_b.get("topology", {}).get("links", []))

    configs_a: Dict[str, str] = design_a.get("configs", {})
    configs_b: Dict[str, str] = design_b.get("configs", {})
    changed = sorted(
        name for name in set(configs_a) | set(configs_b)
        if configs_a.get(name) != configs_b.get(name)
    )

    cost_delta = 0.0
    if cost_a is not None and cost_b is not None:
        cost_delta = cost_b["total"] - cost_a["total"]

    return {
        "tier_changed": design_a.get("tier") != design_b.get("tier"),
        "added_nodes": sorted(nodes_b - nodes_a),
        "removed_nodes": sorted(nodes_a - nodes_b),
        "link_count_a": links_a,
        "link_count_b": links_b,
        "link_count_delta": links_b - links_a,
        "added_vlans": sorted(vlans_b - vlans_a),
        "removed_vlans": sorted(vlans_a - vlans_b),
        "changed_configs": changed,
        "total_cost_delta": cost_delta,
    }
