"""Dump deterministic reference designs as JSON fixtures, one per tier and seed."""
import json
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from net_kernel.cost import estimate_design_cost
from net_kernel.domain_types import Tier
from net_kernel.hashing import canonical_hash, canonical_serialize
from net_generator.compiler import compile_design
from net_generator.design_request import default_request
from net_generator.exporter import export_design

SEEDS = [None, 42, 99]

results = []

for tier in Tier:
    for seed in SEEDS:
        request = default_request(tier).with_changes(seed=seed)
        design = compile_design(request)
        h = canonical_hash(design)
        cost = estimate_design_cost(design)

        results.append({
            "tier": tier.value,
            "seed": seed,
            "request": request.to_dict(),
            "expected_hash": h,
            "expected_vlan_count": len(design.vlans),
            "expected_node_count": len(design.topology.nodes),
            "expected_total_cost": cost.total,
            "expected_canonical_json": canonical_serialize(design).decode("utf-8"),
        })
        print(f"tier={tier.name.lower()}, seed={seed}: hash={h[:16]}..., "
              f"base={design.base_network}, nodes={len(design.topology.nodes)}, total={cost.total:.0f}")

out_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), "fixtures")
os.makedirs(out_dir, exist_ok=True)

with open(os.path.join(out_dir, "design_fixtures.json"), "w", encoding="utf-8") as f:
    json.dump(results, f, ensure_ascii=True, separators=(",", ":"))

default = default_request()
export_design(compile_design(default), os.path.join(out_dir, "default_design.json"), default)

print(f"\nDumped {len(results)} fixtures + default design to {out_dir}")
