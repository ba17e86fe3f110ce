"""
Network Design Kernel — Canonical Hashing v1.0

Deterministic canonical serialization + SHA-256 hashing of a Design.

Rules:
  - Node coordinates and diagram width excluded (presentation-only)
  - Nodes sorted by id, links by (source, target, media)
  - VLANs in table order (order is part of the design)
  - Configs sorted by device name
  - UTF-8 JSON, no whitespace
"""

from __future__ import annotations

import hashlib
import json
from typing import Any, Dict

from .domain_types import Design


def canonical_serialize(design: Design) -> bytes:
    """Canonical serialization of a Design to UTF-8 JSON bytes."""
    obj = _build_canonical_dict(design)
    return json.dumps(obj, ensure_ascii=True, separators=(",", ":"), sort_keys=False).encode("utf-8")


def canonical_hash(design: Design) -> str:
    """SHA-256 of canonical serialization. Lowercase hex string."""
    return hashlib.sha256(canonical_serialize(design)).hexdigest()


def _build_canonical_dict(design: Design) -> Dict[str, Any]:
    nodes = [
        {"id": n.id, "label": n.label, "type": n.type.value, "vlanId": n.vlan_id}
        for n in sorted(design.topology.nodes, key=lambda n: n.id)
    ]
    links = [
        [l.source_id, l.target_id, l.media_type.value]
        for l in sorted(
            design.topology.links,
            key=lambda l: (l.source_id, l.target_id, l.media_type.value),
        )
    ]
    return {
        "engine_version": 1,
        "tier": design.tier.value,
        "devices": design.devices.to_dict(),
        "address_plan": design.address_plan.to_dict(),
        "vlans": [v.to_dict() for v in design.vlans],
        "servers": [s.to_dict() for s in design.servers],
        "nodes": nodes,
        "links": links,
        "configs": [[name, design.configs[name]] for name in sorted(design.configs)],
        "cabling": [c.to_dict() for c in design.cabling_guide],
    }
