"""
JSON Design Exporter.

Exports a generated design + request metadata to a JSON file.
"""

from __future__ import annotations

import json

from net_kernel.domain_types import Design
from net_kernel.hashing import canonical_hash

from .design_request import DesignRequest


def export_design(design: Design, path: str, request: DesignRequest) -> None:
    """
    Write design + metadata to a JSON file.

    Output format:
    {
        "metadata": {"request": {...}, "address_plan": {...}, "design_hash": str},
        "design": {...}
    }
    """
    doc = {
        "metadata": {
            "request": request.to_dict(),
            "address_plan": design.address_plan.to_dict(),
            "design_hash": canonical_hash(design),
        },
        "design": design.to_dict(),
    }
    with open(path, "w", encoding="utf-8") as f:
        json.dump(doc, f, ensure_ascii=True, indent=2)
