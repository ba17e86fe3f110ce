# file: net_runtime/observability.py
"""
Observability — In-process metrics collection.

No external dependencies. Uses compute_diagnostics + timing.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from .session import DesignSession


@dataclass(frozen=True)
class DesignMetrics:
    """Snapshot of observable session metrics."""

    generation_latency_ms: float
    generation: int
    node_count: int
    link_count: int
    vlan_count: int
    access_switch_count: int
    total_cost: float
    design_hash: str
    warnings: List[str]


def collect_metrics(session: "DesignSession") -> DesignMetrics:
    """
    Collect metrics from a live session.

    Re-generates the current request to measure latency; the result
    is discarded and the session is left untouched.
    """
    from net_kernel.diagnostics import compute_diagnostics
    from net_generator.compiler import compile_design

    start = time.perf_counter()
    compile_design(session.request)
    elapsed_ms = (time.perf_counter() - start) * 1000.0

    diagnostics = compute_diagnostics(session.design)

    return DesignMetrics(
        generation_latency_ms=round(elapsed_ms, 2),
        generation=session.generation,
        node_count=diagnostics["node_count"],
        link_count=diagnostics["link_count"],
        vlan_count=diagnostics["vlan_count"],
        access_switch_count=diagnostics["access_switch_count"],
        total_cost=session.cost.total,
        design_hash=session.design_hash(),
        warnings=diagnostics["warnings"],
    )
