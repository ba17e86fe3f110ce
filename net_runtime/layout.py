"""
Layout Overlay — presentation-owned node positions.

The Design keeps the generator's starting coordinates and is never
mutated. Dragging a node records an override here; overrides are
merged with the design only when rendering.
"""

from __future__ import annotations

from typing import Dict, List, Tuple

from net_kernel.domain_types import Design, TopologyNode


class LayoutOverlay:
    """Mutable node id -> (x, y) map bound to one design."""

    def __init__(self, design: Design) -> None:
        self._node_ids = {n.id for n in design.topology.nodes}
        self._positions: Dict[str, Tuple[float, float]] = {}

    def move(self, node_id: str, x: float, y: float) -> None:
        if node_id not in self._node_ids:
            raise KeyError(f"Unknown node id {node_id!r}")
        self._positions[node_id] = (x, y)

    def reset(self) -> None:
        self._positions.clear()

    def position(self, node: TopologyNode) -> Tuple[float, float]:
        return self._positions.get(node.id, (node.x, node.y))

    @property
    def overrides(self) -> Dict[str, Tuple[float, float]]:
        return dict(self._positions)

    def apply(self, design: Design) -> List[dict]:
        """Render-ready node dicts with overridden coordinates."""
        rendered = []
        for node in design.topology.nodes:
            d = node.to_dict()
            d["x"], d["y"] = self.position(node)
            rendered.append(d)
        return rendered
