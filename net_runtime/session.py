# file: net_runtime/session.py
"""
Design Session — orchestrates generator + presentation-side layout.

Every edit builds a new request and regenerates the whole design:

  1. validate_request(new_request)   may raise RequestValidationError
  2. compile_design(new_request)     may raise GeneratorInvariantError
  3. commit request + design, fresh LayoutOverlay, record drift

Steps 1-2 run before anything is committed, so a rejected edit leaves
the session on its previous design. Dragging a node touches only the
overlay.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from net_kernel.catalog import device_model, node_glyph
from net_kernel.cost import estimate_design_cost
from net_kernel.domain_types import CostEstimate, Department, Design, NodeType, Tier
from net_kernel.hashing import canonical_hash
from net_generator.compiler import compile_design
from net_generator.design_request import DesignRequest, validate_request
from net_generator import roster

from .drift import compare_designs
from .layout import LayoutOverlay

logger = logging.getLogger(__name__)


class DesignSession:
    """
    Holds the current request, its Design and a layout overlay.

    The Design is replaced, never patched.
    """

    def __init__(self, request: DesignRequest) -> None:
        validate_request(request)
        self._request = request
        self._design = compile_design(request)
        self._cost = estimate_design_cost(self._design)
        self._layout = LayoutOverlay(self._design)
        self._generation = 1
        self.last_drift: Optional[dict] = None

    # -- State access -------------------------------------------------------

    @property
    def request(self) -> DesignRequest:
        return self._request

    @property
    def design(self) -> Design:
        return self._design

    @property
    def cost(self) -> CostEstimate:
        return self._cost

    @property
    def layout(self) -> LayoutOverlay:
        return self._layout

    @property
    def generation(self) -> int:
        return self._generation

    # -- Edits --------------------------------------------------------------

    def regenerate(self, request: DesignRequest) -> Design:
        """Validate, generate and commit a replacement design."""
        validate_request(request)
        design = compile_design(request)
        cost = estimate_design_cost(design)

        self.last_drift = compare_designs(
            self._design.to_dict(), design.to_dict(),
            self._cost.to_dict(), cost.to_dict(),
        )
        self._request = request
        self._design = design
        self._cost = cost
        self._layout = LayoutOverlay(design)
        self._generation += 1
        logger.debug(
            "session regenerated (generation %d): +%d/-%d nodes",
            self._generation,
            len(self.last_drift["added_nodes"]),
            len(self.last_drift["removed_nodes"]),
        )
        return design

    def set_tier(self, tier: "Tier | str") -> Design:
        return self.regenerate(self._request.with_changes(tier=Tier.parse(tier)))

    def set_floors(self, floors: int) -> Design:
        return self.regenerate(self._request.with_changes(floors=floors))

    def set_departments(self, departments: Sequence[Department]) -> Design:
        return self.regenerate(self._request.with_changes(departments=tuple(departments)))

    def add_department(self, name: str, employees: int = roster.DEFAULT_EMPLOYEES) -> Design:
        return self.set_departments(roster.add_department(self._request.departments, name, employees))

    def update_department(self, dept_id: int, **fields) -> Design:
        return self.set_departments(roster.update_department(self._request.departments, dept_id, **fields))

    def remove_department(self, dept_id: int) -> Design:
        return self.set_departments(roster.remove_department(self._request.departments, dept_id))

    def set_service(self, name: str, enabled: bool) -> Design:
        services = self._request.services.with_service(name, enabled)
        return self.regenerate(self._request.with_changes(services=services))

    def move_node(self, node_id: str, x: float, y: float) -> None:
        self._layout.move(node_id, x, y)

    # -- Rendering ----------------------------------------------------------

    def _render_nodes(self) -> list:
        """Overlay-positioned nodes with the hardware model and icon to draw."""
        nodes = self._layout.apply(self._design)
        for node in nodes:
            node_type = NodeType(node["type"])
            node["model"] = device_model(self._design, node_type)
            node["glyph"] = node_glyph(node_type)
        return nodes

    def render(self) -> dict:
        """The four renderings of the current design, overlay applied."""
        design = self._design
        return {
            "tier": design.tier.value,
            "ip_plan": [v.to_dict() for v in design.vlans],
            "servers": [s.to_dict() for s in design.servers],
            "diagram": {
                "nodes": self._render_nodes(),
                "links": [l.to_dict() for l in design.topology.links],
                "width": design.topology.width,
                "height": design.topology.height,
            },
            "cabling": [c.to_dict() for c in design.cabling_guide],
            "configs": dict(design.configs),
            "cost": self._cost.to_dict(),
        }

    def design_hash(self) -> str:
        return canonical_hash(self._design)
