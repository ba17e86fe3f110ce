"""
Deterministic Network Design Generator.

Turns a design request (tier, roster, services, address plan) into a
validated, reproducible Design.
"""

from .compiler import compile_design, resolve_address_plan, GeneratorInvariantError
from .deterministic_rng import DeterministicRNG
from .design_request import (
    DEFAULT_DEPARTMENTS,
    DesignRequest,
    RequestValidationError,
    default_request,
    validate_request,
)
from .exporter import export_design
from .roster import add_department, update_department, remove_department, remove_department_by_name
from .verification import DeterminismError, verify_generated_design

__all__ = [
    "compile_design",
    "resolve_address_plan",
    "GeneratorInvariantError",
    "DeterministicRNG",
    "DEFAULT_DEPARTMENTS",
    "DesignRequest",
    "RequestValidationError",
    "default_request",
    "validate_request",
    "export_design",
    "add_department",
    "update_department",
    "remove_department",
    "remove_department_by_name",
    "DeterminismError",
    "verify_generated_design",
]
