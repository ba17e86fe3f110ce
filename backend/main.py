# file: backend/main.py
"""
FastAPI Backend — Network Design API v1.

Stateless: every request generates a fresh design.
No in-memory state between requests.

Endpoints:
  GET  /health              liveness
  GET  /catalog/{tier}      device catalog, prices and install rate
  GET  /defaults            default roster, floors and service flags
  POST /design              generate + cost + diagnostics + hash
  POST /design/validate     input validation only
"""
from __future__ import annotations

import logging
import os
import sys
import time
from typing import Dict, List, Optional

from dotenv import load_dotenv

env_path = os.path.join(os.path.dirname(__file__), ".env")
if os.path.exists(env_path):
    load_dotenv(env_path)

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

# Add project root to path for kernel imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from net_kernel.catalog import policy_for
from net_kernel.cost import estimate_design_cost, price_of
from net_kernel.diagnostics import compute_diagnostics
from net_kernel.domain_types import AddressPlan, Department, ServiceFlags, Tier
from net_kernel.hashing import canonical_hash

from net_generator.compiler import GeneratorInvariantError, compile_design
from net_generator.design_request import (
    DEFAULT_DEPARTMENTS,
    DEFAULT_FLOORS,
    DesignRequest,
    RequestValidationError,
    validate_request,
)

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

FRONTEND_URL = os.environ.get("FRONTEND_URL", "http://localhost:3000")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
DEFAULT_TIER = os.environ.get("DEFAULT_TIER", "enterprise")

API_VERSION = "1.0.0"

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

app = FastAPI(
    title="LinkSync Design API",
    version=API_VERSION,
    description="Deterministic Network Design Synthesis API",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        FRONTEND_URL,
        "http://localhost:3000",
        "http://localhost:3001",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Request / Response models
# ---------------------------------------------------------------------------


class DepartmentIn(BaseModel):
    id: int
    name: str
    employees: int
    vlanId: int


class DesignIn(BaseModel):
    tier: str = DEFAULT_TIER
    floors: int = DEFAULT_FLOORS
    departments: List[DepartmentIn]
    on_prem: Dict[str, bool] = {}
    cloud: Dict[str, bool] = {}
    seed: Optional[int] = None
    base_octet: Optional[int] = None
    dmz_octet: Optional[int] = None
    randomize: bool = False


# ---------------------------------------------------------------------------
# Core helpers
# ---------------------------------------------------------------------------


def _parse_tier(value: str) -> Tier:
    try:
        return Tier.parse(value)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


def _build_request(req: DesignIn) -> DesignRequest:
    """Translate the wire body into a DesignRequest. Does not validate the roster."""
    tier = _parse_tier(req.tier)

    plan = None
    if req.base_octet is None and req.dmz_octet is not None:
        raise HTTPException(status_code=400, detail="dmz_octet requires base_octet")
    if req.base_octet is not None:
        try:
            plan = AddressPlan(base_octet=req.base_octet, dmz_octet=req.dmz_octet or 0)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc))

    seed = req.seed
    if seed is None and req.randomize:
        # timestamp seed, a fresh prefix on every call
        seed = int(time.time() * 1000) % (2**31)

    return DesignRequest(
        tier=tier,
        departments=tuple(
            Department(id=d.id, name=d.name, employees=d.employees, vlan_id=d.vlanId)
            for d in req.departments
        ),
        services=ServiceFlags(on_prem=dict(req.on_prem), cloud=dict(req.cloud)),
        floors=req.floors,
        seed=seed,
        address_plan=plan,
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@app.get("/health")
def health():
    return {"status": "ok", "version": API_VERSION}


@app.get("/catalog/{tier}")
def get_catalog(tier: str):
    policy = policy_for(_parse_tier(tier))
    catalog = policy.catalog
    models = [
        m for m in (
            catalog.firewall, catalog.router, catalog.core_switch,
            catalog.access_switch, catalog.voice_gateway,
        )
        if m
    ]
    return {
        "tier": policy.tier.value,
        "devices": catalog.to_dict(),
        "prices": {m: price_of(m) for m in models},
        "install_rate": policy.install_rate,
    }


@app.get("/defaults")
def get_defaults():
    return {
        "tier": _parse_tier(DEFAULT_TIER).value,
        "floors": DEFAULT_FLOORS,
        "departments": [d.to_dict() for d in DEFAULT_DEPARTMENTS],
        "services": ServiceFlags.defaults().to_dict(),
    }


@app.post("/design")
def generate_design(req: DesignIn):
    """
    Generate one design from the submitted roster and service flags.

    Invalid input never reaches the engine: it is rejected with 422
    (roster problems, base octet outside the tier range) or 400
    (unknown tier, malformed address plan).
    """
    request = _build_request(req)
    try:
        validate_request(request)
    except RequestValidationError as exc:
        logger.warning("rejected design request: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc))

    try:
        design = compile_design(request)
    except GeneratorInvariantError as exc:
        logger.exception(
            "design generation failed: tier=%s departments=%d seed=%s",
            request.tier.value, len(request.departments), request.seed,
        )
        raise HTTPException(status_code=500, detail=f"Generation failed: {exc}")

    result = design.to_dict()
    result["cost"] = estimate_design_cost(design).to_dict()
    result["diagnostics"] = compute_diagnostics(design)
    result["design_hash"] = canonical_hash(design)
    result["seed"] = request.seed
    return result


@app.post("/design/validate")
def validate_design_request(req: DesignIn):
    request = _build_request(req)
    try:
        validate_request(request)
    except RequestValidationError as exc:
        return {"valid": False, "errors": [{"field": exc.field, "detail": exc.detail}]}
    return {"valid": True, "errors": []}
