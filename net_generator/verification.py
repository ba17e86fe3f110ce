"""
Verification Harness — Compile twice, compare, and report diagnostics.

Provides both single-request verification and a suite of smoke tests when
run as __main__.
"""

from __future__ import annotations

from net_kernel.cost import estimate_design_cost
from net_kernel.diagnostics import compute_diagnostics
from net_kernel.hashing import canonical_hash

from .compiler import compile_design
from .design_request import DesignRequest


class DeterminismError(Exception):
    """Raised when two generations of one request hash differently."""

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Determinism failure: first hash={expected!r}, second hash={actual!r}"
        )


def verify_generated_design(request: DesignRequest) -> dict:
    """
    Compile a request twice and return hash, cost and diagnostics.

    Raises DeterminismError if the two designs differ structurally.
    """
    first = compile_design(request)
    second = compile_design(request)

    h1 = canonical_hash(first)
    h2 = canonical_hash(second)
    if h1 != h2:
        raise DeterminismError(h1, h2)

    return {
        "design_hash": h1,
        "diagnostics": compute_diagnostics(first),
        "cost": estimate_design_cost(first).to_dict(),
        "vlan_count": len(first.vlans),
        "node_count": len(first.topology.nodes),
    }


# ---------------------------------------------------------------------------
# CLI smoke tests
# ---------------------------------------------------------------------------

def _run_smoke_tests() -> None:
    """Run a suite of deterministic smoke tests."""
    import json

    from net_kernel.domain_types import Tier

    from .design_request import default_request

    all_ok = True
    for tier in Tier:
        for seed in (None, 42):
            request = default_request(tier).with_changes(seed=seed)
            label = f"{tier.name.lower()} seed={seed}"
            print(f"\n{'-'*60}")
            print(f"  {label}")
            print(f"{'-'*60}")
            try:
                result = verify_generated_design(request)
                print(json.dumps(result, indent=2, default=str))
                print("  OK: Deterministic (hash stable)")
            except Exception as exc:
                print(f"  FAIL: {exc}")
                all_ok = False

    print(f"\n{'='*60}")
    if all_ok:
        print("  ALL SMOKE TESTS PASSED")
    else:
        print("  SOME TESTS FAILED")
    print(f"{'='*60}")


if __name__ == "__main__":
    _run_smoke_tests()
