"""
FastAPI web server — catalog, topology validation and AI response endpoints.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from circuitmind.catalog import CatalogResult, catalog_to_dict, load_catalog
from circuitmind.pipeline.solution import (
    SolutionResponseError, interpret_payload, interpret_provider_response,
    interpret_response_text, normalize_solution, solution_to_catalog, solution_to_dict,
    solution_to_topology,
)
from circuitmind.pipeline.topology import (
    has_blocking_issues, issues_to_dict, parse_topology, topology_to_dict, validate_topology,
)

log = logging.getLogger("circuitmind.server")

# ── App ────────────────────────────────────────────────────────────

app = FastAPI(title="CircuitMind")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache(maxsize=1)
def get_catalog() -> CatalogResult:
    """Load the bundled catalog once per process."""
    return load_catalog()


# ── Models ─────────────────────────────────────────────────────────

class ValidateRequest(BaseModel):
    topology: dict[str, Any]


class InterpretRequest(BaseModel):
    text: str | None = None
    payload: Any = None
    provider: str | None = None
    response: Any = None


class SolutionTopologyRequest(BaseModel):
    solution: dict[str, Any]


# ── Routes ─────────────────────────────────────────────────────────

@app.get("/api/catalog")
def get_catalog_route():
    """Return every catalog module plus any load errors."""
    return catalog_to_dict(get_catalog())


@app.post("/api/topology/validate")
def validate_topology_route(req: ValidateRequest):
    """Validate an editor topology against the bundled catalog."""
    try:
        topology = parse_topology(req.topology)
    except (KeyError, TypeError, ValueError) as e:
        raise HTTPException(400, f"Invalid topology: {e}")

    issues = validate_topology(topology, get_catalog())
    return {"issues": issues_to_dict(issues), "blocking": has_blocking_issues(issues)}


@app.post("/api/solutions/interpret")
def interpret_route(req: InterpretRequest):
    """Turn raw model output into normalized design solutions.

    Exactly one input form is used, checked in this order: ``text``,
    ``provider`` + ``response``, ``payload``.
    """
    try:
        if req.text is not None:
            solutions = interpret_response_text(req.text)
        elif req.provider is not None and req.response is not None:
            solutions = interpret_provider_response(req.provider, req.response)
        elif req.payload is not None:
            solutions = interpret_payload(req.payload)
        else:
            raise HTTPException(400, "Provide text, payload, or provider and response.")
    except SolutionResponseError as e:
        log.info("Could not interpret AI response: %s", e)
        raise HTTPException(422, f"Could not interpret AI response: {e}")

    return {"solutions": [solution_to_dict(s) for s in solutions]}


@app.post("/api/solutions/topology")
def solution_topology_route(req: SolutionTopologyRequest):
    """Convert a solution's module list into a catalog and topology and
    validate the result."""
    solution = normalize_solution(req.solution)
    catalog = solution_to_catalog(solution)
    topology = solution_to_topology(solution, catalog)
    issues = validate_topology(topology, catalog)
    return {
        "solution": solution_to_dict(solution),
        "catalog": catalog_to_dict(catalog),
        "topology": topology_to_dict(topology),
        "issues": issues_to_dict(issues),
        "blocking": has_blocking_issues(issues),
    }


# ── Entry point ────────────────────────────────────────────────────

def main(host: str = "127.0.0.1", port: int = 8000):
    import uvicorn
    uvicorn.run("circuitmind.web.server:app", host=host, port=port, reload=False)


if __name__ == "__main__":
    main()
