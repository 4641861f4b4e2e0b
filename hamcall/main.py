"""Main application module for Hamcall.

This module defines the FastAPI application, registers middleware,
defines REST endpoints for callsign parsing, and mounts an MCP server so
the same operations are available as Model Context Protocol tools.  The
application is built by ``create_app`` and exposed as a module-level
variable named ``app`` so that ASGI servers like Uvicorn can discover it.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.security import APIKeyHeader
from fastapi_mcp import FastApiMCP
from pydantic import BaseModel, Field

from .adapters.callsign import CallsignParser, get_callsign_parser, merge_callsign_info
from .config import Settings, get_settings
from .middleware import RequestLogMiddleware


class MergeRequest(BaseModel):
    """Body of a re-parse request from an incrementally edited input."""

    callsign: str
    previous: Dict[str, Any] = Field(default_factory=dict)


def create_app(
    settings: Optional[Settings] = None,
    parser: Optional[CallsignParser] = None,
) -> FastAPI:
    """Factory function for constructing the FastAPI application.

    The returned application includes CORS middleware, request logging,
    optional API key authentication, and the callsign parsing endpoints.
    The MCP server is mounted with the operation identifiers defined on the
    route decorators.
    """
    settings = settings or get_settings()
    parser = parser or get_callsign_parser()

    app = FastAPI(title=settings.app_name)

    # -----------------------------------------------------------------------
    # Middleware
    # -----------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLogMiddleware)

    # -----------------------------------------------------------------------
    # API key dependency
    # -----------------------------------------------------------------------
    api_key_header = APIKeyHeader(name="x-api-key", auto_error=False)

    def require_api_key(x_api_key: str = Depends(api_key_header)) -> None:
        """Validate the ``x-api-key`` header against ``HAMCALL_API_KEY``."""
        if settings.api_key and x_api_key != settings.api_key:
            raise HTTPException(status_code=401, detail="Missing or invalid API key")

    # -----------------------------------------------------------------------
    # Routes
    # -----------------------------------------------------------------------
    @app.get("/api")
    def api_root():
        """Return a simple service descriptor for programmatic clients."""
        return {
            "ok": True,
            "service": settings.app_name,
            "docs": "/docs",
            "health": "/health",
            "mcp": "/mcp",
        }

    @app.get("/health")
    def health():
        """Health check endpoint."""
        return {"ok": True}

    @app.get(
        "/api/callsign/{callsign:path}",
        operation_id="callsign_parse",
        tags=["Callsign"],
        dependencies=[Depends(require_api_key)],
    )
    async def rest_callsign_parse(callsign: str) -> JSONResponse:
        """Break a callsign into prefix, indicators and SSID.

        Accepts pre- and post-indicators (``YV5/N0CALL/P``) and SSIDs
        (``N0CALL-7``).  Returns the parsed record with unset fields omitted,
        or a 404 error if the string is not a callsign.
        """
        rec = parser.parse(callsign)
        if rec.is_empty():
            raise HTTPException(status_code=404, detail="Not a callsign")
        return JSONResponse({"record": rec.model_dump(exclude_none=True)})

    @app.get(
        "/api/prefix/{token}",
        operation_id="prefix_resolve",
        tags=["Callsign"],
        dependencies=[Depends(require_api_key)],
    )
    async def rest_prefix_resolve(token: str) -> JSONResponse:
        """Resolve a lone prefix such as ``YV5``, ``KH6`` or ``3DA0``.

        Returns the entity letters, separating digit and canonical prefix,
        or a 404 error if no prefix can be derived.
        """
        rec = parser.resolve_prefix(token)
        if rec.is_empty():
            raise HTTPException(status_code=404, detail="Not a prefix")
        return JSONResponse({"record": rec.model_dump(exclude_none=True)})

    @app.post(
        "/api/callsign/merge",
        operation_id="callsign_merge",
        tags=["Callsign"],
        dependencies=[Depends(require_api_key)],
    )
    async def rest_callsign_merge(body: MergeRequest) -> JSONResponse:
        """Re-parse a callsign and merge the result onto a previous record.

        Callsign fields the new parse does not produce are removed from the
        previous record; any other keys on it are kept.
        """
        merged = merge_callsign_info(dict(body.previous), parser.parse(body.callsign))
        return JSONResponse({"record": merged})

    @app.get(
        "/api/entities/{candidate}",
        operation_id="entity_lookup",
        tags=["Callsign"],
        dependencies=[Depends(require_api_key)],
    )
    async def rest_entity_lookup(candidate: str) -> JSONResponse:
        """Check whether a string is a known entity prefix."""
        return JSONResponse(
            {"candidate": candidate.upper(), "known": parser.entities.contains(candidate)}
        )

    # -----------------------------------------------------------------------
    # MCP server mount
    # -----------------------------------------------------------------------
    mcp = FastApiMCP(
        app,
        include_operations=[
            "callsign_parse",
            "prefix_resolve",
            "callsign_merge",
            "entity_lookup",
        ],
    )
    mcp.mount()

    return app


# ---------------------------------------------------------------------------
# FastAPI application instance
# ---------------------------------------------------------------------------
app = create_app()
