"""Route registration for the CallCoach API."""

from __future__ import annotations

from fastapi import FastAPI


def register_routes(app: FastAPI):
    """Include all route modules under /api."""
    from callcoach.web.routes import admin, analysis, calls, scenarios

    app.include_router(admin.router, prefix="/api/admin")
    app.include_router(calls.router, prefix="/api/calls")
    app.include_router(scenarios.router, prefix="/api/scenarios")
    app.include_router(analysis.router, prefix="/api/analysis")
