"""API interface for caseflow.

This module exports the FastAPI router and app factory.
"""

from caseflow.interfaces.api.routes import create_app, router

__all__ = ["router", "create_app"]
