"""Application factory and entry point.

Run with:
    uvicorn app:app --reload
"""

from __future__ import annotations

from fastapi import FastAPI

from api import router, set_limits
from models import DEFAULT_LIMITS, ServiceLimits


def create_app(limits: ServiceLimits | None = None) -> FastAPI:
    """Build and return the FastAPI application.

    Accepts optional operand limits for testing; uses the defaults if
    omitted.
    """
    if limits is None:
        limits = DEFAULT_LIMITS

    set_limits(limits)

    app = FastAPI(
        title="Big Integer Calculator API",
        description=(
            "Exact arithmetic on signed integers of unbounded magnitude. "
            "Operands and results are decimal strings; division truncates "
            "toward zero."
        ),
        version="0.1.0",
    )
    app.include_router(router)
    return app


# Default app instance for `uvicorn app:app`
app = create_app()
