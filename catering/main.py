"""FastAPI entrypoint for the catering checkout backend."""

from __future__ import annotations

import logging

from fastapi import FastAPI

from catering.api.v1.api import api_router
from catering.core.config import settings
from catering.db import session as db_session
from catering.db.base import Base
from catering.services.settings_service import ensure_default_capacities

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, debug=settings.debug)
app.include_router(api_router, prefix="/api/v1")


@app.on_event("startup")
def startup() -> None:
    Base.metadata.create_all(bind=db_session.engine)
    with db_session.SessionLocal() as session:
        try:
            created = ensure_default_capacities(session)
            logger.info("[BOOTSTRAP] seeded %d default category capacities", created)
        except Exception:
            logger.exception("[BOOTSTRAP] Capacity seed failed; continuing startup.")


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "env": settings.app_env}
