"""
Entrypoint for the TaxPayer Registry service.

``create_app`` builds a FastAPI application that owns exactly one
``TaxPayerRegistry`` (and its audit trail) for the life of the process.
The module-level ``app`` is what uvicorn serves::

    uvicorn taxpayer_registry.main:app
"""

from typing import Optional

from fastapi import FastAPI

from taxpayer_registry.api import health, taxpayers
from taxpayer_registry.core.audit import InMemoryAuditRepository
from taxpayer_registry.core.config import Settings, settings
from taxpayer_registry.core.logging_config import setup_logging
from taxpayer_registry.core.middleware import AuditMiddleware
from taxpayer_registry.core.registry import TaxPayerRegistry
from taxpayer_registry.db.snapshot import JsonSnapshotStore


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    app_settings = app_settings or settings
    setup_logging(app_settings.LOG_LEVEL)

    snapshot = None
    if app_settings.SNAPSHOT_PATH:
        snapshot = JsonSnapshotStore(app_settings.SNAPSHOT_PATH)

    app = FastAPI(title=app_settings.PROJECT_NAME)
    app.state.settings = app_settings
    app.state.registry = TaxPayerRegistry(
        duplicate_policy=app_settings.DUPLICATE_POLICY,
        snapshot=snapshot,
    )
    app.state.audit_repo = InMemoryAuditRepository(limit=app_settings.AUDIT_LOG_LIMIT)

    app.add_middleware(AuditMiddleware, repo=app.state.audit_repo)

    # Include routers
    app.include_router(health.router)
    app.include_router(taxpayers.router)

    return app


app = create_app()


def run() -> None:
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
