"""FastAPI app factory.

Endpoints are thin wrappers over the workflow engine. Run with:

    uvicorn workflow_builder.server.app:create_app --factory
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from workflow_builder import __version__
from workflow_builder.logging import configure_logging
from workflow_builder.server.config import ServerSettings
from workflow_builder.server.router import router as workflow_router
from workflow_builder.server.session import WorkflowSession

logger = logging.getLogger(__name__)


def create_app(settings: ServerSettings | None = None) -> FastAPI:
    settings = settings or ServerSettings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Workflow Builder",
        version=__version__,
        description="REST API for editing a branching workflow with undo/redo.",
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    # One session per app instance; handlers reach it through app.state.
    app.state.settings = settings
    app.state.session = WorkflowSession.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.parsed_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(workflow_router, prefix="/api")

    logger.info(
        "Workflow server ready", extra={"tree_path": str(settings.workflow_tree_path)}
    )
    return app
