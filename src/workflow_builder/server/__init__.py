"""FastAPI server adapter for the workflow builder.

Design intent:
- Keep tree semantics in `workflow_builder.engine.*`
- Keep server-specific concerns (routing, CORS, request serialization) here
"""

from __future__ import annotations

__all__ = ["create_app"]

from workflow_builder.server.app import create_app
