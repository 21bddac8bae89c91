"""
API module.
Contains the operator-facing FastAPI application and routes.
"""

from queue_pauser.api.main import create_app, run

__all__ = ["create_app", "run"]
