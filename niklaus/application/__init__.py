"""
Application layer - Session controller, DTOs, and service factories.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Composing core services into one controller per client session
3. Providing factory functions for dependency injection

The session controller is the only entry point for API handlers.
"""

from niklaus.application.services import (
    Backend,
    SessionRegistry,
    create_session_controller,
    get_backend,
    get_session_registry,
    reset_services,
)
from niklaus.application.session_controller import AppSessionController, BackofficeContent

__all__ = [
    # Controller
    "AppSessionController",
    "BackofficeContent",
    # Service factories
    "Backend",
    "SessionRegistry",
    "get_backend",
    "create_session_controller",
    "get_session_registry",
    "reset_services",
]
