"""
==============================================================================
Core Package
==============================================================================

Cross-cutting pieces of the API.

Modules:
--------
- exceptions: AppException, factories and FastAPI handlers
- dependencies: Store and smart search providers for route handlers
  (import shelfspot.core.dependencies directly)

==============================================================================
"""

from .exceptions import AppException, register_exception_handlers

__all__ = [
    "AppException",
    "register_exception_handlers",
]
