"""
API v1 package.

Contains versioned API routes for the proof-of-existence claim registry.
"""

from poe_registry.api.v1.routes import router

__all__ = ["router"]
