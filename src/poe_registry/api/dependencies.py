"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting the claim
registry, its collaborators and the authenticated account into routes.
"""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from poe_registry.adapters.events import MemoryEventSink
from poe_registry.config.settings import Settings
from poe_registry.domain.exceptions import AuthenticationFailed
from poe_registry.domain.fingerprint import InvalidFingerprint, parse_hex_fingerprint
from poe_registry.domain.ports import IdentityProvider
from poe_registry.domain.registry import ClaimRegistry


def get_settings_from_app(request: Request) -> Settings:
    """Get the settings the application was built with."""
    return request.app.state.settings


def get_registry(request: Request) -> ClaimRegistry:
    """
    Get claim registry from app state.

    The registry and its adapters are wired during app lifespan startup.
    """
    return request.app.state.registry


def get_event_history(request: Request) -> MemoryEventSink:
    """Get the in-memory event history from app state."""
    return request.app.state.event_history


def get_identity_provider(request: Request) -> IdentityProvider:
    """Get identity provider from app state."""
    return request.app.state.identity_provider


# HTTP BASIC AUTH security scheme for OpenAPI documentation
http_basic = HTTPBasic()


def get_authenticated_account(
    credentials: HTTPBasicCredentials = Depends(http_basic),
    identity_provider: IdentityProvider = Depends(get_identity_provider),
) -> str:
    """
    Resolve HTTP BASIC AUTH credentials to an account id.

    FastAPI's HTTPBasic already returns 401 for a missing or malformed
    Authorization header. Unknown accounts and wrong secrets also get a
    401, so an unauthenticated request never reaches the registry.

    Returns:
        Authenticated account id
    """
    try:
        return identity_provider.authenticate(credentials.username, credentials.password)
    except AuthenticationFailed:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        ) from None


def parse_claim(text: str, settings: Settings) -> bytes:
    """
    Decode and bound a hex fingerprint, mapping failures to 422.

    This is the MaxClaimLength validation boundary: oversized fingerprints
    are rejected here and never reach the registry.
    """
    try:
        return parse_hex_fingerprint(text, settings.max_claim_length)
    except InvalidFingerprint as e:
        raise HTTPException(
            status_code=422,
            detail=str(e),
        ) from None


def get_path_fingerprint(
    claim: str,
    settings: Settings = Depends(get_settings_from_app),
) -> bytes:
    """Bounded fingerprint from the `{claim}` path parameter."""
    return parse_claim(claim, settings)
