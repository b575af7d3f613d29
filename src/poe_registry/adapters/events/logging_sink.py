"""
Logging event sink adapter - Implements EventSink protocol.

This module provides a log-based implementation of the domain's event
sink port, writing each claim event to the application log.
"""

import logging

from poe_registry.domain.events import (
    ClaimCreated,
    ClaimEvent,
    ClaimRevoked,
    ClaimTransferred,
)

logger = logging.getLogger(__name__)


class LoggingEventSink:
    """
    Implements EventSink protocol via logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Events are logged at INFO level to be visible in container logs.
    """

    def emit(self, event: ClaimEvent) -> None:
        """
        Log a claim event.

        Args:
            event: ClaimCreated, ClaimRevoked or ClaimTransferred
        """
        claim = "0x" + event.claim.hex()
        if isinstance(event, ClaimTransferred):
            logger.info(
                "[EVENT] ClaimTransferred claim=%s old_owner=%s new_owner=%s",
                claim,
                event.old_owner,
                event.new_owner,
            )
        elif isinstance(event, ClaimRevoked):
            logger.info("[EVENT] ClaimRevoked claim=%s owner=%s", claim, event.owner)
        elif isinstance(event, ClaimCreated):
            logger.info("[EVENT] ClaimCreated claim=%s owner=%s", claim, event.owner)
