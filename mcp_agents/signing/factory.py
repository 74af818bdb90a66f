"""Build the configured transaction signer."""

from __future__ import annotations

import logging
from typing import Optional

from mcp_agents.config.settings import MCPAgentsSettings, get_settings
from mcp_agents.signing.remote import RemoteSigner
from mcp_agents.signing.signer import SimulatedSigner, TransactionSigner

logger = logging.getLogger(__name__)


def build_signer(settings: Optional[MCPAgentsSettings] = None) -> TransactionSigner:
    """Create the signer selected by ``settings.signer.backend``.

    Args:
        settings: Settings to use; defaults to the cached settings.

    Returns:
        A SimulatedSigner or RemoteSigner.
    """
    signer_settings = (settings or get_settings()).signer
    if signer_settings.backend == "remote":
        logger.info(f"Using remote signer (timeout={signer_settings.timeout}s)")
        return RemoteSigner(
            endpoint=signer_settings.endpoint,
            timeout=signer_settings.timeout,
            max_retries=signer_settings.max_retries,
            retry_delay=signer_settings.retry_delay,
        )
    logger.debug("Using simulated signer")
    return SimulatedSigner(signer_settings.placeholder_signature)


__all__ = ["build_signer"]
