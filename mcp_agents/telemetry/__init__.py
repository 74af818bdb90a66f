"""Logging support for mcp-agents."""

from mcp_agents.telemetry.logging import (
    AgentLogAdapter,
    AgentLogFormatter,
    setup_logging,
)

__all__ = ["AgentLogFormatter", "AgentLogAdapter", "setup_logging"]
