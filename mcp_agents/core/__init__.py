"""Core module for the mcp-agents framework.

This module contains the caller-facing result types and the exception
hierarchy shared by every other subsystem.

Components:
    - response: ResponseEnvelope and ErrorDetail
    - payloads: The closed set of action payload models
    - exceptions: Framework exception hierarchy
    - actions: Handler tags and the query-only subset
"""

from mcp_agents.core.actions import QUERY_ONLY_ACTIONS, Action
from mcp_agents.core.exceptions import (
    AgentConfigurationError,
    ClassificationError,
    ConfigurationError,
    ContextLoadError,
    InsufficientFundsError,
    MCPAgentsError,
    NetworkUnavailableError,
    SignerRejectedError,
    SignerTimeoutError,
    SigningError,
)
from mcp_agents.core.payloads import (
    ActionPayload,
    CollectionInfo,
    LiquidityResult,
    ListingResult,
    MintResult,
    ProposalResult,
    SwapResult,
    TokenHolding,
    TreasurySnapshot,
    VoteResult,
)
from mcp_agents.core.response import ErrorDetail, ResponseEnvelope

__all__ = [
    # Actions
    "Action",
    "QUERY_ONLY_ACTIONS",
    # Results
    "ResponseEnvelope",
    "ErrorDetail",
    # Payloads
    "ActionPayload",
    "SwapResult",
    "LiquidityResult",
    "MintResult",
    "ListingResult",
    "CollectionInfo",
    "ProposalResult",
    "VoteResult",
    "TokenHolding",
    "TreasurySnapshot",
    # Exceptions
    "MCPAgentsError",
    "ConfigurationError",
    "AgentConfigurationError",
    "ContextLoadError",
    "ClassificationError",
    "SigningError",
    "SignerRejectedError",
    "InsufficientFundsError",
    "NetworkUnavailableError",
    "SignerTimeoutError",
]
