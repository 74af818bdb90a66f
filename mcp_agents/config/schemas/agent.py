"""Agent identity and configuration schemas for mcp-agents.

This module defines the frozen Pydantic models an Agent is constructed
from. Identity and configuration never change after construction, which is
what lets one Agent serve concurrent callers without locking.

Classes:
    AgentKind: Closed set of agent variants
    LedgerConnection: Opaque ledger connection handle
    AgentIdentity: Account id plus ledger connection
    GovernanceConfig: Settings for a DAO governance agent
    DeFiConfig: Settings for a DEX trading agent
    NFTMarketConfig: Settings for an NFT marketplace agent

Types:
    AgentConfiguration: Discriminated union of the three configs
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mcp_agents.config.settings import get_settings
from mcp_agents.protocols.venues import DEX_VENUES, MARKETPLACE_VENUES, resolve_venue


class AgentKind(str, Enum):
    """Agent variants.

    Attributes:
        GOVERNANCE: DAO governance through Realms.
        DEFI: Token swaps and liquidity on Solana DEXes.
        NFT_MARKET: NFT minting and marketplace trading.
    """

    GOVERNANCE = "governance"
    DEFI = "defi"
    NFT_MARKET = "nft_market"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


# =============================================================================
# Identity
# =============================================================================


class LedgerConnection(_Frozen):
    """Opaque handle to a ledger RPC endpoint.

    The agent never inspects the connection; it only forwards it to the
    signer and reports the endpoint in ``get_state``.
    """

    endpoint: str = Field(
        default_factory=lambda: get_settings().ledger.endpoint,
        min_length=1,
    )
    commitment: str = Field(default_factory=lambda: get_settings().ledger.commitment)


class AgentIdentity(_Frozen):
    """Account identifier and ledger connection of an agent.

    Example:
        ```python
        identity = AgentIdentity(agent_id="7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU")
        print(identity.connection.endpoint)
        ```
    """

    agent_id: str = Field(min_length=1, description="Account or wallet address")
    connection: LedgerConnection = Field(default_factory=LedgerConnection)

    @field_validator("agent_id")
    @classmethod
    def strip_agent_id(cls, v: str) -> str:
        """Reject whitespace-only ids."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("agent_id must not be blank")
        return stripped


# =============================================================================
# Variant Configurations
# =============================================================================


class GovernanceConfig(_Frozen):
    """Configuration for a DAO governance agent.

    Attributes:
        dao_name: Display name of the DAO.
        realm_address: On-ledger address of the DAO realm.
        voting_power: Voting weight the agent's account carries.
        voting_period_days: Length of the voting window for new proposals.
    """

    kind: Literal[AgentKind.GOVERNANCE] = AgentKind.GOVERNANCE
    dao_name: str = Field(min_length=1)
    realm_address: str = Field(min_length=1)
    voting_power: int = Field(default=1000, ge=0)
    voting_period_days: int = Field(
        default_factory=lambda: get_settings().agents.voting_period_days,
        ge=1,
    )


class DeFiConfig(_Frozen):
    """Configuration for a DEX trading agent.

    Attributes:
        supported_dexes: Venues the agent may route through, in preference
            order. Each must be a known DEX.
        default_slippage_bps: Slippage used when an instruction names none.
    """

    kind: Literal[AgentKind.DEFI] = AgentKind.DEFI
    supported_dexes: tuple[str, ...] = ()
    default_slippage_bps: int = Field(
        default_factory=lambda: get_settings().agents.default_slippage_bps,
        ge=0,
        le=10_000,
    )

    @field_validator("supported_dexes")
    @classmethod
    def validate_dexes(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Normalize to registry display names and drop duplicates."""
        names: list[str] = []
        for name in v:
            display = resolve_venue(name, DEX_VENUES).name
            if display not in names:
                names.append(display)
        return tuple(names)


class NFTMarketConfig(_Frozen):
    """Configuration for an NFT marketplace agent.

    Attributes:
        supported_marketplaces: Marketplaces the agent may list on, in
            preference order. Each must be a known marketplace.
        default_royalty_bps: Royalty used when a mint instruction names none.
    """

    kind: Literal[AgentKind.NFT_MARKET] = AgentKind.NFT_MARKET
    supported_marketplaces: tuple[str, ...] = ()
    default_royalty_bps: int = Field(
        default_factory=lambda: get_settings().agents.default_royalty_bps,
        ge=0,
        le=10_000,
    )

    @field_validator("supported_marketplaces")
    @classmethod
    def validate_marketplaces(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Normalize to registry display names and drop duplicates."""
        names: list[str] = []
        for name in v:
            display = resolve_venue(name, MARKETPLACE_VENUES).name
            if display not in names:
                names.append(display)
        return tuple(names)


AgentConfiguration = Annotated[
    Union[GovernanceConfig, DeFiConfig, NFTMarketConfig],
    Field(discriminator="kind"),
]


__all__ = [
    "AgentKind",
    "LedgerConnection",
    "AgentIdentity",
    "GovernanceConfig",
    "DeFiConfig",
    "NFTMarketConfig",
    "AgentConfiguration",
]
