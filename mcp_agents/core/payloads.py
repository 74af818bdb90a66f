"""Action payload schemas for mcp-agents.

Every capability handler produces exactly one payload shape from the closed
set below. Payloads are frozen Pydantic models discriminated by their
``type`` field and serialized with camelCase aliases, which is the wire
format callers read from ``ResponseEnvelope.data``.

Classes:
    SwapResult: Outcome of a token swap
    LiquidityResult: Outcome of a liquidity deposit
    MintResult: Outcome of an NFT mint
    ListingResult: Outcome of an NFT marketplace listing
    CollectionInfo: NFT collection statistics (query only)
    ProposalResult: Outcome of a governance proposal creation
    VoteResult: Outcome of a governance vote
    TreasurySnapshot: DAO treasury holdings (query only)
    TokenHolding: One token balance inside a TreasurySnapshot

Types:
    ActionPayload: Discriminated union of all payload models
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Payload(BaseModel):
    """Shared model configuration for payloads."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_dict(self) -> dict:
        """Serialize with camelCase keys for the caller-facing API."""
        return self.model_dump(by_alias=True, mode="json")


# =============================================================================
# DeFi Payloads
# =============================================================================


class SwapResult(_Payload):
    """Outcome of a token swap.

    Attributes:
        source_token: Symbol of the token sold.
        target_token: Symbol of the token bought.
        amount: Amount of source token sold.
        estimated_output: Expected target amount after slippage, or None
            when no price is known for either side.
        route: Human-readable hop sequence, e.g. ``SOL -> USDC``.
        dex: Venue executing the swap.
        slippage_bps: Slippage tolerance in basis points.
    """

    type: Literal["swap"] = "swap"
    source_token: str
    target_token: str
    amount: float = Field(ge=0)
    estimated_output: Optional[float] = None
    route: str
    dex: str
    slippage_bps: int = Field(ge=0)


class LiquidityResult(_Payload):
    """Outcome of a liquidity deposit into a two-token pool."""

    type: Literal["liquidity"] = "liquidity"
    pool_id: str
    token_a: str
    amount_a: float = Field(ge=0)
    token_b: str
    amount_b: float = Field(ge=0)
    lp_tokens: float = Field(ge=0)
    dex: str


# =============================================================================
# NFT Payloads
# =============================================================================


class MintResult(_Payload):
    """Outcome of an NFT mint."""

    type: Literal["mint"] = "mint"
    name: str
    symbol: str
    metadata_uri: Optional[str] = None
    mint_address: str
    mint_time: str
    owner: str
    royalty_bps: int = Field(ge=0, le=10_000)


class ListingResult(_Payload):
    """Outcome of listing an NFT for sale."""

    type: Literal["listing"] = "listing"
    nft_mint: str
    price: float = Field(ge=0)
    marketplace: str
    listing_time: str
    fees: float = Field(ge=0)


class CollectionInfo(_Payload):
    """Collection statistics as reported by the marketplace service."""

    type: Literal["collection"] = "collection"
    collection_address: str
    floor_price: float
    total_volume: float
    items: int
    owners: int
    last_updated: str


# =============================================================================
# Governance Payloads
# =============================================================================


class ProposalResult(_Payload):
    """Outcome of creating a governance proposal."""

    type: Literal["proposal"] = "proposal"
    title: str
    description: str = ""
    created_at: str
    proposal_address: str
    voting_ends_at: str


class VoteResult(_Payload):
    """Outcome of casting a governance vote."""

    type: Literal["vote"] = "vote"
    proposal_id: str
    vote: Literal["for", "against"]
    voting_power: str
    timestamp: str


class TokenHolding(_Payload):
    """A single token balance held by a treasury."""

    mint: str
    symbol: str
    amount: str


class TreasurySnapshot(_Payload):
    """Point-in-time view of a DAO treasury."""

    type: Literal["treasury"] = "treasury"
    balance: str
    tokens: tuple[TokenHolding, ...] = ()
    governance_address: str
    last_activity: str


ActionPayload = Annotated[
    Union[
        SwapResult,
        LiquidityResult,
        MintResult,
        ListingResult,
        CollectionInfo,
        ProposalResult,
        VoteResult,
        TreasurySnapshot,
    ],
    Field(discriminator="type"),
]


__all__ = [
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
]
