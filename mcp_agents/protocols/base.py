"""Protocol service interfaces consulted by capability handlers.

Handlers never talk to a DEX, an NFT marketplace or a governance program
directly. They call one of the narrow, synchronous services below for
quotes, derived addresses and read-only statistics. The package ships
deterministic simulated implementations (see ``simulated``); a production
deployment supplies its own objects with the same methods.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol


# =============================================================================
# Service Data
# =============================================================================


@dataclass(frozen=True)
class SwapQuote:
    """Quote for a token swap.

    Attributes:
        estimated_output: Expected target amount after slippage, or None if
            either token has no known price.
        route: Hop sequence, e.g. ``"BONK -> SOL -> USDC"``.
    """

    estimated_output: Optional[float]
    route: str


@dataclass(frozen=True)
class PoolDeposit:
    """Result of pricing a two-token pool deposit."""

    pool_id: str
    lp_tokens: float


@dataclass(frozen=True)
class CollectionStats:
    """Marketplace statistics for one NFT collection."""

    collection_address: str
    floor_price: float
    total_volume: float
    items: int
    owners: int


@dataclass(frozen=True)
class TreasuryHoldings:
    """Balances held by a DAO treasury.

    Attributes:
        balance: Native balance with unit, e.g. ``"15000 SOL"``.
        tokens: (mint, symbol, amount) triples.
        governance_address: Address of the governance account.
    """

    balance: str
    tokens: tuple[tuple[str, str, str], ...]
    governance_address: str


# =============================================================================
# Service Protocols
# =============================================================================


class DexService(Protocol):
    """Protocol for DEX quoting and pool lookups."""

    def quote_swap(
        self, source_token: str, target_token: str, amount: float, slippage_bps: int, dex: str
    ) -> SwapQuote:
        """Quote a swap of ``amount`` source tokens on ``dex``."""
        ...

    def price_deposit(
        self, dex: str, token_a: str, amount_a: float, token_b: str, amount_b: float
    ) -> PoolDeposit:
        """Locate the pool for a pair and estimate the LP tokens minted."""
        ...


class NFTMarketService(Protocol):
    """Protocol for NFT mint addresses, listing fees and collection stats."""

    def mint_address(self, owner: str, name: str, symbol: str, nonce: str) -> str:
        """Derive the address of a newly minted NFT."""
        ...

    def listing_fee(self, marketplace: str, price: float) -> float:
        """Fee charged by ``marketplace`` for a sale at ``price`` SOL."""
        ...

    def collection_stats(self, collection: str) -> CollectionStats:
        """Current statistics for a collection."""
        ...


class GovernanceService(Protocol):
    """Protocol for DAO governance lookups."""

    def proposal_address(self, realm_address: str, title: str, nonce: str) -> str:
        """Derive the address of a new proposal."""
        ...

    def treasury(self, realm_address: str) -> TreasuryHoldings:
        """Current treasury holdings of a realm."""
        ...


__all__ = [
    "SwapQuote",
    "PoolDeposit",
    "CollectionStats",
    "TreasuryHoldings",
    "DexService",
    "NFTMarketService",
    "GovernanceService",
]
