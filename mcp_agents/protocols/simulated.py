"""Deterministic simulated protocol services.

These services stand in for real DEX, NFT marketplace and governance
integrations. They perform no I/O: prices and statistics come from static
tables, and addresses are derived by hashing the inputs, so the same
inputs always produce the same outputs.
"""

from __future__ import annotations

import hashlib
import logging
import math
from dataclasses import dataclass, field
from typing import Optional

from mcp_agents.protocols.base import (
    CollectionStats,
    DexService,
    GovernanceService,
    NFTMarketService,
    PoolDeposit,
    SwapQuote,
    TreasuryHoldings,
)
from mcp_agents.protocols.venues import MARKETPLACE_VENUES, resolve_venue


# =============================================================================
# Module Logger
# =============================================================================

logger = logging.getLogger(__name__)


# Reference prices in USD.
TOKEN_PRICES_USD: dict[str, float] = {
    "SOL": 150.0,
    "USDC": 1.0,
    "USDT": 1.0,
    "MSOL": 165.0,
    "RAY": 2.0,
    "JUP": 0.9,
    "BONK": 0.00002,
}

COLLECTION_STATS: dict[str, tuple[float, float, int, int]] = {
    # floor price (SOL), total volume (SOL), items, owners
    "DEGODS": (325.5, 1_250_000.0, 10_000, 5_832),
    "MADLADS": (142.0, 890_000.0, 10_000, 6_120),
    "OKAYBEARS": (38.2, 410_500.0, 10_000, 5_431),
}

TREASURY_TOKENS: tuple[tuple[str, str, str], ...] = (
    ("EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v", "USDC", "25000"),
    ("mSoLzYCxHdYgdzU16g5QSh3i5K3z3KZK7ytfqcJm7So", "mSOL", "150"),
)

_BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"

# Hub tokens a direct route can go through.
_HUB_TOKENS = ("SOL", "USDC")


def derive_address(*parts: str) -> str:
    """Derive a stable base58 address from arbitrary string parts."""
    digest = hashlib.sha256("\x1f".join(parts).encode("utf-8")).digest()
    number = int.from_bytes(digest, "big")
    chars = []
    while number:
        number, remainder = divmod(number, 58)
        chars.append(_BASE58_ALPHABET[remainder])
    leading_zeros = len(digest) - len(digest.lstrip(b"\x00"))
    return "1" * leading_zeros + "".join(reversed(chars))


def price_of(symbol: str) -> Optional[float]:
    """USD reference price of a token symbol, or None if unknown."""
    return TOKEN_PRICES_USD.get(symbol.upper())


# =============================================================================
# Simulated Services
# =============================================================================


class SimulatedDexService:
    """Price-table swap quotes and constant-product LP estimates."""

    def quote_swap(
        self, source_token: str, target_token: str, amount: float, slippage_bps: int, dex: str
    ) -> SwapQuote:
        if source_token.upper() in _HUB_TOKENS or target_token.upper() in _HUB_TOKENS:
            route = f"{source_token} -> {target_token}"
        else:
            route = f"{source_token} -> SOL -> {target_token}"

        source_price = price_of(source_token)
        target_price = price_of(target_token)
        if source_price is None or target_price is None:
            logger.debug(f"No reference price for {source_token}/{target_token} on {dex}")
            return SwapQuote(estimated_output=None, route=route)

        gross = amount * source_price / target_price
        estimated = gross * (1 - slippage_bps / 10_000)
        return SwapQuote(estimated_output=round(estimated, 9), route=route)

    def price_deposit(
        self, dex: str, token_a: str, amount_a: float, token_b: str, amount_b: float
    ) -> PoolDeposit:
        first, second = sorted((token_a.upper(), token_b.upper()))
        pool_id = derive_address("pool", dex.lower(), first, second)
        lp_tokens = round(math.sqrt(amount_a * amount_b), 9)
        return PoolDeposit(pool_id=pool_id, lp_tokens=lp_tokens)


class SimulatedNFTMarketService:
    """Hashed mint addresses, registry marketplace fees and static stats."""

    def mint_address(self, owner: str, name: str, symbol: str, nonce: str) -> str:
        return derive_address("mint", owner, name, symbol, nonce)

    def listing_fee(self, marketplace: str, price: float) -> float:
        venue = resolve_venue(marketplace, MARKETPLACE_VENUES)
        return round(price * venue.fee_bps / 10_000, 9)

    def collection_stats(self, collection: str) -> CollectionStats:
        key = collection.upper()
        stats = COLLECTION_STATS.get(key)
        if stats is None:
            # Unknown collections get stable pseudo-statistics from their name.
            seed = int(hashlib.sha256(key.encode("utf-8")).hexdigest()[:8], 16)
            items = 1_000 + seed % 9_000
            stats = (
                round(0.5 + (seed % 5_000) / 100, 2),
                float(seed % 200_000),
                items,
                max(1, items * 55 // 100),
            )
        floor_price, total_volume, items, owners = stats
        return CollectionStats(
            collection_address=derive_address("collection", key),
            floor_price=floor_price,
            total_volume=total_volume,
            items=items,
            owners=owners,
        )


class SimulatedGovernanceService:
    """Hashed proposal addresses and a fixed treasury."""

    def __init__(self, balance: str = "15000 SOL") -> None:
        self.balance = balance

    def proposal_address(self, realm_address: str, title: str, nonce: str) -> str:
        return derive_address("proposal", realm_address, title, nonce)

    def treasury(self, realm_address: str) -> TreasuryHoldings:
        return TreasuryHoldings(
            balance=self.balance,
            tokens=TREASURY_TOKENS,
            governance_address=derive_address("governance", realm_address),
        )


# =============================================================================
# Service Bundle
# =============================================================================


@dataclass(frozen=True)
class ProtocolServices:
    """The protocol services an agent's handlers may consult.

    Attributes:
        dex: Swap quotes and pool pricing.
        nft: Mint addresses, listing fees and collection stats.
        governance: Proposal addresses and treasury holdings.
    """

    dex: DexService = field(default_factory=SimulatedDexService)
    nft: NFTMarketService = field(default_factory=SimulatedNFTMarketService)
    governance: GovernanceService = field(default_factory=SimulatedGovernanceService)


__all__ = [
    "TOKEN_PRICES_USD",
    "COLLECTION_STATS",
    "TREASURY_TOKENS",
    "derive_address",
    "price_of",
    "SimulatedDexService",
    "SimulatedNFTMarketService",
    "SimulatedGovernanceService",
    "ProtocolServices",
]
