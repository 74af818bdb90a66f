"""Registry of known trading venues and the actions they support.

A venue is a named DEX or NFT marketplace. Agent configurations list the
venues they may use, and the features of those venues decide which
capabilities the agent advertises and which actions its router accepts.
"""

from __future__ import annotations

from dataclasses import dataclass

from mcp_agents.core.actions import Action


@dataclass(frozen=True)
class Venue:
    """A DEX or NFT marketplace.

    Attributes:
        name: Display name used in instructions and payloads.
        actions: Actions this venue can execute.
        fee_bps: Marketplace fee in basis points (0 for DEXes).
    """

    name: str
    actions: frozenset[Action]
    fee_bps: int = 0

    @property
    def key(self) -> str:
        """Case-insensitive lookup key."""
        return self.name.lower()


DEX_VENUES: dict[str, Venue] = {
    v.key: v
    for v in (
        Venue("Jupiter", frozenset({Action.SWAP_TOKENS})),
        Venue("Raydium", frozenset({Action.SWAP_TOKENS, Action.ADD_LIQUIDITY})),
        Venue("Orca", frozenset({Action.SWAP_TOKENS, Action.ADD_LIQUIDITY})),
    )
}

MARKETPLACE_VENUES: dict[str, Venue] = {
    v.key: v
    for v in (
        Venue("Magic Eden", frozenset({Action.LIST_NFT}), fee_bps=200),
        Venue("Tensor", frozenset({Action.LIST_NFT}), fee_bps=150),
    )
}


def resolve_venue(name: str, registry: dict[str, Venue]) -> Venue:
    """Look up a venue by display name, ignoring case.

    Raises:
        ValueError: If the venue is not in the registry.
    """
    venue = registry.get(name.strip().lower())
    if venue is None:
        known = ", ".join(v.name for v in registry.values())
        raise ValueError(f"Unknown venue '{name}'. Known venues: {known}")
    return venue


__all__ = ["Venue", "DEX_VENUES", "MARKETPLACE_VENUES", "resolve_venue"]
