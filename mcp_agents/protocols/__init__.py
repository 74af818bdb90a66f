"""Protocol services and the venue registry.

Handlers consult these services for quotes, derived addresses and
read-only statistics; the simulated implementations are the default.
"""

from mcp_agents.protocols.base import (
    CollectionStats,
    DexService,
    GovernanceService,
    NFTMarketService,
    PoolDeposit,
    SwapQuote,
    TreasuryHoldings,
)
from mcp_agents.protocols.simulated import (
    ProtocolServices,
    SimulatedDexService,
    SimulatedGovernanceService,
    SimulatedNFTMarketService,
    derive_address,
)
from mcp_agents.protocols.venues import (
    DEX_VENUES,
    MARKETPLACE_VENUES,
    Venue,
    resolve_venue,
)

__all__ = [
    "SwapQuote",
    "PoolDeposit",
    "CollectionStats",
    "TreasuryHoldings",
    "DexService",
    "NFTMarketService",
    "GovernanceService",
    "ProtocolServices",
    "SimulatedDexService",
    "SimulatedNFTMarketService",
    "SimulatedGovernanceService",
    "derive_address",
    "Venue",
    "DEX_VENUES",
    "MARKETPLACE_VENUES",
    "resolve_venue",
]
