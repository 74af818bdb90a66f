"""Action tags shared by the router, the handlers and the signer.

An Action names one capability handler. The router resolves instructions to
an Action, the agent dispatches on it, and the signer receives it as part of
every LedgerEffect.
"""

from __future__ import annotations

from enum import Enum


class Action(str, Enum):
    """Enumeration of handler tags.

    Attributes:
        CREATE_PROPOSAL: Create a DAO governance proposal.
        CAST_VOTE: Cast a vote on a governance proposal.
        TREASURY_INFO: Read the DAO treasury (query only).
        SWAP_TOKENS: Swap one token for another on a DEX.
        ADD_LIQUIDITY: Deposit a token pair into a DEX pool.
        MINT_NFT: Mint a new NFT.
        LIST_NFT: List an NFT for sale on a marketplace.
        COLLECTION_INFO: Read NFT collection statistics (query only).
    """

    CREATE_PROPOSAL = "create_proposal"
    CAST_VOTE = "cast_vote"
    TREASURY_INFO = "treasury_info"
    SWAP_TOKENS = "swap_tokens"
    ADD_LIQUIDITY = "add_liquidity"
    MINT_NFT = "mint_nft"
    LIST_NFT = "list_nft"
    COLLECTION_INFO = "collection_info"

    @property
    def mutates_ledger(self) -> bool:
        """Whether handling this action must go through the signer."""
        return self not in QUERY_ONLY_ACTIONS


QUERY_ONLY_ACTIONS = frozenset({Action.TREASURY_INFO, Action.COLLECTION_INFO})


__all__ = ["Action", "QUERY_ONLY_ACTIONS"]
