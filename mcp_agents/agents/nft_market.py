"""NFT marketplace agent variant.

Mints NFTs, lists them on the configured marketplaces and reads collection
statistics. Listing is only offered when at least one marketplace is
configured.
"""

from __future__ import annotations

import logging

from mcp_agents.agents.base import AgentVariant, HandlerContext, isoformat
from mcp_agents.config.schemas.agent import AgentKind, NFTMarketConfig
from mcp_agents.core.actions import Action
from mcp_agents.core.payloads import CollectionInfo, ListingResult, MintResult
from mcp_agents.core.response import ResponseEnvelope
from mcp_agents.routing import extractors
from mcp_agents.routing.classifier import Instruction

logger = logging.getLogger(__name__)

DEFAULT_NFT_NAME = "Untitled NFT"
DEFAULT_NFT_SYMBOL = "NFT"
DEFAULT_LISTING_PRICE = 1.0
DEFAULT_NFT_MINT = "unknown"
DEFAULT_COLLECTION = "UNKNOWN"


def enabled_actions(config: NFTMarketConfig) -> tuple[Action, ...]:
    actions = [Action.MINT_NFT, Action.COLLECTION_INFO]
    if config.supported_marketplaces:
        actions.insert(0, Action.LIST_NFT)
    return tuple(actions)


async def mint_nft(ctx: HandlerContext, instruction: Instruction) -> ResponseEnvelope:
    config: NFTMarketConfig = ctx.config
    text = instruction.text
    name = extractors.quoted_after(text, "named", None)
    if name.used_default:
        name = extractors.quoted_after(text, "called", DEFAULT_NFT_NAME)
    symbol = extractors.nft_symbol(text, DEFAULT_NFT_SYMBOL)
    metadata_uri = extractors.url(text)
    royalty = extractors.percent_bps(text, "royalty", config.default_royalty_bps)

    mint_time = isoformat(ctx.now)
    owner = ctx.identity.agent_id
    mint_address = ctx.services.nft.mint_address(owner, name.value, symbol.value, mint_time)

    transaction_id = await ctx.sign(
        Action.MINT_NFT,
        {
            "mint": mint_address,
            "name": name.value,
            "symbol": symbol.value,
            "uri": metadata_uri.value,
            "sellerFeeBasisPoints": royalty.value,
        },
    )
    payload = MintResult(
        name=name.value,
        symbol=symbol.value,
        metadata_uri=metadata_uri.value,
        mint_address=mint_address,
        mint_time=mint_time,
        owner=owner,
        royalty_bps=royalty.value,
    )
    return ResponseEnvelope.ok(
        f'Minted NFT "{name.value}" ({symbol.value})',
        payload,
        transaction_id=transaction_id,
    )


async def list_nft(ctx: HandlerContext, instruction: Instruction) -> ResponseEnvelope:
    config: NFTMarketConfig = ctx.config
    text = instruction.text
    mint = extractors.nft_mint(text, DEFAULT_NFT_MINT)
    price = extractors.sol_price(text, DEFAULT_LISTING_PRICE)
    marketplaces = config.supported_marketplaces
    marketplace = extractors.venue_mention(text, marketplaces, marketplaces[0])
    if mint.used_default:
        logger.warning(f"No NFT mint address in {text!r}; listing '{DEFAULT_NFT_MINT}'")

    fees = ctx.services.nft.listing_fee(marketplace.value, price.value)
    transaction_id = await ctx.sign(
        Action.LIST_NFT,
        {
            "mint": mint.value,
            "price": price.value,
            "marketplace": marketplace.value,
        },
    )
    payload = ListingResult(
        nft_mint=mint.value,
        price=price.value,
        marketplace=marketplace.value,
        listing_time=isoformat(ctx.now),
        fees=fees,
    )
    return ResponseEnvelope.ok(
        f"Listed NFT {mint.value} for {price.value:g} SOL on {marketplace.value}",
        payload,
        transaction_id=transaction_id,
    )


async def collection_info(ctx: HandlerContext, instruction: Instruction) -> ResponseEnvelope:
    collection = extractors.collection_name(instruction.text, DEFAULT_COLLECTION)
    stats = ctx.services.nft.collection_stats(collection.value)
    payload = CollectionInfo(
        collection_address=stats.collection_address,
        floor_price=stats.floor_price,
        total_volume=stats.total_volume,
        items=stats.items,
        owners=stats.owners,
        last_updated=isoformat(ctx.now),
    )
    return ResponseEnvelope.ok(f"Collection information retrieved for {collection.value}", payload)


def _description(config: NFTMarketConfig) -> str:
    if not config.supported_marketplaces:
        return "Agent for minting NFTs and tracking collections on Solana"
    return (
        "Agent for minting, listing and tracking NFTs on Solana via "
        + ", ".join(config.supported_marketplaces)
    )


NFT_MARKET_VARIANT = AgentVariant(
    kind=AgentKind.NFT_MARKET,
    label="NFT market",
    name=lambda config: "NFT Market Agent",
    description=_description,
    enabled_actions=enabled_actions,
    handlers={
        Action.LIST_NFT: list_nft,
        Action.MINT_NFT: mint_nft,
        Action.COLLECTION_INFO: collection_info,
    },
)


__all__ = [
    "NFT_MARKET_VARIANT",
    "mint_nft",
    "list_nft",
    "collection_info",
    "enabled_actions",
]
