"""Solana DeFi agent variant.

Swaps tokens and provides liquidity on the configured DEXes. Which of the
two capabilities an agent has depends on the features of its venues:
every known DEX swaps, only some pools accept liquidity.
"""

from __future__ import annotations

import logging

from mcp_agents.agents.base import AgentVariant, HandlerContext
from mcp_agents.config.schemas.agent import AgentKind, DeFiConfig
from mcp_agents.core.actions import Action
from mcp_agents.core.payloads import LiquidityResult, SwapResult
from mcp_agents.core.response import ResponseEnvelope
from mcp_agents.protocols.venues import DEX_VENUES, resolve_venue
from mcp_agents.routing import extractors
from mcp_agents.routing.classifier import Instruction

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_TOKEN = "SOL"
DEFAULT_TARGET_TOKEN = "USDC"
DEFAULT_AMOUNT = 1.0

_ACTION_ORDER = (Action.SWAP_TOKENS, Action.ADD_LIQUIDITY)


def capable_dexes(config: DeFiConfig, action: Action) -> list[str]:
    """Configured DEXes that support ``action``, in configuration order."""
    return [
        name for name in config.supported_dexes
        if action in resolve_venue(name, DEX_VENUES).actions
    ]


def enabled_actions(config: DeFiConfig) -> tuple[Action, ...]:
    return tuple(action for action in _ACTION_ORDER if capable_dexes(config, action))


async def swap_tokens(ctx: HandlerContext, instruction: Instruction) -> ResponseEnvelope:
    config: DeFiConfig = ctx.config
    text = instruction.text
    amount = extractors.source_amount(text, DEFAULT_AMOUNT)
    source = extractors.source_token(text, DEFAULT_SOURCE_TOKEN)
    target = extractors.target_token(text, DEFAULT_TARGET_TOKEN)
    slippage = extractors.percent_bps(text, "slippage", config.default_slippage_bps)
    venues = capable_dexes(config, Action.SWAP_TOKENS)
    dex = extractors.venue_mention(text, venues, venues[0])

    defaulted = [
        name for name, extracted in (("amount", amount), ("source", source), ("target", target), ("dex", dex))
        if extracted.used_default
    ]
    if defaulted:
        logger.debug(f"Swap defaults used for: {', '.join(defaulted)}")

    quote = ctx.services.dex.quote_swap(
        source.value, target.value, amount.value, slippage.value, dex.value
    )
    transaction_id = await ctx.sign(
        Action.SWAP_TOKENS,
        {
            "dex": dex.value,
            "sourceToken": source.value,
            "targetToken": target.value,
            "amount": amount.value,
            "slippageBps": slippage.value,
            "route": quote.route,
        },
    )
    payload = SwapResult(
        source_token=source.value,
        target_token=target.value,
        amount=amount.value,
        estimated_output=quote.estimated_output,
        route=quote.route,
        dex=dex.value,
        slippage_bps=slippage.value,
    )
    return ResponseEnvelope.ok(
        f"Swapped {amount.value:g} {source.value} to {target.value} on {dex.value}",
        payload,
        transaction_id=transaction_id,
    )


async def add_liquidity(ctx: HandlerContext, instruction: Instruction) -> ResponseEnvelope:
    config: DeFiConfig = ctx.config
    text = instruction.text
    pair = extractors.token_pair(text, (DEFAULT_SOURCE_TOKEN, DEFAULT_TARGET_TOKEN))
    token_a, token_b = pair.value
    amount_a = extractors.amount_for(text, token_a, DEFAULT_AMOUNT)
    amount_b = extractors.amount_for(text, token_b, DEFAULT_AMOUNT)
    venues = capable_dexes(config, Action.ADD_LIQUIDITY)
    dex = extractors.venue_mention(text, venues, venues[0])

    deposit = ctx.services.dex.price_deposit(
        dex.value, token_a, amount_a.value, token_b, amount_b.value
    )
    transaction_id = await ctx.sign(
        Action.ADD_LIQUIDITY,
        {
            "dex": dex.value,
            "poolId": deposit.pool_id,
            "tokenA": token_a,
            "amountA": amount_a.value,
            "tokenB": token_b,
            "amountB": amount_b.value,
        },
    )
    payload = LiquidityResult(
        pool_id=deposit.pool_id,
        token_a=token_a,
        amount_a=amount_a.value,
        token_b=token_b,
        amount_b=amount_b.value,
        lp_tokens=deposit.lp_tokens,
        dex=dex.value,
    )
    return ResponseEnvelope.ok(
        f"Added liquidity to {token_a}/{token_b} pool on {dex.value}",
        payload,
        transaction_id=transaction_id,
    )


def _description(config: DeFiConfig) -> str:
    venues = ", ".join(config.supported_dexes) or "no DEXes"
    return f"Agent for token swaps and liquidity provision on Solana via {venues}"


DEFI_VARIANT = AgentVariant(
    kind=AgentKind.DEFI,
    label="DeFi",
    name=lambda config: "Solana DeFi Agent",
    description=_description,
    enabled_actions=enabled_actions,
    handlers={
        Action.SWAP_TOKENS: swap_tokens,
        Action.ADD_LIQUIDITY: add_liquidity,
    },
)


__all__ = [
    "DEFI_VARIANT",
    "swap_tokens",
    "add_liquidity",
    "capable_dexes",
    "enabled_actions",
]
