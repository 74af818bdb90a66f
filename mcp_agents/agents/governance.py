"""DAO governance agent variant.

Creates proposals, casts votes and reads the treasury of one DAO realm.
"""

from __future__ import annotations

import logging
from datetime import timedelta

from mcp_agents.agents.base import AgentVariant, HandlerContext, isoformat
from mcp_agents.config.schemas.agent import AgentKind, GovernanceConfig
from mcp_agents.core.actions import Action
from mcp_agents.core.payloads import ProposalResult, TokenHolding, TreasurySnapshot, VoteResult
from mcp_agents.core.response import ResponseEnvelope
from mcp_agents.routing import extractors
from mcp_agents.routing.classifier import Instruction

logger = logging.getLogger(__name__)

DEFAULT_PROPOSAL_TITLE = "Untitled Proposal"
DEFAULT_PROPOSAL_ID = "latest"
DEFAULT_VOTE = "for"


async def create_proposal(ctx: HandlerContext, instruction: Instruction) -> ResponseEnvelope:
    config: GovernanceConfig = ctx.config
    title = extractors.quoted_after(instruction.text, "titled", DEFAULT_PROPOSAL_TITLE)
    description = extractors.text_after_quoted(instruction.text, "titled")
    if title.used_default:
        logger.debug(f"No title in {instruction.text!r}, using '{DEFAULT_PROPOSAL_TITLE}'")

    created_at = isoformat(ctx.now)
    address = ctx.services.governance.proposal_address(config.realm_address, title.value, created_at)
    voting_ends_at = isoformat(ctx.now + timedelta(days=config.voting_period_days))

    transaction_id = await ctx.sign(
        Action.CREATE_PROPOSAL,
        {
            "realm": config.realm_address,
            "proposal": address,
            "title": title.value,
            "description": description.value,
        },
    )
    payload = ProposalResult(
        title=title.value,
        description=description.value,
        created_at=created_at,
        proposal_address=address,
        voting_ends_at=voting_ends_at,
    )
    return ResponseEnvelope.ok(
        f'Created new governance proposal: "{title.value}"',
        payload,
        transaction_id=transaction_id,
    )


async def cast_vote(ctx: HandlerContext, instruction: Instruction) -> ResponseEnvelope:
    config: GovernanceConfig = ctx.config
    proposal = extractors.proposal_id(instruction.text, DEFAULT_PROPOSAL_ID)
    vote = extractors.vote_direction(instruction.text, DEFAULT_VOTE)

    transaction_id = await ctx.sign(
        Action.CAST_VOTE,
        {
            "realm": config.realm_address,
            "proposal": proposal.value,
            "vote": vote.value,
            "votingPower": config.voting_power,
        },
    )
    payload = VoteResult(
        proposal_id=proposal.value,
        vote=vote.value,
        voting_power=str(config.voting_power),
        timestamp=isoformat(ctx.now),
    )
    return ResponseEnvelope.ok(
        f"Vote cast {vote.value} proposal {proposal.value}",
        payload,
        transaction_id=transaction_id,
    )


async def treasury_info(ctx: HandlerContext, instruction: Instruction) -> ResponseEnvelope:
    config: GovernanceConfig = ctx.config
    holdings = ctx.services.governance.treasury(config.realm_address)
    payload = TreasurySnapshot(
        balance=holdings.balance,
        tokens=tuple(
            TokenHolding(mint=mint, symbol=symbol, amount=amount)
            for mint, symbol, amount in holdings.tokens
        ),
        governance_address=holdings.governance_address,
        last_activity=isoformat(ctx.now),
    )
    return ResponseEnvelope.ok("Treasury information retrieved", payload)


GOVERNANCE_VARIANT = AgentVariant(
    kind=AgentKind.GOVERNANCE,
    label="governance",
    name=lambda config: f"{config.dao_name} Governance Agent",
    description=lambda config: f"Agent for interacting with {config.dao_name} DAO via Realms governance",
    enabled_actions=lambda config: (
        Action.CREATE_PROPOSAL,
        Action.CAST_VOTE,
        Action.TREASURY_INFO,
    ),
    handlers={
        Action.CREATE_PROPOSAL: create_proposal,
        Action.CAST_VOTE: cast_vote,
        Action.TREASURY_INFO: treasury_info,
    },
)


__all__ = [
    "GOVERNANCE_VARIANT",
    "create_proposal",
    "cast_vote",
    "treasury_info",
    "DEFAULT_PROPOSAL_TITLE",
    "DEFAULT_PROPOSAL_ID",
    "DEFAULT_VOTE",
]
