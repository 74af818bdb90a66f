"""Shared pytest fixtures for mcp-agents tests.

This module provides common fixtures used across all test modules:
- Agent identities and a fixed clock
- Recording and failing signer doubles
- Pre-built governance, DeFi and NFT market agents
- Settings cache isolation
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

import pytest

from mcp_agents.agents import Agent, create_agent, get_variant
from mcp_agents.config.schemas import (
    AgentIdentity,
    DeFiConfig,
    GovernanceConfig,
    LedgerConnection,
    NFTMarketConfig,
)
from mcp_agents.config.settings import clear_settings_cache
from mcp_agents.core.exceptions import SigningError
from mcp_agents.signing import LedgerEffect, TransactionSigner


AGENT_ID = "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU"
REALM_ADDRESS = "DPiH3H3c7t47BMxqTxLsuPQpEC6Kne8GA9VXbxpnZxFE"
FIXED_NOW = datetime(2026, 1, 11, 10, 15, 32, tzinfo=timezone.utc)


# -----------------------------------------------------------------------------
# Signer Doubles
# -----------------------------------------------------------------------------


class RecordingSigner(TransactionSigner):
    """Signer that records every effect and returns sequential ids."""

    def __init__(self, prefix: str = "tx") -> None:
        self.prefix = prefix
        self.effects: list[LedgerEffect] = []

    async def sign(self, effect: LedgerEffect) -> str:
        self.effects.append(effect)
        return f"{self.prefix}-{len(self.effects)}"


class FailingSigner(TransactionSigner):
    """Signer that always raises the given SigningError."""

    def __init__(self, error: SigningError) -> None:
        self.error = error
        self.calls = 0

    async def sign(self, effect: LedgerEffect) -> str:
        self.calls += 1
        raise self.error


# -----------------------------------------------------------------------------
# Test Isolation
# -----------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def clean_settings_cache(monkeypatch):
    """Isolate tests from MCP_AGENTS_* variables and the settings cache."""
    import os

    for key in list(os.environ):
        if key.startswith("MCP_AGENTS_"):
            monkeypatch.delenv(key, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


# -----------------------------------------------------------------------------
# Identity and Configuration
# -----------------------------------------------------------------------------


@pytest.fixture
def identity() -> AgentIdentity:
    return AgentIdentity(
        agent_id=AGENT_ID,
        connection=LedgerConnection(endpoint="https://api.devnet.solana.com", commitment="confirmed"),
    )


@pytest.fixture
def governance_config() -> GovernanceConfig:
    return GovernanceConfig(dao_name="Mango", realm_address=REALM_ADDRESS)


@pytest.fixture
def defi_config() -> DeFiConfig:
    return DeFiConfig(supported_dexes=("Jupiter", "Raydium"), default_slippage_bps=50)


@pytest.fixture
def nft_config() -> NFTMarketConfig:
    return NFTMarketConfig(supported_marketplaces=("Magic Eden", "Tensor"), default_royalty_bps=500)


@pytest.fixture
def signer() -> RecordingSigner:
    return RecordingSigner()


def build_agent(
    identity: AgentIdentity,
    config: Any,
    signer: TransactionSigner,
    context_router: Optional[Any] = None,
) -> Agent:
    """Build an agent with a fixed clock."""
    return Agent(
        identity=identity,
        config=config,
        variant=get_variant(config.kind),
        signer=signer,
        context_router=context_router,
        clock=lambda: FIXED_NOW,
    )


# -----------------------------------------------------------------------------
# Agents
# -----------------------------------------------------------------------------


@pytest.fixture
def governance_agent(identity, governance_config, signer) -> Agent:
    return build_agent(identity, governance_config, signer)


@pytest.fixture
def defi_agent(identity, defi_config, signer) -> Agent:
    return create_agent(identity, defi_config, signer=signer)


@pytest.fixture
def nft_agent(identity, nft_config, signer) -> Agent:
    return build_agent(identity, nft_config, signer)
