"""Tests for the Solana DeFi agent.

Test Coverage:
- Capabilities derived from venue features
- Swap parameter extraction, defaults and quotes
- Liquidity provision
- Configuration defects at construction
"""

from __future__ import annotations

import math

import pytest
from pydantic import ValidationError

from mcp_agents.agents import create_agent
from mcp_agents.config.schemas import DeFiConfig
from mcp_agents.core.actions import Action
from mcp_agents.core.exceptions import AgentConfigurationError

from tests.conftest import RecordingSigner


class TestDeFiConfiguration:

    def test_name(self, defi_agent):
        assert defi_agent.get_name() == "Solana DeFi Agent"
        assert "Jupiter, Raydium" in defi_agent.get_description()

    def test_capabilities_with_liquidity_venue(self, defi_agent):
        assert defi_agent.get_capabilities() == ["Token Swaps", "Liquidity Provision"]

    def test_jupiter_only_agent_cannot_add_liquidity(self, identity, signer):
        agent = create_agent(identity, DeFiConfig(supported_dexes=("Jupiter",)), signer=signer)
        assert agent.get_capabilities() == ["Token Swaps"]

    @pytest.mark.asyncio
    async def test_jupiter_only_agent_rejects_liquidity_instruction(self, identity, signer):
        agent = create_agent(identity, DeFiConfig(supported_dexes=("Jupiter",)), signer=signer)

        envelope = await agent.process_instruction("Add liquidity to SOL/USDC pool with 1 SOL and 15 USDC")

        assert envelope.success is False
        assert envelope.error.code == 400
        assert envelope.message == "Unsupported DeFi instruction"
        assert signer.effects == []

    def test_empty_venue_list_fails_fast(self, identity, signer):
        with pytest.raises(AgentConfigurationError):
            create_agent(identity, DeFiConfig(supported_dexes=()), signer=signer)

    def test_unknown_venue_rejected(self):
        with pytest.raises(ValidationError):
            DeFiConfig(supported_dexes=("Uniswap",))

    def test_venue_names_normalized(self):
        config = DeFiConfig(supported_dexes=("jupiter", "ORCA", "Jupiter"))
        assert config.supported_dexes == ("Jupiter", "Orca")

    def test_config_is_frozen(self, defi_config):
        with pytest.raises(ValidationError):
            defi_config.default_slippage_bps = 100

    def test_state_lists_venues(self, defi_agent):
        state = defi_agent.get_state()
        assert state["config"]["supported_dexes"] == ["Jupiter", "Raydium"]
        assert state["capabilities"] == ["Token Swaps", "Liquidity Provision"]


class TestSwapTokens:

    @pytest.mark.asyncio
    async def test_swap_scenario(self, defi_agent, signer):
        envelope = await defi_agent.process_instruction(
            "Swap 0.1 SOL to USDC with 0.5% slippage using Jupiter"
        )

        assert envelope.success is True
        payload = envelope.data
        assert payload.type == "swap"
        assert payload.source_token == "SOL"
        assert payload.target_token == "USDC"
        assert payload.amount == 0.1
        assert payload.dex == "Jupiter"
        assert payload.slippage_bps == 50
        assert payload.route == "SOL -> USDC"
        assert payload.estimated_output == pytest.approx(14.925)
        assert envelope.transaction_id == "tx-1"

        effect = signer.effects[0]
        assert effect.action == Action.SWAP_TOKENS
        assert effect.params["dex"] == "Jupiter"
        assert effect.params["amount"] == 0.1

    @pytest.mark.asyncio
    async def test_swap_serialized_shape(self, defi_agent):
        envelope = await defi_agent.process_instruction("Swap 0.1 SOL to USDC")
        data = envelope.to_dict()["data"]
        assert data["sourceToken"] == "SOL"
        assert data["targetToken"] == "USDC"
        assert data["amount"] == 0.1

    @pytest.mark.asyncio
    async def test_swap_defaults(self, defi_agent):
        envelope = await defi_agent.process_instruction("swap something for me")

        payload = envelope.data
        assert payload.source_token == "SOL"
        assert payload.target_token == "USDC"
        assert payload.amount == 1.0
        assert payload.slippage_bps == 50
        assert payload.dex == "Jupiter"

    @pytest.mark.asyncio
    async def test_named_venue(self, defi_agent):
        envelope = await defi_agent.process_instruction("Exchange 3 USDC for BONK on Raydium")

        payload = envelope.data
        assert payload.dex == "Raydium"
        assert payload.source_token == "USDC"
        assert payload.target_token == "BONK"
        assert payload.estimated_output == pytest.approx(3 / 0.00002 * 0.995)

    @pytest.mark.asyncio
    async def test_unpriced_token_has_no_estimate(self, defi_agent):
        envelope = await defi_agent.process_instruction("Swap 5 SOL to WIFX")

        assert envelope.success is True
        assert envelope.data.estimated_output is None
        assert envelope.to_dict()["data"]["estimatedOutput"] is None

    @pytest.mark.asyncio
    async def test_route_through_hub(self, defi_agent):
        envelope = await defi_agent.process_instruction("Swap 100 RAY to BONK")
        assert envelope.data.route == "RAY -> SOL -> BONK"


class TestAddLiquidity:

    @pytest.mark.asyncio
    async def test_liquidity_scenario(self, identity):
        signer = RecordingSigner()
        agent = create_agent(identity, DeFiConfig(supported_dexes=("Raydium",)), signer=signer)

        envelope = await agent.process_instruction(
            "Add liquidity to SOL/USDC pool on Raydium with 1 SOL and 15 USDC"
        )

        assert envelope.success is True
        payload = envelope.data
        assert payload.type == "liquidity"
        assert (payload.token_a, payload.amount_a) == ("SOL", 1.0)
        assert (payload.token_b, payload.amount_b) == ("USDC", 15.0)
        assert payload.lp_tokens == pytest.approx(math.sqrt(15))
        assert payload.dex == "Raydium"
        assert payload.pool_id
        assert envelope.transaction_id == "tx-1"
        assert signer.effects[0].params["poolId"] == payload.pool_id

    @pytest.mark.asyncio
    async def test_liquidity_uses_capable_venue(self, defi_agent):
        # Jupiter is listed first but has no pools.
        envelope = await defi_agent.process_instruction("Provide liquidity")
        assert envelope.data.dex == "Raydium"
        assert (envelope.data.token_a, envelope.data.token_b) == ("SOL", "USDC")

    @pytest.mark.asyncio
    async def test_pool_id_is_stable(self, defi_agent):
        first = await defi_agent.process_instruction("Deposit liquidity into SOL/USDC with 2 SOL")
        second = await defi_agent.process_instruction("Add liquidity to USDC/SOL")
        assert first.data.pool_id == second.data.pool_id


class TestAmountsAndRouting:

    @pytest.mark.asyncio
    async def test_thousands_separator_amount_is_signed_intact(self, defi_agent, signer):
        envelope = await defi_agent.process_instruction("Swap 1,000 USDC to SOL")

        assert envelope.data.amount == 1000.0
        assert envelope.data.source_token == "USDC"
        assert signer.effects[0].params["amount"] == 1000.0

    @pytest.mark.asyncio
    async def test_liquidity_on_named_exchange(self, defi_agent, signer):
        envelope = await defi_agent.process_instruction(
            "Add liquidity to the SOL/USDC pool on the Raydium exchange"
        )

        assert envelope.data.type == "liquidity"
        assert envelope.data.dex == "Raydium"
        assert signer.effects[0].action == Action.ADD_LIQUIDITY
