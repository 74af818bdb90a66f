"""Tests for transaction signers and signing failures.

Test Coverage:
- Simulated signer placeholder
- Remote signer JSON-RPC exchange (httpx.MockTransport)
- Failure mapping to SigningError subclasses and retry policy
- Signer selection from settings
- Signing failures surfaced as 5xx envelopes by the agent
"""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from mcp_agents.config.settings import MCPAgentsSettings
from mcp_agents.core.actions import Action
from mcp_agents.core.exceptions import (
    InsufficientFundsError,
    NetworkUnavailableError,
    SignerRejectedError,
    SignerTimeoutError,
    SigningError,
)
from mcp_agents.signing import (
    LedgerEffect,
    RemoteSigner,
    SimulatedSigner,
    build_signer,
)
from mcp_agents.signing.remote import RPC_METHOD

from tests.conftest import FailingSigner, build_agent

ENDPOINT = "https://signer.test/rpc"


@pytest.fixture
def effect() -> LedgerEffect:
    return LedgerEffect(
        action=Action.SWAP_TOKENS,
        agent_id="agent-1",
        endpoint="https://api.devnet.solana.com",
        params={"amount": 0.1},
    )


def make_signer(handler, **kwargs) -> RemoteSigner:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    kwargs.setdefault("retry_delay", 0)
    return RemoteSigner(ENDPOINT, client=client, **kwargs)


class TestSimulatedSigner:

    @pytest.mark.asyncio
    async def test_returns_placeholder(self, effect):
        assert await SimulatedSigner().sign(effect) == "simulated-transaction-signature"

    @pytest.mark.asyncio
    async def test_custom_placeholder(self, effect):
        assert await SimulatedSigner("sig-abc").sign(effect) == "sig-abc"

    def test_empty_placeholder_rejected(self):
        with pytest.raises(ValueError):
            SimulatedSigner("")


class TestLedgerEffect:

    def test_to_dict(self, effect):
        assert effect.to_dict() == {
            "action": "swap_tokens",
            "agentId": "agent-1",
            "endpoint": "https://api.devnet.solana.com",
            "commitment": "confirmed",
            "params": {"amount": 0.1},
        }


class TestRemoteSigner:

    @pytest.mark.asyncio
    async def test_successful_signature(self, effect):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(json.loads(request.content))
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": "5xSig"})

        signer = make_signer(handler)
        assert await signer.sign(effect) == "5xSig"

        body = requests[0]
        assert body["method"] == RPC_METHOD
        assert body["jsonrpc"] == "2.0"
        assert body["params"] == [effect.to_dict()]

    @pytest.mark.asyncio
    async def test_signature_object_result(self, effect):
        signer = make_signer(
            lambda request: httpx.Response(200, json={"result": {"signature": "sig-obj"}})
        )
        assert await signer.sign(effect) == "sig-obj"

    @pytest.mark.asyncio
    async def test_insufficient_funds(self, effect):
        signer = make_signer(
            lambda request: httpx.Response(
                200, json={"error": {"code": -32002, "message": "Insufficient funds for fee"}}
            )
        )
        with pytest.raises(InsufficientFundsError) as exc_info:
            await signer.sign(effect)
        assert exc_info.value.status_code == 502
        assert exc_info.value.action == "swap_tokens"

    @pytest.mark.asyncio
    async def test_rpc_rejection(self, effect):
        signer = make_signer(
            lambda request: httpx.Response(200, json={"error": {"message": "Blockhash not found"}})
        )
        with pytest.raises(SignerRejectedError):
            await signer.sign(effect)

    @pytest.mark.asyncio
    async def test_http_client_error_is_rejection(self, effect):
        signer = make_signer(lambda request: httpx.Response(403))
        with pytest.raises(SignerRejectedError):
            await signer.sign(effect)

    @pytest.mark.asyncio
    async def test_empty_result_is_rejection(self, effect):
        signer = make_signer(lambda request: httpx.Response(200, json={"result": ""}))
        with pytest.raises(SignerRejectedError):
            await signer.sign(effect)

    @pytest.mark.asyncio
    async def test_invalid_json_is_rejection(self, effect):
        signer = make_signer(lambda request: httpx.Response(200, content=b"<html>"))
        with pytest.raises(SignerRejectedError):
            await signer.sign(effect)

    @pytest.mark.asyncio
    async def test_network_errors_are_retried(self, effect):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            if len(calls) < 3:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200, json={"result": "after-retry"})

        signer = make_signer(handler, max_retries=2)
        assert await signer.sign(effect) == "after-retry"
        assert len(calls) == 3

    @pytest.mark.asyncio
    async def test_network_errors_exhaust_retries(self, effect):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503)

        signer = make_signer(handler, max_retries=1)
        with pytest.raises(NetworkUnavailableError) as exc_info:
            await signer.sign(effect)
        assert exc_info.value.status_code == 503
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_rejections_are_not_retried(self, effect):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json={"error": "nope"})

        signer = make_signer(handler, max_retries=3)
        with pytest.raises(SignerRejectedError):
            await signer.sign(effect)
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_timeout(self, effect):
        async def slow_handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(1)
            return httpx.Response(200, json={"result": "late"})

        signer = make_signer(slow_handler, timeout=0.05)
        with pytest.raises(SignerTimeoutError) as exc_info:
            await signer.sign(effect)
        assert exc_info.value.status_code == 504
        assert exc_info.value.timeout_seconds == 0.05

    @pytest.mark.asyncio
    async def test_aclose_keeps_injected_client_open(self, effect):
        client = httpx.AsyncClient(
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"result": "s"}))
        )
        signer = RemoteSigner(ENDPOINT, client=client)
        await signer.aclose()
        assert not client.is_closed
        await client.aclose()


class TestBuildSigner:

    def test_default_is_simulated(self):
        signer = build_signer(MCPAgentsSettings())
        assert isinstance(signer, SimulatedSigner)
        assert signer.placeholder == "simulated-transaction-signature"

    def test_remote_backend(self):
        settings = MCPAgentsSettings(
            signer={"backend": "remote", "endpoint": ENDPOINT, "timeout": 5, "max_retries": 1}
        )
        signer = build_signer(settings)
        assert isinstance(signer, RemoteSigner)
        assert signer.endpoint == ENDPOINT
        assert signer.timeout == 5
        assert signer.max_retries == 1

    def test_uses_cached_settings(self, monkeypatch):
        monkeypatch.setenv("MCP_AGENTS_SIGNER__PLACEHOLDER_SIGNATURE", "from-env")
        signer = build_signer()
        assert signer.placeholder == "from-env"


class TestSigningFailuresInAgent:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error,code",
        [
            (SigningError("boom"), 500),
            (SignerRejectedError("rejected"), 501),
            (InsufficientFundsError("Insufficient funds"), 502),
            (NetworkUnavailableError("offline"), 503),
            (SignerTimeoutError("too slow", timeout_seconds=1.0), 504),
        ],
    )
    async def test_failure_becomes_envelope(self, identity, defi_config, error, code):
        signer = FailingSigner(error)
        agent = build_agent(identity, defi_config, signer)

        envelope = await agent.process_instruction("Swap 0.1 SOL to USDC")

        assert envelope.success is False
        assert envelope.data is None
        assert envelope.transaction_id is None
        assert envelope.error.code == code
        assert envelope.error.message == error.message
        assert signer.calls == 1

    @pytest.mark.asyncio
    async def test_query_actions_never_reach_signer(self, identity, governance_config):
        signer = FailingSigner(NetworkUnavailableError("offline"))
        agent = build_agent(identity, governance_config, signer)

        envelope = await agent.process_instruction("treasury")

        assert envelope.success is True
        assert signer.calls == 0

    @pytest.mark.asyncio
    async def test_empty_transaction_id_is_a_signing_failure(self, identity, defi_config):
        agent = build_agent(identity, defi_config, SimulatedSigner("x"))
        agent.signer.placeholder = ""

        envelope = await agent.process_instruction("Swap 1 SOL to USDC")

        assert envelope.success is False
        assert envelope.error.code == 500
