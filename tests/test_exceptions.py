"""Tests for the exception hierarchy."""

from __future__ import annotations

import pytest

from mcp_agents.core.exceptions import (
    AgentConfigurationError,
    ClassificationError,
    ConfigurationError,
    ContextLoadError,
    InsufficientFundsError,
    MCPAgentsError,
    NetworkUnavailableError,
    SignerRejectedError,
    SignerTimeoutError,
    SigningError,
)


@pytest.mark.parametrize(
    "error,status_code,code",
    [
        (ClassificationError("hello"), 400, "CLASSIFICATION_ERROR"),
        (SigningError("x"), 500, "SIGNING_ERROR"),
        (SignerRejectedError("x"), 501, "SIGNER_REJECTED"),
        (InsufficientFundsError("x"), 502, "INSUFFICIENT_FUNDS"),
        (NetworkUnavailableError("x"), 503, "NETWORK_UNAVAILABLE"),
        (SignerTimeoutError("x"), 504, "SIGNER_TIMEOUT"),
    ],
)
def test_status_codes(error, status_code, code):
    assert error.status_code == status_code
    assert error.code == code
    assert isinstance(error, MCPAgentsError)


def test_configuration_errors_have_no_status_code():
    assert ConfigurationError("x").status_code is None
    assert AgentConfigurationError("x").status_code is None
    assert ContextLoadError("x").status_code is None


def test_hierarchy():
    assert issubclass(AgentConfigurationError, ConfigurationError)
    assert issubclass(ContextLoadError, ConfigurationError)
    assert issubclass(SignerTimeoutError, SigningError)


def test_classification_error_message():
    error = ClassificationError("do a barrel roll", agent_kind="defi")
    assert error.message == "Could not parse instruction"
    assert error.recoverable
    assert error.context == {"instruction": "do a barrel roll", "agent_kind": "defi"}
    assert str(error) == "[CLASSIFICATION_ERROR] Could not parse instruction"


def test_network_errors_are_recoverable():
    assert NetworkUnavailableError("x").recoverable
    assert SignerTimeoutError("x").recoverable
    assert not SignerRejectedError("x").recoverable


def test_to_log_dict():
    error = SignerTimeoutError("too slow", action="swap_tokens", timeout_seconds=2.5)
    assert error.to_log_dict() == {
        "error_type": "SignerTimeoutError",
        "error_code": "SIGNER_TIMEOUT",
        "status_code": 504,
        "message": "too slow",
        "recoverable": True,
        "context": {"timeout_seconds": 2.5, "action": "swap_tokens"},
    }


def test_configuration_context():
    error = AgentConfigurationError("bad", agent_kind="defi", config_key="supported_dexes")
    assert error.context == {"agent_kind": "defi", "config_key": "supported_dexes"}
    assert error.code == "AGENT_CONFIG_ERROR"
