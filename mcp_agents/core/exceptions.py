"""Custom exceptions for the mcp-agents framework.

This module defines the hierarchy of exceptions used throughout the
framework. All exceptions inherit from MCPAgentsError, enabling catch-all
exception handling while still allowing specific exception types.

Exception Hierarchy:
    MCPAgentsError (base)
    ├── ConfigurationError: Invalid configuration or settings
    │   ├── AgentConfigurationError: Agent built from an unusable configuration
    │   └── ContextLoadError: Context definitions missing or invalid
    ├── ClassificationError: Instruction matched no routing rule
    └── SigningError: Signer could not produce a transaction id
        ├── SignerRejectedError: Signer refused the effect
        ├── InsufficientFundsError: Account cannot cover the effect
        ├── NetworkUnavailableError: Ledger or signing service unreachable
        └── SignerTimeoutError: Submission exceeded its time budget

Envelope Status Codes:
    Errors that the Agent converts into a failed ResponseEnvelope carry a
    numeric ``status_code``. Classification failures use 400; signing
    failures use the 500-599 range so callers can tell them apart.
    Configuration errors carry no status code because they always
    propagate to the caller.
"""

from typing import Any, Optional


class MCPAgentsError(Exception):
    """Base exception for all mcp-agents errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code for programmatic handling
        context: Additional context information about the error
        recoverable: Whether the error is potentially recoverable
    """

    status_code: Optional[int] = None

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or "MCP_AGENTS_ERROR"
        self.context = context or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_log_dict(self) -> dict[str, Any]:
        """Return structured dict for logging.

        Returns:
            Dictionary with error details suitable for structured logging
        """
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.code,
            "status_code": self.status_code,
            "message": self.message,
            "recoverable": self.recoverable,
            "context": self.context,
        }


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(MCPAgentsError):
    """Raised when configuration is invalid or missing.

    Attributes:
        config_key: The configuration key that caused the error
        validation_details: Details about why validation failed
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        validation_details: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        context = kwargs.pop("context", {}) or {}
        if config_key:
            context["config_key"] = config_key
        if validation_details:
            context["validation_details"] = validation_details
        kwargs.setdefault("code", "CONFIG_ERROR")
        super().__init__(message, context=context, **kwargs)
        self.config_key = config_key
        self.validation_details = validation_details


class AgentConfigurationError(ConfigurationError):
    """Raised when an agent cannot be built from its configuration.

    Attributes:
        agent_kind: The agent variant being constructed
    """

    def __init__(
        self,
        message: str,
        agent_kind: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        context = kwargs.pop("context", {}) or {}
        if agent_kind:
            context["agent_kind"] = agent_kind
        super().__init__(message, code="AGENT_CONFIG_ERROR", context=context, **kwargs)
        self.agent_kind = agent_kind


class ContextLoadError(ConfigurationError):
    """Raised when context definitions cannot be loaded.

    Attributes:
        path: The file or directory that failed to load
    """

    def __init__(self, message: str, path: Optional[str] = None, **kwargs: Any) -> None:
        context = kwargs.pop("context", {}) or {}
        if path:
            context["path"] = path
        super().__init__(message, code="CONTEXT_LOAD_ERROR", context=context, **kwargs)
        self.path = path


# =============================================================================
# Classification Errors
# =============================================================================


class ClassificationError(MCPAgentsError):
    """Raised when no routing rule matches an instruction.

    Attributes:
        instruction: The raw instruction text
        agent_kind: The agent variant that attempted classification
    """

    status_code = 400

    def __init__(
        self,
        instruction: str,
        agent_kind: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        context = kwargs.pop("context", {}) or {}
        context["instruction"] = instruction
        if agent_kind:
            context["agent_kind"] = agent_kind
        super().__init__(
            "Could not parse instruction",
            code="CLASSIFICATION_ERROR",
            context=context,
            recoverable=True,
            **kwargs,
        )
        self.instruction = instruction
        self.agent_kind = agent_kind


# =============================================================================
# Signing Errors
# =============================================================================


class SigningError(MCPAgentsError):
    """Base exception for transaction signing failures.

    Attributes:
        action: The action whose effect failed to sign
    """

    status_code = 500

    def __init__(self, message: str, action: Optional[str] = None, **kwargs: Any) -> None:
        context = kwargs.pop("context", {}) or {}
        if action:
            context["action"] = action
        kwargs.setdefault("code", "SIGNING_ERROR")
        super().__init__(message, context=context, **kwargs)
        self.action = action


class SignerRejectedError(SigningError):
    """Raised when the signer refuses to sign an effect."""

    status_code = 501

    def __init__(self, message: str, action: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(message, action=action, code="SIGNER_REJECTED", **kwargs)


class InsufficientFundsError(SigningError):
    """Raised when the account cannot cover the effect and its fees."""

    status_code = 502

    def __init__(self, message: str, action: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(message, action=action, code="INSUFFICIENT_FUNDS", **kwargs)


class NetworkUnavailableError(SigningError):
    """Raised when the ledger or signing service cannot be reached."""

    status_code = 503

    def __init__(self, message: str, action: Optional[str] = None, **kwargs: Any) -> None:
        kwargs.setdefault("recoverable", True)
        super().__init__(message, action=action, code="NETWORK_UNAVAILABLE", **kwargs)


class SignerTimeoutError(SigningError):
    """Raised when submission exceeds its time budget.

    Attributes:
        timeout_seconds: The timeout duration that was exceeded
    """

    status_code = 504

    def __init__(
        self,
        message: str,
        action: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        **kwargs: Any,
    ) -> None:
        context = kwargs.pop("context", {}) or {}
        if timeout_seconds is not None:
            context["timeout_seconds"] = timeout_seconds
        kwargs.setdefault("recoverable", True)
        super().__init__(
            message, action=action, code="SIGNER_TIMEOUT", context=context, **kwargs
        )
        self.timeout_seconds = timeout_seconds


__all__ = [
    "MCPAgentsError",
    "ConfigurationError",
    "AgentConfigurationError",
    "ContextLoadError",
    "ClassificationError",
    "SigningError",
    "SignerRejectedError",
    "InsufficientFundsError",
    "NetworkUnavailableError",
    "SignerTimeoutError",
]
