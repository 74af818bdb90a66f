"""Pydantic settings for the mcp-agents framework.

This module defines the main MCPAgentsSettings class that loads
configuration from environment variables and .env files using
pydantic-settings.

Settings Categories:
    - Core: Framework-level settings (debug mode, log level, environment)
    - Ledger: Default ledger endpoint and commitment level
    - Signer: Which transaction signer to build and how it behaves
    - Contexts: Where context definition files live
    - Agents: Default values applied when agent configs omit them

Environment Variables:
    MCP_AGENTS_DEBUG: Enable debug mode (default: false)
    MCP_AGENTS_LOG_LEVEL: Logging level (default: INFO)
    MCP_AGENTS_LEDGER__ENDPOINT: Ledger RPC endpoint
    MCP_AGENTS_SIGNER__BACKEND: 'simulated' or 'remote' (default: simulated)
    MCP_AGENTS_SIGNER__ENDPOINT: Signing service URL (remote backend only)
    MCP_AGENTS_CONTEXTS__CONTEXTS_DIR: Directory of context definitions

Usage:
    from mcp_agents.config.settings import get_settings

    settings = get_settings()
    print(settings.signer.backend)
    print(settings.agents.default_slippage_bps)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# =============================================================================
# Default Constants
# =============================================================================

DEFAULT_LEDGER_ENDPOINT = "https://api.devnet.solana.com"
"""Default ledger RPC endpoint (Solana devnet)."""

DEFAULT_PLACEHOLDER_SIGNATURE = "simulated-transaction-signature"
"""Transaction id returned by the simulated signer."""

DEFAULT_SLIPPAGE_BPS = 50
"""Default swap slippage tolerance (0.5%)."""

DEFAULT_ROYALTY_BPS = 500
"""Default NFT creator royalty (5%)."""


# =============================================================================
# Nested Settings Models
# =============================================================================


class LedgerSettings(BaseModel):
    """Settings for the default ledger connection.

    Attributes:
        endpoint: RPC endpoint URL.
        commitment: Commitment level requested for confirmations.
    """

    endpoint: str = Field(
        default=DEFAULT_LEDGER_ENDPOINT,
        description="Ledger RPC endpoint"
    )
    commitment: str = Field(
        default="confirmed",
        description="Commitment level (processed, confirmed, finalized)"
    )

    @field_validator("commitment")
    @classmethod
    def validate_commitment(cls, v: str) -> str:
        """Validate commitment level."""
        valid_levels = {"processed", "confirmed", "finalized"}
        normalized = v.lower().strip()
        if normalized not in valid_levels:
            raise ValueError(
                f"Invalid commitment '{v}'. Must be one of: {', '.join(sorted(valid_levels))}"
            )
        return normalized


class SignerSettings(BaseModel):
    """Settings for the transaction signer.

    Signer Backends:
        - 'simulated': Deterministic placeholder signer, no I/O (default).
        - 'remote': JSON-RPC signing service reached over HTTP.
            Requires ``endpoint``.

    Attributes:
        backend: Signer backend type.
        placeholder_signature: Transaction id returned by the simulated signer.
        endpoint: Signing service URL for the remote backend.
        timeout: Upper bound on one submission, in seconds.
        max_retries: Retries after network failures (remote backend).
        retry_delay: Delay between retries in seconds.
    """

    backend: str = Field(
        default="simulated",
        description="Signer backend: 'simulated' or 'remote'"
    )
    placeholder_signature: str = Field(
        default=DEFAULT_PLACEHOLDER_SIGNATURE,
        min_length=1,
        description="Transaction id returned by the simulated signer"
    )
    endpoint: Optional[str] = Field(
        default=None,
        description="Signing service URL (remote backend)"
    )
    timeout: float = Field(
        default=30.0,
        gt=0.0,
        description="Submission timeout in seconds"
    )
    max_retries: int = Field(
        default=2,
        ge=0,
        le=10,
        description="Retries after network failures"
    )
    retry_delay: float = Field(
        default=0.5,
        ge=0.0,
        description="Delay between retries in seconds"
    )

    @field_validator("backend")
    @classmethod
    def validate_backend(cls, v: str) -> str:
        """Validate signer backend type."""
        valid_backends = {"simulated", "remote"}
        normalized = v.lower().strip()
        if normalized not in valid_backends:
            raise ValueError(
                f"Invalid signer backend '{v}'. Must be one of: {', '.join(sorted(valid_backends))}"
            )
        return normalized

    @model_validator(mode="after")
    def require_endpoint_for_remote(self) -> "SignerSettings":
        """The remote backend cannot work without an endpoint."""
        if self.backend == "remote" and not self.endpoint:
            raise ValueError("signer.endpoint is required when signer.backend is 'remote'")
        return self


class ContextSettings(BaseModel):
    """Settings for context definition loading.

    Attributes:
        contexts_dir: Directory scanned for ``*.json`` context definitions.
    """

    contexts_dir: Path = Field(
        default=Path("contexts"),
        description="Directory for context definitions"
    )

    @field_validator("contexts_dir", mode="before")
    @classmethod
    def convert_to_path(cls, v: Any) -> Path:
        """Convert string paths to Path objects."""
        if isinstance(v, str):
            return Path(v)
        return v


class AgentDefaults(BaseModel):
    """Defaults applied when an agent configuration omits a value.

    Attributes:
        default_slippage_bps: Swap slippage tolerance in basis points.
        default_royalty_bps: NFT creator royalty in basis points.
        voting_period_days: Length of a governance voting window.
    """

    default_slippage_bps: int = Field(
        default=DEFAULT_SLIPPAGE_BPS,
        ge=0,
        le=10_000,
        description="Default slippage in basis points"
    )
    default_royalty_bps: int = Field(
        default=DEFAULT_ROYALTY_BPS,
        ge=0,
        le=10_000,
        description="Default royalty in basis points"
    )
    voting_period_days: int = Field(
        default=3,
        ge=1,
        description="Governance voting window in days"
    )


# =============================================================================
# Main Settings Class
# =============================================================================


class MCPAgentsSettings(BaseSettings):
    """Main settings class for mcp-agents configuration.

    Environment variables use the MCP_AGENTS_ prefix, with ``__`` separating
    nested groups (e.g. ``MCP_AGENTS_SIGNER__BACKEND``).

    Attributes:
        debug: Enable debug mode for verbose logging.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional file that receives rotated log output.
        environment: Deployment environment.
        ledger: Default ledger connection.
        signer: Transaction signer configuration.
        contexts: Context definition loading.
        agents: Agent configuration defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="MCP_AGENTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    # Core settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )
    log_file: Optional[Path] = Field(
        default=None,
        description="Optional rotating log file"
    )
    environment: str = Field(
        default="development",
        description="Deployment environment"
    )

    # Nested configuration groups
    ledger: LedgerSettings = Field(
        default_factory=LedgerSettings,
        description="Ledger connection configuration"
    )
    signer: SignerSettings = Field(
        default_factory=SignerSettings,
        description="Transaction signer configuration"
    )
    contexts: ContextSettings = Field(
        default_factory=ContextSettings,
        description="Context loading configuration"
    )
    agents: AgentDefaults = Field(
        default_factory=AgentDefaults,
        description="Agent configuration defaults"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        normalized = v.upper()
        if normalized not in valid_levels:
            raise ValueError(
                f"Invalid log level '{v}'. Must be one of: {', '.join(sorted(valid_levels))}"
            )
        return normalized

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate and normalize environment."""
        valid_envs = {"development", "staging", "production", "test"}
        normalized = v.lower()
        if normalized not in valid_envs:
            raise ValueError(
                f"Invalid environment '{v}'. Must be one of: {', '.join(sorted(valid_envs))}"
            )
        return normalized

    def to_dict(self) -> dict[str, Any]:
        """Export settings as a dictionary.

        The signer endpoint may embed credentials, so it is masked.

        Returns:
            Dictionary representation of settings safe for logging.
        """
        data = self.model_dump(mode="json")
        if data["signer"].get("endpoint"):
            data["signer"]["endpoint"] = "***MASKED***"
        return data


# =============================================================================
# Singleton Pattern
# =============================================================================

_settings_instance: Optional[MCPAgentsSettings] = None


def get_settings() -> MCPAgentsSettings:
    """Get the cached settings instance.

    The settings are created once and cached for subsequent calls.

    Returns:
        The cached MCPAgentsSettings instance.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = MCPAgentsSettings()
    return _settings_instance


def reload_settings() -> MCPAgentsSettings:
    """Reload settings from environment, clearing the cache.

    Returns:
        A fresh MCPAgentsSettings instance.
    """
    global _settings_instance
    _settings_instance = MCPAgentsSettings()
    return _settings_instance


def clear_settings_cache() -> None:
    """Clear the settings cache without creating a new instance."""
    global _settings_instance
    _settings_instance = None


__all__ = [
    "MCPAgentsSettings",
    "LedgerSettings",
    "SignerSettings",
    "ContextSettings",
    "AgentDefaults",
    "get_settings",
    "reload_settings",
    "clear_settings_cache",
    "DEFAULT_LEDGER_ENDPOINT",
    "DEFAULT_PLACEHOLDER_SIGNATURE",
    "DEFAULT_SLIPPAGE_BPS",
    "DEFAULT_ROYALTY_BPS",
]
