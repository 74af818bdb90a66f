"""Response envelope returned by every agent action.

The envelope is the only caller-facing contract of the framework. Its JSON
shape is fixed:

    {
        "success": bool,
        "message": str,
        "data": {...},                       # optional payload
        "error": {"code": int, "message": str},  # optional
        "transactionId": str                 # optional
    }

Invariants (enforced on construction):
    - success is False  =>  data is absent and error is present
    - success is True   =>  error is absent

Example:
    >>> envelope = ResponseEnvelope.failure(
    ...     "Unsupported governance instruction", code=400,
    ...     error_message="Could not parse instruction",
    ... )
    >>> envelope.to_dict()["error"]["code"]
    400
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from mcp_agents.core.exceptions import MCPAgentsError
from mcp_agents.core.payloads import ActionPayload


class ErrorDetail(BaseModel):
    """Error block of a failed envelope.

    Attributes:
        code: Numeric status code (400 for classification, 5xx for signing).
        message: Short machine-stable failure description.
    """

    model_config = ConfigDict(frozen=True)

    code: int
    message: str


class ResponseEnvelope(BaseModel):
    """Uniform result of processing one instruction.

    Attributes:
        success: Whether the action completed.
        message: Human-readable summary.
        data: Action payload, present only on success.
        error: Error detail, present only on failure.
        transaction_id: Signer-issued id, present only when the handler
            performed a ledger-affecting action.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    success: bool
    message: str
    data: Optional[ActionPayload] = None
    error: Optional[ErrorDetail] = None
    transaction_id: Optional[str] = Field(default=None, alias="transactionId")

    @model_validator(mode="after")
    def check_success_error_exclusion(self) -> "ResponseEnvelope":
        """Enforce the success/data/error presence rules."""
        if self.success:
            if self.error is not None:
                raise ValueError("A successful envelope must not carry an error")
        else:
            if self.error is None:
                raise ValueError("A failed envelope must carry an error")
            if self.data is not None:
                raise ValueError("A failed envelope must not carry data")
            if self.transaction_id is not None:
                raise ValueError("A failed envelope must not carry a transaction id")
        if self.transaction_id is not None and not self.transaction_id:
            raise ValueError("transaction_id must be non-empty when present")
        return self

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def ok(
        cls,
        message: str,
        data: ActionPayload,
        transaction_id: Optional[str] = None,
    ) -> "ResponseEnvelope":
        """Build a successful envelope."""
        return cls(success=True, message=message, data=data, transaction_id=transaction_id)

    @classmethod
    def failure(cls, message: str, code: int, error_message: str) -> "ResponseEnvelope":
        """Build a failed envelope."""
        return cls(
            success=False,
            message=message,
            error=ErrorDetail(code=code, message=error_message),
        )

    @classmethod
    def from_error(cls, exc: MCPAgentsError, message: Optional[str] = None) -> "ResponseEnvelope":
        """Convert an envelope-bearing exception into a failed envelope.

        Args:
            exc: An exception with a ``status_code``.
            message: Optional summary; defaults to the exception message.

        Raises:
            ValueError: If the exception carries no status code.
        """
        if exc.status_code is None:
            raise ValueError(f"{type(exc).__name__} cannot be converted to an envelope")
        return cls.failure(
            message=message or exc.message,
            code=exc.status_code,
            error_message=exc.message,
        )

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the caller-facing shape, omitting absent fields."""
        result: dict[str, Any] = {"success": self.success, "message": self.message}
        if self.data is not None:
            result["data"] = self.data.to_dict()
        if self.error is not None:
            result["error"] = self.error.model_dump()
        if self.transaction_id is not None:
            result["transactionId"] = self.transaction_id
        return result


__all__ = ["ErrorDetail", "ResponseEnvelope"]
