"""JSON-RPC transaction signer backed by a remote signing service.

The remote signer posts each ledger effect to a signing service as a
JSON-RPC 2.0 request and returns the transaction id from the result.

Failure Mapping:
    - Connection and transport errors, HTTP 5xx -> NetworkUnavailableError
      (retried up to ``max_retries`` times)
    - Overall timeout or HTTP read timeout -> SignerTimeoutError
    - RPC error mentioning insufficient funds -> InsufficientFundsError
    - Any other RPC error, HTTP 4xx or malformed reply -> SignerRejectedError

Example:
    ```python
    signer = RemoteSigner("https://signer.internal/rpc", timeout=10.0)
    try:
        tx_id = await signer.sign(effect)
    finally:
        await signer.aclose()
    ```
"""

from __future__ import annotations

import asyncio
import itertools
import logging
from typing import Any, Optional

import httpx

from mcp_agents.core.exceptions import (
    InsufficientFundsError,
    NetworkUnavailableError,
    SignerRejectedError,
    SignerTimeoutError,
)
from mcp_agents.signing.signer import LedgerEffect, TransactionSigner


# =============================================================================
# Module Logger
# =============================================================================

logger = logging.getLogger(__name__)

RPC_METHOD = "signAndSendEffect"


class RemoteSigner(TransactionSigner):
    """Signer that delegates to a JSON-RPC signing service over HTTP.

    Attributes:
        endpoint: Signing service URL.
        timeout: Upper bound on one ``sign`` call (all attempts), seconds.
        max_retries: Retries after network failures.
        retry_delay: Delay between retries, seconds.
    """

    def __init__(
        self,
        endpoint: str,
        timeout: float = 30.0,
        max_retries: int = 2,
        retry_delay: float = 0.5,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """Initialize the remote signer.

        Args:
            endpoint: Signing service URL.
            timeout: Overall timeout for one ``sign`` call in seconds.
            max_retries: Retries after network failures.
            retry_delay: Delay between retries in seconds.
            client: Optional pre-built client (the signer then does not
                close it).
        """
        self.endpoint = endpoint
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout, connect=min(timeout, 10.0)),
        )
        self._request_ids = itertools.count(1)

    async def sign(self, effect: LedgerEffect) -> str:
        """Submit an effect, retrying network failures.

        Raises:
            SignerTimeoutError: If the call exceeds ``timeout``.
            NetworkUnavailableError: If every attempt failed to connect.
            InsufficientFundsError: If the service reports missing funds.
            SignerRejectedError: If the service refuses the effect.
        """
        try:
            return await asyncio.wait_for(self._sign_with_retries(effect), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.warning(f"Signing {effect.action.value} timed out after {self.timeout}s")
            raise SignerTimeoutError(
                f"Signing timed out after {self.timeout}s",
                action=effect.action.value,
                timeout_seconds=self.timeout,
            ) from e

    async def _sign_with_retries(self, effect: LedgerEffect) -> str:
        attempts = self.max_retries + 1
        for attempt in range(1, attempts + 1):
            try:
                return await self._submit(effect)
            except NetworkUnavailableError as e:
                logger.warning(
                    f"Signing attempt {attempt}/{attempts} for {effect.action.value} failed: {e.message}"
                )
                if attempt == attempts:
                    raise
                await asyncio.sleep(self.retry_delay)
        raise AssertionError("unreachable")

    async def _submit(self, effect: LedgerEffect) -> str:
        action = effect.action.value
        request = {
            "jsonrpc": "2.0",
            "id": next(self._request_ids),
            "method": RPC_METHOD,
            "params": [effect.to_dict()],
        }

        try:
            response = await self._client.post(self.endpoint, json=request)
        except httpx.TimeoutException as e:
            raise SignerTimeoutError(
                f"Signing service did not respond: {e}",
                action=action,
                timeout_seconds=self.timeout,
            ) from e
        except httpx.TransportError as e:
            raise NetworkUnavailableError(f"Signing service unreachable: {e}", action=action) from e

        if response.status_code >= 500:
            raise NetworkUnavailableError(
                f"Signing service unavailable (HTTP {response.status_code})", action=action
            )
        if response.status_code >= 400:
            raise SignerRejectedError(
                f"Signing service rejected request (HTTP {response.status_code})", action=action
            )

        try:
            body = response.json()
        except ValueError as e:
            raise SignerRejectedError("Signing service returned invalid JSON", action=action) from e

        if not isinstance(body, dict):
            raise SignerRejectedError("Signing service returned a malformed reply", action=action)

        error = body.get("error")
        if error:
            message = _error_message(error)
            if "insufficient" in message.lower():
                raise InsufficientFundsError(message, action=action)
            raise SignerRejectedError(message, action=action)

        signature = _signature_from(body.get("result"))
        if not signature:
            raise SignerRejectedError("Signing service returned no signature", action=action)

        logger.debug(f"Signed {action} for {effect.agent_id}: {signature}")
        return signature

    async def aclose(self) -> None:
        """Close the HTTP client if this signer created it."""
        if self._owns_client:
            await self._client.aclose()


def _error_message(error: Any) -> str:
    if isinstance(error, dict):
        return str(error.get("message") or "Signing rejected")
    return str(error)


def _signature_from(result: Any) -> Optional[str]:
    if isinstance(result, str):
        return result or None
    if isinstance(result, dict):
        signature = result.get("signature")
        if isinstance(signature, str) and signature:
            return signature
    return None


__all__ = ["RemoteSigner", "RPC_METHOD"]
