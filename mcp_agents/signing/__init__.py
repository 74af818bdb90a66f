"""Transaction signing for mcp-agents.

Signers turn a LedgerEffect into a transaction id. The simulated signer is
the default; the remote signer talks JSON-RPC to a signing service.
"""

from mcp_agents.signing.factory import build_signer
from mcp_agents.signing.remote import RemoteSigner
from mcp_agents.signing.signer import LedgerEffect, SimulatedSigner, TransactionSigner

__all__ = [
    "LedgerEffect",
    "TransactionSigner",
    "SimulatedSigner",
    "RemoteSigner",
    "build_signer",
]
