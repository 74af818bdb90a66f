"""mcp-agents - natural-language agents for ledger actions.

A small framework for agents that:
- Classify free-text instructions with an ordered keyword rule table
- Execute governance, DeFi and NFT marketplace actions
- Hand every ledger-mutating action to a pluggable transaction signer
- Return a uniform, introspectable response envelope
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
