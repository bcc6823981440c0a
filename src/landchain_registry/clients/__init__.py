"""
landchain_registry.clients

Outbound HTTP clients.

Responsibilities:
- AI chat-completions gateway used for price prediction.
- Sepolia RPC endpoint (web3.py) used to look up wallet-signed transactions.
"""

# Package marker.
