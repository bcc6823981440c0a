"""
landchain_registry.ledger

Ledger gateway package.

Responsibilities:
- Define the `Ledger` interface every registry write is mirrored to.
- Provide the Fabric gateway client, the in-process mock ledger, and the
  file-system wallet used to hold the Fabric admin identity.
"""

# Package marker.
