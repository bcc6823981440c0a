"""
landchain_registry.services

Service layer (transaction + ledger owner).

Responsibilities:
- Apply the registry's status rules for users, properties, offers and escrows.
- Mirror every write to the ledger before persisting it locally.
- Append derived audit rows and commit once per operation.
"""

# Package marker.
