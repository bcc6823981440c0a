"""
landchain_registry.auth

Authentication package.

Responsibilities:
- JWT issuing/validation for login sessions.
- FastAPI dependencies resolving the caller's `Principal`.
"""

# Package marker.
