"""
landchain_registry.api

API package for the registry service.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring, request models and error mapping.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer stays thin: request validation + delegation to services.
