"""
hri_mgmt.api

API package for the HRI Management API.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer stays thin: request binding + the auth gate + delegation to services.
