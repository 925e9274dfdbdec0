"""
hri_mgmt.auth

Authentication/authorization package.

Responsibilities:
- OIDC issuer resolution and token verification (`oidc`, `static`).
- Claims model and role-string rules (`models`).
- The authorization engine and its error classification (`validator`, `classify`).
- Batch capability checks and FastAPI dependencies (`permissions`, `deps`).
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing is re-exported here: `auth.deps` imports `api.deps`, which imports
# `auth.validator`, so eager re-exports would create an import cycle.
