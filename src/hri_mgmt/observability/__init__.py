"""
hri_mgmt.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- Request id propagation for log correlation.
"""

# Package marker.
