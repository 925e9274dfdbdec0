"""
hri_mgmt.api.routers

Router modules mounted by `hri_mgmt.api.app.create_app`.
"""
