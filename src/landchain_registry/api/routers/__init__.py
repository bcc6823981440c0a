"""
landchain_registry.api.routers

Router modules, one per registry resource.
"""
