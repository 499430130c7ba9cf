"""
Domain layer for the order store.

This layer contains the status enumeration, value objects and the
repository interfaces implemented by the database layer.
"""
