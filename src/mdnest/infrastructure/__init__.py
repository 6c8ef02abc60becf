"""Infrastructure layer: filesystem traversal, document I/O, key-value store.

This layer depends on stdlib and third-party libs (SQLAlchemy).
It may use pure domain helpers but never services, commands, or output.
"""
