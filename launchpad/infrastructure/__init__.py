"""Infrastructure Layer — database engine, table store and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/
    - All SQLAlchemy exceptions are mapped to core/errors.py types before leaving this layer
"""
