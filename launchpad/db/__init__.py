"""Database Package — declarative Base and store lifecycle tooling.

Invariants:
    - Base is the single source of truth for table metadata
"""
