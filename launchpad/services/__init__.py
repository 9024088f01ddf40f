"""Services Layer — the data-access core that owns user and trip business rules.

Invariants:
    - Routes call services; services call the Store; nothing reaches around the core
"""
