"""Core Layer — pure domain types, request context, validation and errors.

Invariants:
    - Nothing in core/ performs I/O
    - core/ never imports from infrastructure/ or services/
"""
