"""API Layer — FastAPI routes, request-context resolution and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Routes translate core sentinels (None/False/[]) into client responses
    - Routes never query the Store directly
"""
