"""API Layer — FastAPI routers, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Routes stay thin: validation in schemas, rules in core, IO in services
"""
