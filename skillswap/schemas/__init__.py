"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at the system boundary (user input, API responses)
    - Response schemas never expose email or password_hash of other users
"""
