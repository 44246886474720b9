"""Services Layer — data-access wrappers over the users, requests and messages tables.

Invariants:
    - Services take an AsyncSession and commit their own writes
    - Domain rules come from core/; services only load, apply and persist
    - Every committed change that a live stream watches is published afterwards
"""
