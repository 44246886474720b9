"""Infrastructure Layer — database, logging, credentials and change notification.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Backend library exceptions are mapped to SkillSwapError subclasses here
"""
