"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Table names mirror the platform collections: users, requests, messages
      (+ feedback and message_receipts for the list-valued fields)

Design Decisions:
    - All models imported here so string-based relationship() references
      resolve before any query runs
"""

from skillswap.models.user import User  # noqa: F401
from skillswap.models.feedback import Feedback  # noqa: F401
from skillswap.models.skill_request import SkillRequest  # noqa: F401
from skillswap.models.message import Message, MessageReceipt  # noqa: F401
