"""Admin Schemas — platform overview counts."""

from pydantic import BaseModel


class RequestCounts(BaseModel):
    pending: int = 0
    accepted: int = 0
    rejected: int = 0


class PlatformOverview(BaseModel):
    users: int
    banned_users: int
    admins: int
    requests: RequestCounts
    messages: int
