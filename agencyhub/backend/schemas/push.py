"""
Web Push Schemas.
"""

from pydantic import BaseModel, Field, model_validator

from agencyhub.backend.core.rbac import Role


class PushKeys(BaseModel):
    p256dh: str = Field(..., min_length=1)
    auth: str = Field(..., min_length=1)


class PushSubscribeRequest(BaseModel):
    """Browser PushSubscription JSON."""

    endpoint: str = Field(..., min_length=1, max_length=2000)
    keys: PushKeys


class PushUnsubscribeRequest(BaseModel):
    endpoint: str = Field(..., min_length=1, max_length=2000)


class PushSendRequest(BaseModel):
    """
    Admin broadcast.

    Targets one user when ``user_id`` is set, every user of ``role`` when
    that is set, otherwise every subscribed user.
    """

    title: str = Field(..., min_length=1, max_length=200)
    body: str = Field(..., min_length=1, max_length=2000)
    url: str | None = Field(default=None, max_length=500)
    user_id: str | None = None
    role: Role | None = None

    @model_validator(mode="after")
    def _single_target(self) -> "PushSendRequest":
        if self.user_id and self.role:
            raise ValueError("Specify either user_id or role, not both")
        return self


class VapidKeyResponse(BaseModel):
    public_key: str


class PushSubscriptionResponse(BaseModel):
    subscribed: bool
    endpoint: str


class PushDeliveryResult(BaseModel):
    sent: int = 0
    failed: int = 0
    removed: int = 0
