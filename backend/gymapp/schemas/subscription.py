from datetime import datetime
from pydantic import BaseModel

class SubscriptionStatusRead(BaseModel):
    status: str
    is_premium: bool
    ends_at: datetime | None = None

class RedirectUrl(BaseModel):
    url: str
