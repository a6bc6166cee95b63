# gymapp/repositories/subscription_repo.py
from __future__ import annotations

from sqlalchemy import select

from gymapp.models import SubscriptionEvent
from gymapp.repositories.base import BaseRepository

class SubscriptionEventRepository(BaseRepository[SubscriptionEvent]):
    model = SubscriptionEvent

    def seen(self, stripe_event_id: str) -> bool:
        stmt = select(SubscriptionEvent.id).where(SubscriptionEvent.stripe_event_id == stripe_event_id)
        return self.db.execute(stmt).first() is not None

    def record(self, *, user_id: int, event_type: str, stripe_event_id: str,
               stripe_subscription_id: str | None = None, payload: dict | None = None) -> SubscriptionEvent:
        return self.add_and_refresh(SubscriptionEvent(
            user_id=user_id,
            event_type=event_type,
            stripe_event_id=stripe_event_id,
            stripe_subscription_id=stripe_subscription_id,
            payload=payload,
        ))

    def list_by_user(self, user_id: int) -> list[SubscriptionEvent]:
        stmt = select(SubscriptionEvent).where(SubscriptionEvent.user_id == user_id)\
                                        .order_by(SubscriptionEvent.id.desc())
        return self.read_or_empty(stmt)
