"""
Premium subscription lifecycle backed by Stripe.

Stripe is the source of truth for payment state; the user row mirrors it so
premium checks never need a network call. Webhook deliveries update that
mirror and are recorded in ``subscription_events``; a redelivered event id is
acknowledged without being applied twice.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Optional

import stripe
from sqlalchemy.orm import Session

from gymapp.models import SubscriptionStatus, User
from gymapp.repositories.subscription_repo import SubscriptionEventRepository
from gymapp.repositories.user_repo import UserRepository
from gymapp.settings import get_settings

log = logging.getLogger(__name__)


class BillingNotConfigured(Exception):
    pass


class InvalidWebhook(Exception):
    pass


@dataclass(frozen=True, slots=True)
class SubscriptionInfo:
    status: str
    is_premium: bool
    ends_at: Optional[datetime]
    stripe_customer_id: Optional[str]


def _aware(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes; everything we store is UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def get_subscription_info(user: User, now: Optional[datetime] = None) -> SubscriptionInfo:
    """Premium means status premium and an end date that is absent or still ahead."""
    now = now or datetime.now(timezone.utc)
    ends_at = _aware(user.subscription_ends_at)
    stored = SubscriptionStatus(user.subscription_status or SubscriptionStatus.free)
    is_premium = stored == SubscriptionStatus.premium and (ends_at is None or ends_at > now)
    return SubscriptionInfo(
        status=SubscriptionStatus.premium.value if is_premium else stored.value,
        is_premium=is_premium,
        ends_at=ends_at,
        stripe_customer_id=user.stripe_customer_id,
    )


def _configure() -> None:
    s = get_settings()
    if not s.STRIPE_SECRET_KEY:
        raise BillingNotConfigured("Stripe is not configured")
    stripe.api_key = s.STRIPE_SECRET_KEY


def _from_epoch(ts: Optional[int]) -> Optional[datetime]:
    return datetime.fromtimestamp(ts, tz=timezone.utc) if ts else None


# ---- customer-facing flows ---------------------------------------------

def get_or_create_customer(db: Session, user: User) -> str:
    if user.stripe_customer_id:
        return user.stripe_customer_id
    _configure()
    customer = stripe.Customer.create(
        email=user.email,
        metadata={"user_id": str(user.id), "username": user.username or ""},
    )
    UserRepository(db).update_subscription(user, stripe_customer_id=customer.id)
    log.info("created stripe customer %s for user %s", customer.id, user.id)
    return customer.id


def create_checkout_session(db: Session, user: User, base_url: str) -> str:
    _configure()
    price_id = get_settings().STRIPE_PRICE_ID
    if not price_id:
        raise BillingNotConfigured("Stripe price is not configured")
    customer_id = get_or_create_customer(db, user)
    base_url = base_url.rstrip("/")
    session = stripe.checkout.Session.create(
        customer=customer_id,
        mode="subscription",
        line_items=[{"price": price_id, "quantity": 1}],
        success_url=f"{base_url}/upgrade?success=true",
        cancel_url=f"{base_url}/upgrade?cancelled=true",
        metadata={"user_id": str(user.id)},
        subscription_data={"metadata": {"user_id": str(user.id)}},
    )
    return session.url


def create_portal_session(user: User, base_url: str) -> str:
    _configure()
    session = stripe.billing_portal.Session.create(
        customer=user.stripe_customer_id,
        return_url=f"{base_url.rstrip('/')}/settings",
    )
    return session.url


# ---- webhooks ------------------------------------------------------------

def verify_webhook(payload: bytes, signature: Optional[str]) -> dict[str, Any]:
    """Check the Stripe signature and return the event as a plain dict."""
    secret = get_settings().STRIPE_WEBHOOK_SECRET
    if not get_settings().STRIPE_SECRET_KEY or not secret:
        raise BillingNotConfigured("Stripe is not configured")
    if not payload or not signature:
        raise InvalidWebhook("Missing body or signature")
    try:
        stripe.Webhook.construct_event(payload, signature, secret)
    except (ValueError, stripe.SignatureVerificationError) as e:
        log.error("webhook signature verification failed: %s", e)
        raise InvalidWebhook("Invalid signature") from e
    return json.loads(payload)


def retrieve_subscription(subscription_id: str) -> dict[str, Any]:
    _configure()
    sub = stripe.Subscription.retrieve(subscription_id)
    return {
        "id": sub["id"],
        "status": sub["status"],
        "cancel_at_period_end": sub["cancel_at_period_end"],
        "current_period_start": sub["current_period_start"],
        "current_period_end": sub["current_period_end"],
        "metadata": dict(sub["metadata"] or {}),
    }


def subscription_status_for(sub: dict[str, Any]) -> SubscriptionStatus:
    if sub.get("cancel_at_period_end"):
        return SubscriptionStatus.cancelled
    if sub.get("status") == "active":
        return SubscriptionStatus.premium
    if sub.get("status") == "past_due":
        return SubscriptionStatus.past_due
    return SubscriptionStatus.free


class WebhookProcessor:
    """Applies one verified Stripe event to the local mirror."""

    def __init__(self, db: Session):
        self.db = db
        self.users = UserRepository(db)
        self.events = SubscriptionEventRepository(db)
        self._handlers: dict[str, Callable[[dict, dict], Optional[tuple[User, str, Optional[str]]]]] = {
            "checkout.session.completed": self._checkout_completed,
            "customer.subscription.updated": self._subscription_updated,
            "customer.subscription.deleted": self._subscription_deleted,
            "invoice.payment_failed": self._payment_failed,
            "invoice.payment_succeeded": self._payment_succeeded,
        }

    def process(self, event: dict[str, Any]) -> bool:
        """Returns True when the event changed local state."""
        event_id, event_type = event.get("id"), event.get("type")
        handler = self._handlers.get(event_type)
        if handler is None:
            log.info("ignoring stripe event %s (%s)", event_id, event_type)
            return False
        if event_id and self.events.seen(event_id):
            log.info("stripe event %s already processed", event_id)
            return False
        obj = event.get("data", {}).get("object", {})
        outcome = handler(event, obj)
        if outcome is None:
            return False
        user, kind, subscription_id = outcome
        self.events.record(
            user_id=user.id,
            event_type=kind,
            stripe_event_id=event_id,
            stripe_subscription_id=subscription_id,
            payload=obj,
        )
        log.info("stripe %s -> user %s %s", event_type, user.id, kind)
        return True

    def _user_from(self, metadata: Optional[dict]) -> Optional[User]:
        raw = (metadata or {}).get("user_id")
        if not raw:
            return None
        try:
            return self.users.get(int(raw))
        except ValueError:
            log.warning("stripe metadata user_id %r is not an id", raw)
            return None

    def _checkout_completed(self, event, session):
        user = self._user_from(session.get("metadata"))
        if user is None or not session.get("subscription"):
            return None
        sub = retrieve_subscription(session["subscription"])
        self.users.update_subscription(
            user,
            subscription_status=SubscriptionStatus.premium,
            stripe_subscription_id=sub["id"],
            subscription_started_at=_from_epoch(sub.get("current_period_start")),
            subscription_ends_at=_from_epoch(sub.get("current_period_end")),
        )
        return user, "subscription_created", sub["id"]

    def _subscription_updated(self, event, sub):
        user = self._user_from(sub.get("metadata"))
        if user is None:
            return None
        self.users.update_subscription(
            user,
            subscription_status=subscription_status_for(sub),
            subscription_ends_at=_from_epoch(sub.get("current_period_end")),
        )
        return user, "subscription_updated", sub.get("id")

    def _subscription_deleted(self, event, sub):
        user = self._user_from(sub.get("metadata"))
        if user is None:
            return None
        self.users.update_subscription(
            user,
            subscription_status=SubscriptionStatus.free,
            stripe_subscription_id=None,
            subscription_ends_at=None,
        )
        return user, "subscription_cancelled", sub.get("id")

    def _payment_failed(self, event, invoice):
        if not invoice.get("subscription"):
            return None
        sub = retrieve_subscription(invoice["subscription"])
        user = self._user_from(sub.get("metadata"))
        if user is None:
            return None
        self.users.update_subscription(user, subscription_status=SubscriptionStatus.past_due)
        return user, "payment_failed", sub["id"]

    def _payment_succeeded(self, event, invoice):
        # the first invoice is covered by checkout.session.completed
        if not invoice.get("subscription") or invoice.get("billing_reason") != "subscription_cycle":
            return None
        sub = retrieve_subscription(invoice["subscription"])
        user = self._user_from(sub.get("metadata"))
        if user is None:
            return None
        self.users.update_subscription(
            user,
            subscription_status=SubscriptionStatus.premium,
            subscription_ends_at=_from_epoch(sub.get("current_period_end")),
        )
        return user, "subscription_renewed", sub["id"]
