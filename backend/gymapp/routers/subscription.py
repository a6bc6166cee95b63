import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session
import stripe

from gymapp.db import get_db
from gymapp.deps.auth import get_current_user
from gymapp.models import User
from gymapp.schemas.subscription import RedirectUrl, SubscriptionStatusRead
from gymapp.services import billing

log = logging.getLogger(__name__)

router = APIRouter(prefix="/subscription", tags=["subscription"])
webhook_router = APIRouter(prefix="/webhooks", tags=["webhooks"])

def _base_url(request: Request) -> str:
    return f"{request.url.scheme}://{request.url.netloc}"

@router.get("/status", response_model=SubscriptionStatusRead)
def status(current: User = Depends(get_current_user)):
    info = billing.get_subscription_info(current)
    return {"status": info.status, "is_premium": info.is_premium, "ends_at": info.ends_at}

@router.post("/checkout", response_model=RedirectUrl)
def checkout(request: Request, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    try:
        url = billing.create_checkout_session(db, current, _base_url(request))
    except billing.BillingNotConfigured as e:
        raise HTTPException(status_code=500, detail=str(e))
    except stripe.StripeError:
        log.exception("checkout session failed for user %s", current.id)
        raise HTTPException(status_code=502, detail="Failed to create checkout session")
    return {"url": url}

@router.post("/portal", response_model=RedirectUrl)
def portal(request: Request, current: User = Depends(get_current_user)):
    if not current.stripe_customer_id:
        raise HTTPException(status_code=400, detail="No billing account found")
    try:
        url = billing.create_portal_session(current, _base_url(request))
    except billing.BillingNotConfigured as e:
        raise HTTPException(status_code=500, detail=str(e))
    except stripe.StripeError:
        log.exception("portal session failed for user %s", current.id)
        raise HTTPException(status_code=502, detail="Failed to create portal session")
    return {"url": url}

@webhook_router.post("/stripe")
async def stripe_webhook(request: Request, db: Session = Depends(get_db)):
    payload = await request.body()
    try:
        event = billing.verify_webhook(payload, request.headers.get("stripe-signature"))
    except billing.BillingNotConfigured as e:
        raise HTTPException(status_code=500, detail=str(e))
    except billing.InvalidWebhook as e:
        raise HTTPException(status_code=400, detail=str(e))
    try:
        billing.WebhookProcessor(db).process(event)
    except stripe.StripeError:
        log.exception("failed handling stripe event %s", event.get("id"))
        raise HTTPException(status_code=502, detail="Failed to process event")
    return {"received": True}
