"""Notification and push subscription endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from nongkrongr.db.session import get_db
from nongkrongr.models.notification import Notification
from nongkrongr.schemas.feedback import (
    NotificationCreate,
    NotificationOut,
    PushSubscriptionCreate,
    PushSubscriptionOut,
)
from nongkrongr.services import notifications as notification_service

router = APIRouter(tags=["notifications"])


def _to_out(notification: Notification) -> NotificationOut:
    out = NotificationOut.model_validate(notification)
    out.push_payload = notification_service.push_payload(notification)
    return out


@router.post("/notifications", response_model=NotificationOut, status_code=status.HTTP_201_CREATED)
def create_notification(payload: NotificationCreate, db: Session = Depends(get_db)) -> NotificationOut:
    return _to_out(notification_service.create_notification(db, payload))


@router.get("/notifications", response_model=list[NotificationOut])
def list_notifications(user_id: str, unread_only: bool = False, db: Session = Depends(get_db)) -> list[NotificationOut]:
    return [_to_out(n) for n in notification_service.list_notifications(db, user_id, unread_only)]


@router.post("/notifications/{notification_id}/read", response_model=NotificationOut)
def mark_read(notification_id: int, db: Session = Depends(get_db)) -> NotificationOut:
    return _to_out(notification_service.mark_read(db, notification_id))


@router.post("/push-subscriptions", response_model=PushSubscriptionOut, status_code=status.HTTP_201_CREATED)
def register_subscription(payload: PushSubscriptionCreate, db: Session = Depends(get_db)) -> PushSubscriptionOut:
    return PushSubscriptionOut.model_validate(notification_service.register_subscription(db, payload))


@router.get("/push-subscriptions", response_model=list[PushSubscriptionOut])
def list_subscriptions(user_id: str, db: Session = Depends(get_db)) -> list[PushSubscriptionOut]:
    return [PushSubscriptionOut.model_validate(s) for s in notification_service.subscriptions_for(db, user_id)]


@router.delete("/push-subscriptions/{subscription_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_subscription(subscription_id: int, db: Session = Depends(get_db)) -> None:
    notification_service.delete_subscription(db, subscription_id)
