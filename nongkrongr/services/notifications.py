"""In-app notifications and the Web Push subscriptions they fan out to."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from nongkrongr.core.exceptions import NotFoundError
from nongkrongr.models.notification import Notification, PushSubscription
from nongkrongr.schemas.feedback import NotificationCreate, PushSubscriptionCreate
from nongkrongr.services.profiles import get_profile

logger = logging.getLogger(__name__)

PUSH_ICON = "https://nongkrongr.com/icon.png"


def push_payload(notification: Notification) -> dict[str, Any]:
    """Body sent to every device of the recipient; deep-links to the cafe when there is one."""
    return {
        "title": notification.title,
        "message": notification.message,
        "url": f"/#/cafe/{notification.target_id}" if notification.target_id else "/",
        "icon": PUSH_ICON,
    }


def create_notification(db: Session, payload: NotificationCreate) -> Notification:
    get_profile(db, payload.user_id)
    notification = Notification(**payload.model_dump(), is_read=False)
    try:
        db.add(notification)
        db.commit()
        db.refresh(notification)
    except Exception:
        db.rollback()
        raise
    devices = len(subscriptions_for(db, payload.user_id))
    logger.info("Notification %s for user %s (%d push devices)", notification.id, payload.user_id, devices)
    return notification


def list_notifications(db: Session, user_id: str, unread_only: bool = False) -> list[Notification]:
    stmt = (
        select(Notification)
        .where(Notification.user_id == user_id)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
    )
    if unread_only:
        stmt = stmt.where(Notification.is_read.is_(False))
    return list(db.execute(stmt).scalars().all())


def mark_read(db: Session, notification_id: int) -> Notification:
    notification = db.get(Notification, notification_id)
    if notification is None:
        raise NotFoundError(f"Notification {notification_id} not found")
    try:
        notification.is_read = True
        db.commit()
        db.refresh(notification)
    except Exception:
        db.rollback()
        raise
    return notification


def subscriptions_for(db: Session, user_id: str) -> list[PushSubscription]:
    return list(db.execute(select(PushSubscription).where(PushSubscription.user_id == user_id)).scalars().all())


def register_subscription(db: Session, payload: PushSubscriptionCreate) -> PushSubscription:
    """Store a browser subscription; re-registering an endpoint updates it."""
    get_profile(db, payload.user_id)
    try:
        subscription = db.execute(
            select(PushSubscription).where(PushSubscription.endpoint == payload.endpoint)
        ).scalar_one_or_none()
        if subscription is None:
            subscription = PushSubscription(**payload.model_dump())
            db.add(subscription)
        else:
            subscription.user_id = payload.user_id
            subscription.keys = payload.keys
        db.commit()
        db.refresh(subscription)
    except Exception:
        db.rollback()
        raise
    return subscription


def delete_subscription(db: Session, subscription_id: int) -> None:
    """Drop a subscription, e.g. after the push service answered 410 Gone."""
    subscription = db.get(PushSubscription, subscription_id)
    if subscription is None:
        raise NotFoundError(f"Subscription {subscription_id} not found")
    try:
        db.delete(subscription)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Deleted push subscription %s", subscription_id)
