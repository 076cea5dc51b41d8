# path: bike-router-api/bike_router/utils/notifications.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Optional

import requests

from bike_router.config import Settings, get_settings


logger = logging.getLogger(__name__)

NOTIFY_TIMEOUT_S = 5


@dataclass(frozen=True)
class Message:
    content: str
    topic: str = ""
    time_now: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def format_error_notification(err: BaseException, context: str, settings: Optional[Settings] = None) -> Message:
    settings = settings or get_settings()
    return Message(
        content=f"Error occurred: {err} | Context: {context}",
        topic=settings.ntfy_error_topic,
    )


def format_info_notification(info: str, context: str, settings: Optional[Settings] = None) -> Message:
    settings = settings or get_settings()
    return Message(
        content=f"Info: {info} | Context: {context}",
        topic=settings.ntfy_info_topic,
    )


def send_notification(message: Message, settings: Optional[Settings] = None) -> bool:
    """
    Publishes the message to its ntfy topic.

    Delivery is best effort: failures are logged and reported through the
    return value, never raised to the caller.
    """
    settings = settings or get_settings()
    if not settings.notifications_enabled:
        return False

    message = replace(message, time_now=datetime.now(timezone.utc))
    body = f"{message.content}\nTime: {message.time_now.isoformat(timespec='seconds')}"
    url = f"{settings.ntfy_base_url}/{message.topic}"
    try:
        response = requests.post(
            url,
            data=body.encode("utf-8"),
            headers={"Content-Type": "text/plain"},
            timeout=NOTIFY_TIMEOUT_S,
        )
        response.raise_for_status()
    except requests.RequestException as exc:
        logger.warning("Notification to %s failed: %s", url, exc)
        return False
    return True
