"""In-app notification surface for timer events"""
import logging
from collections import deque
from datetime import datetime, timezone
from typing import Deque, List, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

MAX_FEED_SIZE = 50


class Notification(BaseModel):
    """Short-lived message shown to the user"""
    title: str
    description: str
    task_id: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class InAppNotifier:
    """
    Fire-and-forget notification feed for one user session.

    The UI polls drain() and shows each message as a toast. Oldest messages are
    dropped once the feed is full.
    """

    def __init__(self, max_size: int = MAX_FEED_SIZE):
        self._feed: Deque[Notification] = deque(maxlen=max_size)

    def notify(self, title: str, description: str, task_id: Optional[str] = None) -> None:
        logger.info(f"Notification: {title} - {description}")
        self._feed.append(Notification(title=title, description=description, task_id=task_id))

    def pending(self) -> List[Notification]:
        return list(self._feed)

    def drain(self) -> List[Notification]:
        items = list(self._feed)
        self._feed.clear()
        return items
