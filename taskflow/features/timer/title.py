"""Document title surface and the announcer that owns it"""
import logging
from typing import Optional

from taskflow import config

logger = logging.getLogger(__name__)


class DocumentTitle:
    """The single mutable title string shown to the user"""

    def __init__(self, neutral: str = config.APP_TITLE):
        self.neutral = neutral
        self.value = neutral

    def set(self, value: str) -> None:
        self.value = value

    @property
    def is_neutral(self) -> bool:
        return self.value == self.neutral


class TitleAnnouncer:
    """Mirrors the focused timer into the title; at most one task is focused"""

    def __init__(self, surface: Optional[DocumentTitle] = None):
        self._surface = surface or DocumentTitle()
        self._focused_task_id: Optional[str] = None

    @property
    def focused_task_id(self) -> Optional[str]:
        return self._focused_task_id

    @property
    def surface(self) -> DocumentTitle:
        return self._surface

    @property
    def title(self) -> str:
        return self._surface.value

    @property
    def neutral(self) -> str:
        return self._surface.neutral

    def is_focused(self, task_id: str) -> bool:
        return self._focused_task_id == task_id

    def focus(self, task_id: str) -> None:
        if self._focused_task_id != task_id:
            logger.debug(f"Title focus moved to task {task_id}")
        self._focused_task_id = task_id

    def announce(self, text: str) -> None:
        if self._surface.value != text:
            self._surface.set(text)

    def clear(self) -> None:
        """Drop focus and restore the neutral title (no write when already neutral)"""
        self._focused_task_id = None
        if not self._surface.is_neutral:
            self._surface.set(self._surface.neutral)
