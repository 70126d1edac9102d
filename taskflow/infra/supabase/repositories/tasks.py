"""Task repository"""
from typing import Optional

from supabase import Client  # type: ignore

from taskflow.models.task import Task, TaskTimerUpdate

from .base import BaseRepository


class TaskRepository(BaseRepository[Task, TaskTimerUpdate]):
    """Repository for task operations"""

    def __init__(self, client: Client):
        super().__init__(client, "tasks", Task)

    def path_for(self, task_id: str) -> str:
        """Document path used when reporting failed writes"""
        return f"{self._table_name}/{task_id}"

    async def find_for_user(self, task_id: str, user_id: str) -> Optional[Task]:
        """Find a task by ID, only if it belongs to the user"""
        task = await self.find_by_id(task_id)
        if task is None or task.user_id != user_id:
            return None
        return task
