"""Repository layer for data access"""
from .base import BaseRepository
from .tasks import TaskRepository

__all__ = ['BaseRepository', 'TaskRepository']
