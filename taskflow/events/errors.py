"""Structured task store errors"""
import json
from enum import Enum
from typing import Any, Dict, Optional


class StoreOperation(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    LIST = "list"


class TaskStoreWriteError(Exception):
    """
    Raised (as an event, never to the caller) when a task store request is rejected.

    Carries the document path, the attempted operation and the payload that was sent,
    so a listener can show exactly which write was lost.
    """

    def __init__(
        self,
        path: str,
        operation: StoreOperation,
        request_payload: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ):
        self.path = path
        self.operation = operation
        self.request_payload = request_payload
        self.cause = cause
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        context = {
            "path": self.path,
            "operation": self.operation.value,
            "request_payload": self.request_payload,
        }
        reason = f": {self.cause}" if self.cause else ""
        return f"Task store request denied{reason}\n{json.dumps(context, indent=2, default=str)}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "operation": self.operation.value,
            "request_payload": self.request_payload,
            "cause": str(self.cause) if self.cause else None,
        }
