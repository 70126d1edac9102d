"""Process-wide event channels"""
from .error_emitter import ErrorEmitter, error_emitter, STORE_WRITE_ERROR
from .errors import StoreOperation, TaskStoreWriteError
from .listener import StoreErrorListener

__all__ = [
    'ErrorEmitter',
    'error_emitter',
    'STORE_WRITE_ERROR',
    'StoreOperation',
    'TaskStoreWriteError',
    'StoreErrorListener',
]
