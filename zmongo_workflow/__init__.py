# zmongo_workflow/__init__.py
"""
Public package API.
"""
from .config import WorkflowConfig
from .errors import (
    DatabaseConnectionError,
    DecodeError,
    DocumentWriteError,
    NotFoundError,
    QueryError,
    WorkflowError,
)
from .safe_result import SafeResult
from .models import Person
from .cursor import DocumentCursor
from .client import ZMongoWorkflowClient
from .runner import WorkflowRunner, main

__all__ = [
    "WorkflowConfig",
    "WorkflowError",
    "DatabaseConnectionError",
    "DocumentWriteError",
    "QueryError",
    "DecodeError",
    "NotFoundError",
    "SafeResult",
    "Person",
    "DocumentCursor",
    "ZMongoWorkflowClient",
    "WorkflowRunner",
    "main",
]
