import logging
from typing import Any, Optional, Type

from bson.objectid import ObjectId

from zmongo_workflow.errors import WorkflowError

logger = logging.getLogger(__name__)


class SafeResult:
    """
    Wraps every workflow operation outcome in a predictable object.
    Provides:
      - .success: True/False
      - .data: main result (document, id, model, cursor)
      - .error: error string or None
      - .exc: the typed WorkflowError on failure
      - .model_dump(): JSON-friendly dict output
      - .unwrap(): data on success, re-raises .exc on failure
    """

    def __init__(
            self,
            data: Any = None,
            *,
            success: bool,
            error: Optional[str] = None,
            exc: Optional[WorkflowError] = None,
    ):
        self.success = success
        self.error = error
        self.data = data
        self.exc = exc

    @classmethod
    def ok(cls, data: Any = None) -> "SafeResult":
        return cls(data=data, success=True)

    @classmethod
    def fail(cls, exc: WorkflowError, data: Any = None) -> "SafeResult":
        return cls(data=data, success=False, error=str(exc), exc=exc)

    @staticmethod
    def _convert_bson(obj: Any) -> Any:
        if isinstance(obj, ObjectId):
            return str(obj)
        if isinstance(obj, dict):
            return {k: SafeResult._convert_bson(v) for k, v in obj.items()}
        if isinstance(obj, list):
            return [SafeResult._convert_bson(x) for x in obj]
        if hasattr(obj, "model_dump"):
            return obj.model_dump(by_alias=True)
        return obj

    def is_error(self, kind: Type[WorkflowError]) -> bool:
        """True when this is a failure carrying an error of type ``kind``."""
        return not self.success and isinstance(self.exc, kind)

    def model_dump(self):
        return {
            "success": self.success,
            "data": self._convert_bson(self.data),
            "error": self.error,
        }

    def unwrap(self, *, quiet: bool = False) -> Any:
        """
        Return .data on success or raise/return None on failure.

        Args:
            quiet (bool): If True, log the error and return None instead of raising

        Raises:
            WorkflowError: the typed error carried by a failed result
        """
        if self.success:
            return self.data
        if quiet:
            logger.info("Mongo error: %s", self.error)
            return None
        raise self.exc

    def __bool__(self):
        return self.success

    def __repr__(self):
        return f"SafeResult(success={self.success}, error={self.error!r}, data={str(self.data)[:300]})"
