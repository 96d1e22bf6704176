# zmongo_workflow/cursor.py
import logging
from typing import Any, Dict, Optional, Type

from bson import ObjectId
from pydantic import BaseModel, ValidationError
from pymongo.errors import PyMongoError

from zmongo_workflow.errors import DecodeError, QueryError
from zmongo_workflow.safe_result import SafeResult

logger = logging.getLogger(__name__)


def stringify_id(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Return a shallow copy with _id coerced to str for display."""
    if "_id" in doc and isinstance(doc["_id"], ObjectId):
        newd = dict(doc)
        newd["_id"] = str(newd["_id"])
        return newd
    return dict(doc)


def decode_document(doc: Any, model: Optional[Type[BaseModel]] = None) -> Any:
    """
    Decode a raw driver document.

    Without ``model`` the result is a plain dict with a string ``_id``. With a
    pydantic ``model`` the document is validated into it, through the model's
    ``from_document`` hook when it has one.

    Raises:
        DecodeError: the document is not a mapping or does not fit ``model``
    """
    if not isinstance(doc, dict):
        raise DecodeError(f"expected a document, got {type(doc).__name__}")
    if model is None:
        return stringify_id(doc)
    try:
        if hasattr(model, "from_document"):
            return model.from_document(doc)
        return model.model_validate(doc)
    except ValidationError as e:
        raise DecodeError(f"cannot decode document into {model.__name__}: {e}") from e


class DocumentCursor:
    """
    Forward-only, single-pass view over a driver cursor.

    The underlying cursor is closed exactly once, on exhaustion, by ``close()``
    or when leaving ``async with``, whichever comes first.
    """

    def __init__(self, cursor: Any, model: Optional[Type[BaseModel]] = None):
        self._cursor = cursor
        self.model = model
        self.closed = False
        self.exhausted = False

    async def __aenter__(self) -> "DocumentCursor":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self) -> None:
        """
        Release the server-side cursor. Only the first call reaches the driver.

        Raises:
            QueryError: the driver failed to kill the cursor
        """
        if self.closed:
            return
        self.closed = True
        try:
            await self._cursor.close()
        except PyMongoError as e:
            raise QueryError.from_exc("cursor close failed", e) from e
        logger.debug("Cursor closed.")

    async def decode_next(self, model: Optional[Type[BaseModel]] = None) -> SafeResult:
        """
        Advance one document.

        Returns ``SafeResult.ok(doc)``, ``SafeResult.ok(None)`` at the end of the
        sequence, or a failure carrying QueryError/DecodeError.
        """
        if self.closed or self.exhausted:
            return SafeResult.ok(None)
        try:
            raw = await self._cursor.next()
        except StopAsyncIteration:
            self.exhausted = True
            try:
                await self.close()
            except QueryError as e:
                return SafeResult.fail(e)
            return SafeResult.ok(None)
        except PyMongoError as e:
            return SafeResult.fail(QueryError.from_exc("cursor advance failed", e))
        try:
            return SafeResult.ok(decode_document(raw, model or self.model))
        except DecodeError as e:
            return SafeResult.fail(e)

    def __aiter__(self):
        return self

    async def __anext__(self) -> Any:
        result = await self.decode_next()
        if not result.success:
            raise result.exc
        if result.data is None:
            raise StopAsyncIteration
        return result.data
