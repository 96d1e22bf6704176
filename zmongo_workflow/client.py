# zmongo_workflow/client.py
import logging
from collections.abc import Mapping
from typing import Any, Dict, Optional, Type, Union

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pydantic import BaseModel
from pymongo.errors import InvalidName, PyMongoError

from zmongo_workflow.config import WorkflowConfig
from zmongo_workflow.cursor import DocumentCursor, decode_document
from zmongo_workflow.errors import (
    DatabaseConnectionError,
    DecodeError,
    DocumentWriteError,
    NotFoundError,
    QueryError,
)
from zmongo_workflow.models import Person
from zmongo_workflow.safe_result import SafeResult

logger = logging.getLogger(__name__)

JsonDict = Dict[str, Any]
DocLike = Union[JsonDict, BaseModel]


class ZMongoWorkflowClient:
    """
    Thin async wrapper over motor for the walkthrough operations.

    Every I/O operation returns a :class:`SafeResult`; driver exceptions never
    escape. ``get_collection`` is a plain lookup and raises a typed
    :class:`WorkflowError` instead. The caller decides what a failure means.
    """

    def __init__(
        self,
        config: Optional[WorkflowConfig] = None,
        mongo_client: Optional[AsyncIOMotorClient] = None,
    ):
        self.config = config or WorkflowConfig.from_env()
        self.mongo_client = mongo_client

    async def __aenter__(self) -> "ZMongoWorkflowClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.close()

    # ---------- Connection ----------
    async def connect(self, address: Optional[str] = None) -> SafeResult:
        """
        Open a client for ``address`` (default: the configured URI) and ping it.

        Motor connects lazily, so the ping is what surfaces an unreachable or
        misconfigured server. On failure the half-open client is closed.
        """
        uri = address or self.config.mongo_uri
        try:
            client = AsyncIOMotorClient(
                uri, serverSelectionTimeoutMS=self.config.server_selection_timeout_ms
            )
        except PyMongoError as e:
            return SafeResult.fail(DatabaseConnectionError.from_exc(f"invalid address {uri!r}", e))
        try:
            await client.admin.command("ping")
        except PyMongoError as e:
            client.close()
            return SafeResult.fail(DatabaseConnectionError.from_exc(f"cannot reach {uri}", e))
        # reconnecting releases the previous pool and monitor threads
        self.close()
        self.mongo_client = client
        logger.info("Connected to MongoDB at %s", uri)
        return SafeResult.ok(self)

    def get_collection(
        self, db_name: Optional[str] = None, coll_name: Optional[str] = None
    ) -> AsyncIOMotorCollection:
        """
        Pure lookup; server-side errors on the collection surface on first use.

        Raises:
            DatabaseConnectionError: called before ``connect()``
            QueryError: the driver rejects the database or collection name
        """
        if self.mongo_client is None:
            raise DatabaseConnectionError("get_collection() called before connect()")
        db_name = db_name or self.config.database_name
        coll_name = coll_name or self.config.collection_name
        try:
            return self.mongo_client[db_name][coll_name]
        except InvalidName as e:
            raise QueryError.from_exc(f"invalid namespace {db_name}.{coll_name}", e) from e

    def close(self):
        """Closes the underlying MongoDB client connection."""
        if self.mongo_client is not None:
            self.mongo_client.close()
            self.mongo_client = None
            logger.info("MongoDB connection closed.")

    # ---------- Utility ----------
    @staticmethod
    def _doc_to_dict(doc: DocLike) -> JsonDict:
        if hasattr(doc, "to_document"):
            return doc.to_document()
        if hasattr(doc, "model_dump"):
            return doc.model_dump(by_alias=True)
        if isinstance(doc, Mapping):
            # copy: the driver writes _id into the dict it is given
            return dict(doc)
        raise TypeError(f"cannot store object of type {type(doc).__name__}")

    # ---------- CRUD ----------
    async def insert_one(self, collection: AsyncIOMotorCollection, document: DocLike) -> SafeResult:
        try:
            doc_dict = self._doc_to_dict(document)
        except TypeError as e:
            return SafeResult.fail(DocumentWriteError.from_exc("unsupported document", e))
        try:
            res = await collection.insert_one(doc_dict)
        except PyMongoError as e:
            return SafeResult.fail(DocumentWriteError.from_exc(f"insert into {collection.name} failed", e))
        logger.debug("Inserted %s into %s", res.inserted_id, collection.name)
        return SafeResult.ok(res.inserted_id)

    async def find_all(
        self, collection: AsyncIOMotorCollection, model: Optional[Type[BaseModel]] = None
    ) -> SafeResult:
        """Query every document. The data is a :class:`DocumentCursor` to use with ``async with``."""
        try:
            cursor = collection.find({})
        except PyMongoError as e:
            return SafeResult.fail(QueryError.from_exc(f"find on {collection.name} failed", e))
        return SafeResult.ok(DocumentCursor(cursor, model=model))

    @staticmethod
    async def decode_next(cursor: DocumentCursor, model: Optional[Type[BaseModel]] = None) -> SafeResult:
        return await cursor.decode_next(model)

    async def find_one(
        self,
        collection: AsyncIOMotorCollection,
        query: JsonDict,
        model: Optional[Type[BaseModel]] = Person,
    ) -> SafeResult:
        """
        Fetch the first document matching ``query`` and decode it into ``model``.

        No match is a NotFoundError failure, kept apart from QueryError so the
        caller can treat it as an ordinary outcome.
        """
        try:
            doc = await collection.find_one(query)
        except PyMongoError as e:
            return SafeResult.fail(QueryError.from_exc(f"find_one on {collection.name} failed", e))
        if doc is None:
            return SafeResult.fail(NotFoundError(f"no document in {collection.name} matches {query!r}"))
        try:
            return SafeResult.ok(decode_document(doc, model))
        except DecodeError as e:
            return SafeResult.fail(e)

    # ---------- Misc ----------
    async def count_documents(self, collection: AsyncIOMotorCollection, query: Optional[JsonDict] = None) -> SafeResult:
        try:
            count = await collection.count_documents(query or {})
        except PyMongoError as e:
            return SafeResult.fail(QueryError.from_exc(f"count on {collection.name} failed", e))
        return SafeResult.ok(count)
