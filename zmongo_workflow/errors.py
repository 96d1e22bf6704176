"""
Error taxonomy for the workflow operations.

Every failure surfaced by :mod:`zmongo_workflow.client` is one of these. The
driver exception that caused it is chained as ``__cause__``.
"""


class WorkflowError(Exception):
    """Base class for every workflow failure."""

    kind = "workflow"

    @classmethod
    def from_exc(cls, message: str, exc: BaseException) -> "WorkflowError":
        """Build an error of this type with ``exc`` chained as its cause."""
        err = cls(f"{message}: {exc}")
        err.__cause__ = exc
        return err


class DatabaseConnectionError(WorkflowError):
    """The database could not be reached or rejected the connection."""

    kind = "connection"


class DocumentWriteError(WorkflowError):
    """An insert was rejected."""

    kind = "write"


class QueryError(WorkflowError):
    """A query or cursor advance failed on the server or in the driver."""

    kind = "query"


class DecodeError(WorkflowError):
    """A returned document does not fit the expected shape."""

    kind = "decode"


class NotFoundError(WorkflowError):
    """A single-result lookup matched no document."""

    kind = "not_found"
