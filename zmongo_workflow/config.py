# zmongo_workflow/config.py
import os
from dataclasses import dataclass, replace
from typing import Optional

from dotenv import load_dotenv

DEFAULT_MONGO_URI = "mongodb://localhost:27017"
DEFAULT_DATABASE_NAME = "baz"
DEFAULT_COLLECTION_NAME = "qux"
DEFAULT_SERVER_SELECTION_TIMEOUT_MS = 5000


@dataclass(frozen=True)
class WorkflowConfig:
    """Where the workflow connects and which collection it works on."""

    mongo_uri: str = DEFAULT_MONGO_URI
    database_name: str = DEFAULT_DATABASE_NAME
    collection_name: str = DEFAULT_COLLECTION_NAME
    server_selection_timeout_ms: int = DEFAULT_SERVER_SELECTION_TIMEOUT_MS

    def __post_init__(self):
        if not self.mongo_uri or not self.mongo_uri.strip():
            raise ValueError("mongo_uri must be non-empty")
        if not self.database_name or not self.database_name.strip():
            raise ValueError("database_name must be non-empty")
        if not self.collection_name or not self.collection_name.strip():
            raise ValueError("collection_name must be non-empty")
        if self.server_selection_timeout_ms <= 0:
            raise ValueError("server_selection_timeout_ms must be positive")

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "WorkflowConfig":
        """
        Build a config from a .env file and the process environment.

        Variables already set in the environment win over the .env file.
        """
        load_dotenv(dotenv_path)
        return cls(
            mongo_uri=os.getenv("MONGO_URI", DEFAULT_MONGO_URI),
            database_name=os.getenv("MONGO_DATABASE_NAME", DEFAULT_DATABASE_NAME),
            collection_name=os.getenv("MONGO_COLLECTION_NAME", DEFAULT_COLLECTION_NAME),
            server_selection_timeout_ms=int(
                os.getenv("MONGO_SERVER_SELECTION_TIMEOUT_MS", DEFAULT_SERVER_SELECTION_TIMEOUT_MS)
            ),
        )

    def with_overrides(self, **overrides) -> "WorkflowConfig":
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)
