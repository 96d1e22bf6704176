# zmongo_workflow/runner.py
"""
Workflow Runner
===============

Runs the walkthrough against one collection, one step at a time:

1. connect to the configured address
2. select the database and collection
3. insert the schemaless ``{"hello": "world"}`` record
4. insert ``Person(name="Tim", age=25)``
5. print every document in the collection
6. look up ``{"name": "Tim"}`` and decode it back into a ``Person``

The first failing step stops the run. Its error is logged and ``run()``
returns a non-zero exit code.
"""
import argparse
import asyncio
import logging
from typing import Any, List, Optional

from zmongo_workflow.client import ZMongoWorkflowClient
from zmongo_workflow.config import WorkflowConfig
from zmongo_workflow.errors import WorkflowError
from zmongo_workflow.models import Person
from zmongo_workflow.safe_result import SafeResult

logger = logging.getLogger(__name__)

SAMPLE_DOCUMENT = {"hello": "world"}
SAMPLE_PERSON = Person(name="Tim", age=25)


class WorkflowRunner:
    def __init__(self, config: WorkflowConfig, client: Optional[ZMongoWorkflowClient] = None):
        self.config = config
        self.client = client or ZMongoWorkflowClient(config)
        self.inserted_ids: List[Any] = []
        self.documents: List[dict] = []
        self.person: Optional[Person] = None

    async def run(self) -> int:
        """Run every step and return the process exit code."""
        async with self.client:
            result = await self.run_steps()
        if not result.success:
            logger.error("Workflow stopped on %s error: %s", result.exc.kind, result.error)
            return 1
        return 0

    async def run_steps(self) -> SafeResult:
        """Run the six steps, returning the first failure or the final lookup."""
        connected = await self.client.connect(self.config.mongo_uri)
        if not connected:
            return connected
        print("Connected to MongoDB!")

        try:
            collection = self.client.get_collection(self.config.database_name, self.config.collection_name)
        except WorkflowError as e:
            return SafeResult.fail(e)

        for record in (SAMPLE_DOCUMENT, SAMPLE_PERSON):
            if isinstance(record, Person):
                print(repr(record))
            inserted = await self.client.insert_one(collection, record)
            if not inserted:
                return inserted
            self.inserted_ids.append(inserted.data)
            print("ID", inserted.data)

        found = await self.client.find_all(collection)
        if not found:
            return found
        try:
            async with found.data as cursor:
                while True:
                    step = await self.client.decode_next(cursor)
                    if not step:
                        return step
                    if step.data is None:
                        break
                    self.documents.append(step.data)
                    print(step.data)
        except WorkflowError as e:
            # releasing the cursor on the way out failed
            return SafeResult.fail(e)
        logger.info("Read %d documents from %s.%s", len(self.documents),
                    self.config.database_name, self.config.collection_name)

        result = await self.client.find_one(collection, {"name": SAMPLE_PERSON.name}, model=Person)
        if not result:
            return result
        self.person = result.data
        print("Result")
        print(repr(result.data))
        return result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zmongo-workflow",
        description="Insert two records into MongoDB, list the collection and look one up.",
    )
    parser.add_argument("--uri", metavar="MONGO_URI", help="Connection string (default: $MONGO_URI)")
    parser.add_argument("--database", metavar="NAME", help="Database name (default: $MONGO_DATABASE_NAME)")
    parser.add_argument("--collection", metavar="NAME", help="Collection name (default: $MONGO_COLLECTION_NAME)")
    parser.add_argument("--timeout-ms", type=int, metavar="MS",
                        help="Server selection timeout in milliseconds")
    parser.add_argument("--env-file", metavar="PATH", help="Optional .env file to load")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = WorkflowConfig.from_env(args.env_file).with_overrides(
            mongo_uri=args.uri,
            database_name=args.database,
            collection_name=args.collection,
            server_selection_timeout_ms=args.timeout_ms,
        )
    except ValueError as e:
        parser.error(str(e))

    return asyncio.run(WorkflowRunner(config).run())
