import os
import tempfile
import unittest
from unittest import mock

from zmongo_workflow.config import WorkflowConfig


class TestWorkflowConfig(unittest.TestCase):

    @mock.patch("zmongo_workflow.config.load_dotenv")
    @mock.patch.dict(os.environ, {}, clear=True)
    def test_default_env_values_used_when_missing(self, _load_dotenv):
        config = WorkflowConfig.from_env()
        self.assertEqual(config.mongo_uri, "mongodb://localhost:27017")
        self.assertEqual(config.database_name, "baz")
        self.assertEqual(config.collection_name, "qux")
        self.assertEqual(config.server_selection_timeout_ms, 5000)

    @mock.patch("zmongo_workflow.config.load_dotenv")
    @mock.patch.dict(os.environ, {
        "MONGO_URI": "mongodb://db.internal:27018",
        "MONGO_DATABASE_NAME": "people",
        "MONGO_COLLECTION_NAME": "records",
        "MONGO_SERVER_SELECTION_TIMEOUT_MS": "750",
    }, clear=True)
    def test_env_values_are_read(self, _load_dotenv):
        config = WorkflowConfig.from_env()
        self.assertEqual(config.mongo_uri, "mongodb://db.internal:27018")
        self.assertEqual(config.database_name, "people")
        self.assertEqual(config.collection_name, "records")
        self.assertEqual(config.server_selection_timeout_ms, 750)

    @mock.patch.dict(os.environ, {}, clear=True)
    def test_dotenv_file_is_loaded(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, ".env")
            with open(path, "w") as fh:
                fh.write("MONGO_DATABASE_NAME=from_file\n")
            config = WorkflowConfig.from_env(path)
        self.assertEqual(config.database_name, "from_file")

    def test_overrides_skip_none(self):
        config = WorkflowConfig().with_overrides(mongo_uri=None, database_name="other")
        self.assertEqual(config.mongo_uri, "mongodb://localhost:27017")
        self.assertEqual(config.database_name, "other")

    def test_rejects_empty_names(self):
        with self.assertRaises(ValueError):
            WorkflowConfig(database_name="")
        with self.assertRaises(ValueError):
            WorkflowConfig(collection_name="  ")
        with self.assertRaises(ValueError):
            WorkflowConfig(server_selection_timeout_ms=0)


if __name__ == "__main__":
    unittest.main()
