import unittest

from bson.objectid import ObjectId

from zmongo_workflow import NotFoundError, Person, QueryError, SafeResult


class TestSafeResult(unittest.TestCase):
    def test_ok_is_truthy_and_unwraps(self):
        result = SafeResult.ok({"x": 1})
        self.assertTrue(result)
        self.assertIsNone(result.error)
        self.assertEqual(result.unwrap(), {"x": 1})

    def test_fail_carries_typed_error(self):
        err = NotFoundError("nothing here")
        result = SafeResult.fail(err)
        self.assertFalse(result)
        self.assertEqual(result.error, "nothing here")
        self.assertTrue(result.is_error(NotFoundError))
        self.assertFalse(result.is_error(QueryError))
        with self.assertRaises(NotFoundError):
            result.unwrap()

    def test_unwrap_quiet_returns_none(self):
        result = SafeResult.fail(QueryError("boom"))
        with self.assertLogs("zmongo_workflow.safe_result", level="INFO"):
            self.assertIsNone(result.unwrap(quiet=True))

    def test_model_dump_is_json_friendly(self):
        oid = ObjectId("5f50c31e7b1e8a9459b8b73a")
        dump = SafeResult.ok({"_id": oid, "items": [oid]}).model_dump()
        self.assertEqual(dump["data"], {"_id": str(oid), "items": [str(oid)]})
        self.assertTrue(dump["success"])

        dump = SafeResult.ok(Person(name="Tim", age=25)).model_dump()
        self.assertEqual(dump["data"], {"name": "Tim", "age": 25})


if __name__ == "__main__":
    unittest.main()
