import asyncio

from zmongo_workflow import Person, WorkflowConfig, ZMongoWorkflowClient


async def main():
    config = WorkflowConfig.from_env()
    async with ZMongoWorkflowClient(config) as mongo:
        (await mongo.connect()).unwrap()
        collection = mongo.get_collection()

        inserted_id = (await mongo.insert_one(collection, Person(name="Alice", age=31))).unwrap()
        print("ID", inserted_id)

        async with (await mongo.find_all(collection, model=None)).unwrap() as cursor:
            async for doc in cursor:
                print(doc)

        person = (await mongo.find_one(collection, {"name": "Alice"})).unwrap()
        print(person)
        return person


if __name__ == "__main__":
    asyncio.run(main())
