from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict


class Person(BaseModel):
    """The structured record stored next to the schemaless one."""

    model_config = ConfigDict(extra="ignore")

    name: str
    age: int

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True)

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "Person":
        # _id and any other stored keys are dropped by extra="ignore"
        return cls.model_validate(dict(doc))
