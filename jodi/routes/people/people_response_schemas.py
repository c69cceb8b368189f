from datetime import datetime
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import Dict, List, Optional

from jodi.models.person import PersonFields


class PersonResponse(PersonFields):
    id: str
    budget_numeric: Optional[float] = None
    photos: List[str] = []
    profile_picture: Optional[str] = None
    source: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_doc(cls, doc: dict) -> "PersonResponse":
        return cls.model_validate({**doc, "id": str(doc["_id"])})


class CountBucket(BaseModel):
    value: Optional[str] = None
    count: int


class PeopleStats(BaseModel):
    total: int
    gender: List[CountBucket]
    religion: List[CountBucket]
    marital_status: List[CountBucket]

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class MessageWithPerson(BaseModel):
    message: str
    person: PersonResponse


def buckets(rows: List[Dict]) -> List[CountBucket]:
    return [CountBucket(value=row["_id"], count=row["count"]) for row in rows]
