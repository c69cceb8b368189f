import json
from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import List, Optional
from enum import Enum


class PersonSource(str, Enum):
    ADMIN = "admin"
    PUBLIC = "public"


class Sibling(BaseModel):
    name: Optional[str] = None
    relation: Optional[str] = None
    age: Optional[str] = None
    profession: Optional[str] = None
    marital_status: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


def _parse_siblings(value):
    # multipart forms send siblings as a JSON string
    if isinstance(value, str):
        if not value.strip():
            return []
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            raise ValueError("Invalid siblings format")
    return value


# --- Fields shared by every person schema (all optional) ---
class PersonFields(BaseModel):
    # Personal details
    name: Optional[str] = None
    age: Optional[str] = None
    gender: Optional[str] = None
    marital_status: Optional[str] = None
    religion: Optional[str] = None
    caste: Optional[str] = None
    gotra: Optional[str] = None
    dob: Optional[str] = None
    birth_place_time: Optional[str] = None
    native_place: Optional[str] = None
    height: Optional[str] = None
    complexion: Optional[str] = None
    area: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    phone_number: Optional[str] = None
    horoscope: Optional[bool] = None
    eating_habits: Optional[str] = None
    drinking_habits: Optional[str] = None
    smoking_habits: Optional[str] = None
    disability: Optional[str] = None
    nri: Optional[bool] = None
    vehicle: Optional[bool] = None

    # Family details
    father_name: Optional[str] = None
    father_occupation: Optional[str] = None
    father_office: Optional[str] = None
    mother_name: Optional[str] = None
    mother_occupation: Optional[str] = None
    residence: Optional[str] = None
    other_property: Optional[str] = None
    siblings: Optional[List[Sibling]] = None

    # Education, profession & income
    education: Optional[str] = None
    higher_qualification: Optional[str] = None
    graduation: Optional[str] = None
    schooling: Optional[str] = None
    occupation: Optional[str] = None
    personal_income: Optional[str] = None
    family_income: Optional[str] = None
    income: Optional[str] = None
    budget: Optional[str] = Field(None, description="Display budget, e.g. '₹5,00,000'")

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        str_strip_whitespace = True

    @field_validator("siblings", mode="before")
    @classmethod
    def siblings_from_json(cls, value):
        return _parse_siblings(value)


# --- Schema for creating a person (admin) ---
class PersonCreate(PersonFields):
    name: str = Field(..., min_length=1)
    gender: str = Field(..., min_length=1)
    marital_status: str = Field(..., min_length=1)
    religion: str = Field(..., min_length=1)
    phone_number: str = Field(..., min_length=1)


# --- Schema for updating a person (every field optional) ---
class PersonUpdate(PersonFields):
    """Only the fields actually sent are applied (``exclude_unset``)."""
    pass


def stored_field_name(key: str) -> Optional[str]:
    """Map a form key (camelCase or snake_case) to its stored camelCase name."""
    for name, field in PersonFields.model_fields.items():
        if key in (name, field.alias):
            return field.alias or name
    return None


# Stored names of fields an admin-created person must always have
REQUIRED_FIELDS = frozenset(
    field.alias or name for name, field in PersonCreate.model_fields.items() if field.is_required()
)


# --- Schema for the public submission form ---
class PublicSubmission(PersonFields):
    name: str = Field(..., min_length=1)
    religion: str = Field(..., min_length=1)
    phone_number: str = Field(..., pattern=r"^\d{1,10}$")


class BulkPdfRequest(BaseModel):
    person_ids: List[str] = Field(default_factory=list)
    selected_fields: Optional[List[str]] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
