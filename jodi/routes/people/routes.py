import logging
from datetime import datetime, timezone
from typing import List

from bson import ObjectId
from fastapi import APIRouter, HTTPException, Path, Depends, Request, status
from pymongo import DESCENDING, ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from jodi.config import ADMIN_MAX_PHOTOS
from jodi.db.mongo import get_people_collection
from jodi.filters.budget import budget_fields
from jodi.filters.query import UnknownFilterFieldError, translate_filters
from jodi.models.person import PersonCreate, PersonUpdate, PersonSource, REQUIRED_FIELDS, stored_field_name
from jodi.models.user import UserResponse
from jodi.routes.people.forms import read_person_form, read_person_update_form, validate_form
from jodi.routes.people.people_response_schemas import (
    PersonResponse, PeopleStats, MessageWithPerson, buckets,
)
from jodi.utils.jwt_utils import get_current_user, require_admin
from jodi.utils.uploads import save_photos, delete_photos

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/people", tags=["People"])

TRUTHY = {"true", "1", "yes", "on"}


def person_object_id(person_id: str) -> ObjectId:
    if not ObjectId.is_valid(person_id):
        raise HTTPException(status_code=400, detail="Invalid person ID format")
    return ObjectId(person_id)


def find_person_or_404(people_collection: Collection, person_id: str) -> dict:
    person = people_collection.find_one({"_id": person_object_id(person_id)})
    if not person:
        raise HTTPException(status_code=404, detail="Person not found")
    return person


def new_person_document(person, photos: List[str], source: PersonSource) -> dict:
    """Build the stored document for a freshly submitted person, deriving budgetNumeric."""
    doc = person.model_dump(by_alias=True, exclude_none=True)
    numeric, _ = budget_fields(doc.get("budget"))
    doc.update(numeric)
    now = datetime.now(timezone.utc)
    doc.update({
        "photos": photos,
        "profilePicture": photos[0] if photos else None,
        "source": source.value,
        "createdAt": now,
        "updatedAt": now,
    })
    return doc


def insert_person(people_collection: Collection, doc: dict) -> dict:
    try:
        result = people_collection.insert_one(doc)
    except PyMongoError as e:
        logger.error("❌ Error creating person: %s", e)
        delete_photos(doc.get("photos", []))
        raise HTTPException(status_code=500, detail="Failed to create person")
    return people_collection.find_one({"_id": result.inserted_id})


# --- Statistics (must be declared before /{person_id}) ---
@router.get("/stats/overview", response_model=PeopleStats)
def people_stats(
    admin: UserResponse = Depends(require_admin),
    people_collection: Collection = Depends(get_people_collection),
):
    def group_by(field: str):
        return list(people_collection.aggregate([
            {"$group": {"_id": f"${field}", "count": {"$sum": 1}}},
            {"$sort": {"count": -1}},
        ]))

    return PeopleStats(
        total=people_collection.count_documents({}),
        gender=buckets(group_by("gender")),
        religion=buckets(group_by("religion")),
        marital_status=buckets(group_by("maritalStatus")),
    )


# --- List people with optional filters ---
@router.get("/", response_model=List[PersonResponse])
def get_people(
    request: Request,
    current_user: UserResponse = Depends(get_current_user),
    people_collection: Collection = Depends(get_people_collection),
):
    try:
        query = translate_filters(request.query_params)
    except UnknownFilterFieldError as e:
        raise HTTPException(status_code=400, detail=str(e))

    people = people_collection.find(query).sort("createdAt", DESCENDING)
    return [PersonResponse.from_doc(person) for person in people]


# --- Get person by ID ---
@router.get("/{person_id}", response_model=PersonResponse)
def get_person(
    person_id: str = Path(..., description="Person ID"),
    current_user: UserResponse = Depends(get_current_user),
    people_collection: Collection = Depends(get_people_collection),
):
    return PersonResponse.from_doc(find_person_or_404(people_collection, person_id))


# --- Create person (multipart with photos) ---
@router.post("/", response_model=MessageWithPerson, status_code=status.HTTP_201_CREATED)
def create_person(
    admin: UserResponse = Depends(require_admin),
    form=Depends(read_person_form),
    people_collection: Collection = Depends(get_people_collection),
):
    fields, uploads = form
    person = validate_form(PersonCreate, fields)

    if not uploads:
        raise HTTPException(status_code=400, detail="At least one photo is required.")
    if len(uploads) > ADMIN_MAX_PHOTOS:
        raise HTTPException(status_code=400, detail=f"Too many files. Maximum is {ADMIN_MAX_PHOTOS} photos.")

    photos = save_photos(uploads)
    db_person = insert_person(people_collection, new_person_document(person, photos, PersonSource.ADMIN))

    logger.info("✅ Person created successfully: %s", db_person["name"])
    return MessageWithPerson(message="Person created successfully", person=PersonResponse.from_doc(db_person))


# --- Update person ---
@router.put("/{person_id}", response_model=MessageWithPerson)
def update_person(
    person_id: str = Path(..., description="Person ID"),
    admin: UserResponse = Depends(require_admin),
    form=Depends(read_person_update_form),
    people_collection: Collection = Depends(get_people_collection),
):
    existing = find_person_or_404(people_collection, person_id)
    fields, uploads = form
    replace_photos = fields.pop("replacePhotos", "").strip().lower() in TRUTHY

    # Blank fields clear the stored value
    cleared = {stored_field_name(key) for key, value in fields.items() if not value.strip()}
    cleared.discard(None)
    required = sorted(cleared & REQUIRED_FIELDS)
    if required:
        raise HTTPException(status_code=400, detail=f"{required[0]} cannot be cleared.")

    update = validate_form(PersonUpdate, {key: value for key, value in fields.items() if value.strip()})
    set_fields = update.model_dump(by_alias=True, exclude_unset=True)
    unset_fields = {field: "" for field in cleared if field not in set_fields}

    if "budget" in set_fields or "budget" in unset_fields:
        numeric, missing = budget_fields(set_fields.get("budget"))
        set_fields.update(numeric)
        unset_fields.update(missing)

    old_photos = existing.get("photos") or []
    new_photos = []
    if uploads:
        kept = 0 if replace_photos else len(old_photos)
        if kept + len(uploads) > ADMIN_MAX_PHOTOS:
            raise HTTPException(status_code=400, detail=f"Too many files. Maximum is {ADMIN_MAX_PHOTOS} photos.")
        new_photos = save_photos(uploads)
        set_fields["photos"] = new_photos if replace_photos else old_photos + new_photos
        if replace_photos or not existing.get("profilePicture"):
            set_fields["profilePicture"] = new_photos[0]

    if not set_fields and not unset_fields:
        raise HTTPException(status_code=400, detail="No fields to update")

    set_fields["updatedAt"] = datetime.now(timezone.utc)
    changes = {"$set": set_fields}
    if unset_fields:
        changes["$unset"] = unset_fields

    try:
        person = people_collection.find_one_and_update(
            {"_id": existing["_id"]}, changes, return_document=ReturnDocument.AFTER
        )
    except PyMongoError as e:
        logger.error("❌ Error updating person %s: %s", person_id, e)
        delete_photos(new_photos)
        raise HTTPException(status_code=500, detail="Failed to update person")
    if person is None:
        delete_photos(new_photos)
        raise HTTPException(status_code=404, detail="Person not found")

    if new_photos and replace_photos:
        delete_photos(old_photos)

    logger.info("✏️ Person updated successfully: %s", person.get("name"))
    return MessageWithPerson(message="Person updated successfully", person=PersonResponse.from_doc(person))


# --- Delete person ---
@router.delete("/{person_id}")
def delete_person(
    person_id: str = Path(..., description="Person ID"),
    admin: UserResponse = Depends(require_admin),
    people_collection: Collection = Depends(get_people_collection),
):
    person = find_person_or_404(people_collection, person_id)
    result = people_collection.delete_one({"_id": person["_id"]})
    if result.deleted_count == 0:
        raise HTTPException(status_code=404, detail="Person not found")

    delete_photos(person.get("photos") or [])
    logger.info("🗑️ Person deleted successfully: %s", person.get("name"))
    return {"message": "Person deleted successfully"}


# --- Delete a single photo ---
@router.delete("/{person_id}/photo/{filename}", response_model=MessageWithPerson)
def delete_person_photo(
    person_id: str = Path(..., description="Person ID"),
    filename: str = Path(..., description="Stored photo filename"),
    admin: UserResponse = Depends(require_admin),
    people_collection: Collection = Depends(get_people_collection),
):
    person = find_person_or_404(people_collection, person_id)
    photos = person.get("photos") or []
    if filename not in photos:
        raise HTTPException(status_code=404, detail="Photo not found")

    remaining = [photo for photo in photos if photo != filename]
    set_fields = {"photos": remaining, "updatedAt": datetime.now(timezone.utc)}
    if person.get("profilePicture") == filename:
        set_fields["profilePicture"] = remaining[0] if remaining else None

    updated = people_collection.find_one_and_update(
        {"_id": person["_id"]}, {"$set": set_fields}, return_document=ReturnDocument.AFTER
    )
    if updated is None:
        raise HTTPException(status_code=404, detail="Person not found")
    delete_photos([filename])
    return MessageWithPerson(message="Photo deleted successfully", person=PersonResponse.from_doc(updated))
