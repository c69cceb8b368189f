import logging

from fastapi import APIRouter, HTTPException, Depends, status
from pymongo.collection import Collection

from jodi.config import MAX_PHOTOS, PUBLIC_MIN_PHOTOS
from jodi.db.mongo import get_people_collection
from jodi.models.person import PublicSubmission, PersonSource
from jodi.routes.people.forms import read_person_form, validate_form
from jodi.routes.people.people_response_schemas import PersonResponse, MessageWithPerson
from jodi.routes.people.routes import new_person_document, insert_person
from jodi.utils.uploads import save_photos

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Public Form"])


# Public POST (no login required)
@router.post("/public-form", response_model=MessageWithPerson, status_code=status.HTTP_201_CREATED)
def submit_public_form(
    form=Depends(read_person_form),
    people_collection: Collection = Depends(get_people_collection),
):
    fields, uploads = form
    logger.info("📤 Public form submission with fields: %s, photos: %d", sorted(fields), len(uploads))

    submission = validate_form(PublicSubmission, fields)

    if len(uploads) < PUBLIC_MIN_PHOTOS:
        raise HTTPException(
            status_code=400,
            detail=f"Please upload at least {PUBLIC_MIN_PHOTOS} photos. Received: {len(uploads)}",
        )
    if len(uploads) > MAX_PHOTOS:
        raise HTTPException(status_code=400, detail=f"Maximum {MAX_PHOTOS} photos allowed")

    photos = save_photos(uploads)
    db_person = insert_person(people_collection, new_person_document(submission, photos, PersonSource.PUBLIC))

    logger.info("✅ Public submission stored: %s", db_person["_id"])
    return MessageWithPerson(message="Person added successfully (public)", person=PersonResponse.from_doc(db_person))
