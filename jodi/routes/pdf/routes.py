import logging
from datetime import datetime
from typing import Optional

from bson import ObjectId
from fastapi import APIRouter, HTTPException, Path, Depends, Query, Response
from pymongo.collection import Collection

from jodi.db.mongo import get_people_collection
from jodi.models.person import BulkPdfRequest
from jodi.models.user import UserResponse
from jodi.routes.people.routes import find_person_or_404
from jodi.utils.jwt_utils import get_current_user
from jodi.utils.pdf import render_person_pdf, render_bulk_pdf, pdf_filename

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/people", tags=["PDF"])


def pdf_response(content: bytes, filename: str) -> Response:
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/{person_id}/pdf")
def person_pdf(
    person_id: str = Path(..., description="Person ID"),
    fields: Optional[str] = Query(None, description="Comma separated field names to include"),
    current_user: UserResponse = Depends(get_current_user),
    people_collection: Collection = Depends(get_people_collection),
):
    person = find_person_or_404(people_collection, person_id)
    selected = [field.strip() for field in fields.split(",") if field.strip()] if fields else None
    logger.info("📄 Generating PDF for person %s with fields: %s", person_id, selected or "all")
    return pdf_response(render_person_pdf(person, selected), pdf_filename(person.get("name")))


@router.post("/pdf/bulk")
def bulk_pdf(
    request: BulkPdfRequest,
    current_user: UserResponse = Depends(get_current_user),
    people_collection: Collection = Depends(get_people_collection),
):
    if not request.person_ids:
        raise HTTPException(status_code=400, detail="Person IDs array is required")

    ids = [ObjectId(person_id) for person_id in request.person_ids if ObjectId.is_valid(person_id)]
    people = list(people_collection.find({"_id": {"$in": ids}})) if ids else []
    if not people:
        raise HTTPException(status_code=404, detail="No people found")

    # keep the order the caller asked for
    order = {person_id: index for index, person_id in enumerate(ids)}
    people.sort(key=lambda person: order[person["_id"]])

    logger.info("📄 Generating bulk PDF for %d people", len(people))
    filename = f"bulk_profiles_{datetime.now().strftime('%Y%m%d%H%M%S')}.pdf"
    return pdf_response(render_bulk_pdf(people, request.selected_fields), filename)
