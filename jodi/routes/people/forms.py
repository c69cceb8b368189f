from typing import Dict, List, Tuple, Type, TypeVar

from fastapi import HTTPException, Request
from pydantic import BaseModel, ValidationError
from starlette.datastructures import UploadFile

ModelT = TypeVar("ModelT", bound=BaseModel)

PHOTO_FIELD = "photos"


async def _read_form(request: Request, keep_blank: bool) -> Tuple[Dict[str, str], List[UploadFile]]:
    form = await request.form()
    fields = {}
    photos = []
    for key, value in form.multi_items():
        if isinstance(value, UploadFile):
            if key == PHOTO_FIELD and value.filename:
                photos.append(value)
        elif keep_blank or value.strip():
            fields[key] = value
    return fields, photos


async def read_person_form(request: Request) -> Tuple[Dict[str, str], List[UploadFile]]:
    """Split a multipart person form into text fields and uploaded photos.

    Blank text fields are dropped so they behave like absent ones.
    """
    return await _read_form(request, keep_blank=False)


async def read_person_update_form(request: Request) -> Tuple[Dict[str, str], List[UploadFile]]:
    """Like :func:`read_person_form`, but blank fields are kept so an edit can clear them."""
    return await _read_form(request, keep_blank=True)


def validation_detail(exc: ValidationError) -> str:
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error["loc"]) or "form"
    if error["type"] == "missing":
        return f"{field} is required."
    return f"{field}: {error['msg']}"


def validate_form(model: Type[ModelT], fields: Dict[str, str]) -> ModelT:
    try:
        return model.model_validate(fields)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=validation_detail(e))
