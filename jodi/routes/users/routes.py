import logging
from typing import List

from bson import ObjectId
from fastapi import APIRouter, HTTPException, Path, Depends
from pymongo.collection import Collection

from jodi.db.mongo import get_users_collection
from jodi.models.user import UserResponse, UserUpdate
from jodi.routes.auth.routes import hash_password, user_response
from jodi.utils.jwt_utils import require_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["Users"])


def _object_id(user_id: str) -> ObjectId:
    if not ObjectId.is_valid(user_id):
        raise HTTPException(status_code=400, detail="Invalid user ID format")
    return ObjectId(user_id)


@router.get("/", response_model=List[UserResponse])
def get_all_users(
    admin: UserResponse = Depends(require_admin),
    users_collection: Collection = Depends(get_users_collection),
):
    users = users_collection.find({}, {"password": 0})
    return [user_response(user) for user in users]


@router.put("/{user_id}")
def update_user(
    update: UserUpdate,
    user_id: str = Path(..., description="The ID of the user to update"),
    admin: UserResponse = Depends(require_admin),
    users_collection: Collection = Depends(get_users_collection),
):
    obj_id = _object_id(user_id)

    update_fields = {}
    if update.email:
        update_fields["email"] = update.email.lower()
    if update.password:
        update_fields["password"] = hash_password(update.password)
    if not update_fields:
        raise HTTPException(status_code=400, detail="No valid fields to update")

    if "email" in update_fields and users_collection.find_one({"email": update_fields["email"], "_id": {"$ne": obj_id}}):
        raise HTTPException(status_code=400, detail="Email already in use")

    result = users_collection.update_one({"_id": obj_id}, {"$set": update_fields})
    if result.matched_count == 0:
        raise HTTPException(status_code=404, detail="User not found")
    logger.info("🔁 User %s updated by %s", user_id, admin.email)
    return {"message": "User updated successfully"}


@router.delete("/{user_id}")
def delete_user(
    user_id: str = Path(..., description="The ID of the user to delete"),
    admin: UserResponse = Depends(require_admin),
    users_collection: Collection = Depends(get_users_collection),
):
    result = users_collection.delete_one({"_id": _object_id(user_id)})
    if result.deleted_count == 0:
        raise HTTPException(status_code=404, detail="User not found")
    logger.info("❌ User %s deleted by %s", user_id, admin.email)
    return {"message": "User deleted successfully"}
