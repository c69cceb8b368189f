import logging
from datetime import datetime, timezone

import bcrypt
from bson import ObjectId
from fastapi import APIRouter, HTTPException, Depends, Response, status
from fastapi.security import OAuth2PasswordRequestForm
from pymongo.collection import Collection

from jodi.config import ADMIN_EMAILS
from jodi.db.mongo import get_users_collection
from jodi.models.user import UserCreate, LoginRequest, LoginResponse, UserResponse
from jodi.utils.jwt_utils import create_access_token, get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def check_password(password: str, hashed: str) -> bool:
    if not hashed:
        return False
    return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))


def user_response(user_doc: dict) -> UserResponse:
    return UserResponse(
        id=str(user_doc["_id"]),
        name=user_doc.get("name"),
        email=user_doc.get("email"),
        is_admin=user_doc.get("isAdmin", False),
    )


def _authenticate(users_collection: Collection, email: str, password: str) -> dict:
    user_data = users_collection.find_one({"email": email.lower()})
    if not user_data or not check_password(password, user_data.get("password", "")):
        logger.info("❌ Login failed for: %s", email)
        raise HTTPException(status_code=400, detail="Invalid credentials")
    return user_data


def _issue_token(user_data: dict) -> str:
    return create_access_token(
        str(user_data["_id"]),
        user_data["email"],
        name=user_data.get("name"),
        is_admin=user_data.get("isAdmin", False),
    )


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register_user(request: UserCreate, users_collection: Collection = Depends(get_users_collection)):
    email = request.email.lower()
    if users_collection.find_one({"email": email}):
        raise HTTPException(status_code=400, detail="User already exists")

    is_admin = email in ADMIN_EMAILS
    users_collection.insert_one({
        "name": request.name,
        "email": email,
        "password": hash_password(request.password),
        "isAdmin": is_admin,
        "createdAt": datetime.now(timezone.utc),
    })
    logger.info("✅ User registered successfully: %s (admin=%s)", email, is_admin)
    return {"message": "User registered successfully"}


@router.post("/login", response_model=LoginResponse)
def login_user(request: LoginRequest, response: Response, users_collection: Collection = Depends(get_users_collection)):
    if not request.email or not request.password:
        raise HTTPException(status_code=400, detail="Email and password are required")

    user_data = _authenticate(users_collection, request.email, request.password)
    token = _issue_token(user_data)

    response.set_cookie(
        key="access_token",
        value=token,
        httponly=True,
        samesite="lax",
    )
    logger.info("✅ Login successful: %s", user_data["email"])
    return LoginResponse(
        token=token,
        is_admin=user_data.get("isAdmin", False),
        user=user_response(user_data),
    )


@router.post("/token")
def login_token(form_data: OAuth2PasswordRequestForm = Depends(), users_collection: Collection = Depends(get_users_collection)):
    user_data = _authenticate(users_collection, form_data.username, form_data.password)
    return {"access_token": _issue_token(user_data), "token_type": "bearer"}


@router.post("/logout")
def logout_user(response: Response, current_user: UserResponse = Depends(get_current_user)):
    response.delete_cookie("access_token")
    return {"message": "Successfully logged out"}


@router.get("/me", response_model=UserResponse)
def get_me(current_user: UserResponse = Depends(get_current_user), users_collection: Collection = Depends(get_users_collection)):
    if not ObjectId.is_valid(current_user.id):
        raise HTTPException(status_code=401, detail="Could not validate credentials")
    user_doc = users_collection.find_one({"_id": ObjectId(current_user.id)}, {"password": 0})
    if not user_doc:
        raise HTTPException(status_code=404, detail="User not found")
    return user_response(user_doc)
