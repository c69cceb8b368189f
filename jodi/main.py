import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from jodi.config import CORS_ORIGINS, LOG_LEVEL
from jodi.db.mongo import check_connection, ensure_indexes
from jodi.filters.query import FilterTranslationError
from jodi.utils.uploads import upload_dir

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Jodi API",
    description="API for the Jodi matrimonial profile directory.",
    version="1.0.0",
    openapi_tags=[
        {"name": "Auth", "description": "Authentication related endpoints"},
        {"name": "Users", "description": "Admin user management"},
        {"name": "People", "description": "Profile directory and filtered search"},
        {"name": "PDF", "description": "Profile PDF export"},
        {"name": "Public Form", "description": "Unauthenticated profile submission"},
    ],
)

# ------------------ CORS ------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],  # Allows all methods
    allow_headers=["*"],  # Allows all headers
)

# ------------------ Uploaded photos ------------------
app.mount("/uploads", StaticFiles(directory=upload_dir()), name="uploads")


# ------------------ Errors ------------------
@app.exception_handler(FilterTranslationError)
async def filter_translation_error_handler(request: Request, exc: FilterTranslationError):
    logger.error("Filter translation failed for %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": f"Filter translation failed: {exc}"})


# ------------------ MongoDB Check ------------------
@app.on_event("startup")
def startup_db_check():
    if check_connection():
        ensure_indexes()
        logger.info("✅ MongoDB connected successfully")
    else:
        logger.error("❌ Failed to connect to MongoDB")


# ------------------ Routers ------------------
from jodi.routes.auth.routes import router as auth_router
from jodi.routes.users.routes import router as users_router
from jodi.routes.pdf.routes import router as pdf_router
from jodi.routes.people.routes import router as people_router
from jodi.routes.public_form.routes import router as public_form_router

# Include routers
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(pdf_router)
app.include_router(people_router)
app.include_router(public_form_router)
