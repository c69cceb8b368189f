import logging

from pymongo import MongoClient
from pymongo.collection import Collection

from jodi.config import MONGO_URI, MONGO_DB_NAME, MONGO_TIMEOUT_MS

logger = logging.getLogger(__name__)

# MongoClient connects lazily
client = MongoClient(MONGO_URI, serverSelectionTimeoutMS=MONGO_TIMEOUT_MS)

db = client[MONGO_DB_NAME]
people_collection = db["people"]
users_collection = db["users"]


# ----- Collection helpers -----
def get_people_collection() -> Collection:
    return people_collection


def get_users_collection() -> Collection:
    return users_collection


def ensure_indexes():
    users_collection.create_index("email", unique=True)
    people_collection.create_index("createdAt")
    people_collection.create_index("budgetNumeric")


def check_connection():
    """Check if MongoDB connection works"""
    try:
        client.admin.command("ping")
        return True
    except Exception as e:
        logger.error("❌ MongoDB connection failed: %s", e)
        return False
