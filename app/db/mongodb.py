"""
MongoDB Connection Utility

MongoDB stores every portal entity:
- students (profile + gamification points/badges)
- companies
- jobs and internships
- applications (student -> job/internship references)
"""
import logging

from pymongo import MongoClient, ASCENDING
from pymongo.database import Database
from pymongo.collection import Collection
from pymongo.errors import PyMongoError
from app.core.config import get_settings

logger = logging.getLogger(__name__)

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(get_settings().mongodb_uri)
    return _client


def get_mongo_db() -> Database:
    """Get the portal database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[get_settings().mongodb_db]
    return _db


def get_collection(name: str) -> Collection:
    """Get a specific collection. Use the COLLECTIONS names below."""
    db = get_mongo_db()
    return db[name]


def test_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        # ping command checks connection
        get_mongo_db().client.admin.command('ping')
        return True
    except PyMongoError as e:
        logger.warning("MongoDB connection failed: %s", e)
        return False


def close_mongo_client() -> None:
    global _client, _db
    if _client is not None:
        _client.close()
    _client = None
    _db = None


# Collection name constants (avoid typos)
COLLECTIONS = {
    "students": "students",
    "companies": "companies",
    "jobs": "jobs",
    "internships": "internships",
    "applications": "applications"
}


def init_mongo_indexes():
    """
    Create indexes for better query performance.
    Call this once during app startup.
    """
    db = get_mongo_db()

    # Accounts are looked up by email on login
    db[COLLECTIONS["students"]].create_index("email", unique=True)
    db[COLLECTIONS["companies"]].create_index("email", unique=True)

    # Student dashboard lists applications per student.
    # (student_id, job_id) is deliberately NOT unique - re-applying is allowed.
    db[COLLECTIONS["applications"]].create_index([
        ("student_id", ASCENDING),
        ("job_id", ASCENDING)
    ])

    db[COLLECTIONS["jobs"]].create_index("company_id")

    logger.info("MongoDB indexes created successfully")
