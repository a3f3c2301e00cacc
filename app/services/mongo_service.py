"""
MongoDB Service - CRUD operations for the portal collections.

Collections in this database:
1. students      - Student accounts with gamification points/badges
2. companies     - Company accounts
3. jobs          - Job postings owned by a company
4. internships   - Internship postings
5. applications  - A student applying to a job or internship

Every store wraps one pymongo Collection. Driver failures surface as
StoreError (CreationError for inserts) so callers never see PyMongoError.
"""

import logging
from contextlib import contextmanager
from enum import Enum
from typing import Optional, List, Dict, Any

import pydantic
from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError

from app.core.errors import ConflictError, CreationError, StoreError
from app.db.mongodb import get_collection, COLLECTIONS
from app.models.records import (
    ApplicationRecord, ApplicationStatus, AwardEvent, StudentRecord, utc_now
)

logger = logging.getLogger(__name__)


# ============================================================
# HELPERS: ObjectId conversion and JSON serialization
# ============================================================

def to_object_id(value: Any) -> Optional[ObjectId]:
    """Parse an id from the API. Malformed ids give None (treated as not found)."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


def serialize_doc(doc: dict) -> dict:
    """Convert MongoDB document to JSON-serializable dict (ObjectIds -> str)."""
    if doc is None:
        return None
    return {
        key: str(value) if isinstance(value, ObjectId) else value
        for key, value in doc.items()
    }


def serialize_docs(docs) -> list:
    """Convert list of MongoDB documents to JSON-serializable list."""
    return [serialize_doc(doc) for doc in docs]


def to_storable(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten Enum members (e.g. JobType) to their values before writing."""
    return {
        key: value.value if isinstance(value, Enum) else value
        for key, value in fields.items()
    }


@contextmanager
def store_errors(message: str, error_cls=StoreError):
    """Translate driver errors into portal errors."""
    try:
        yield
    except PyMongoError as e:
        logger.error("%s: %s", message, e)
        raise error_cls(message) from e


# ============================================================
# BASE STORE
# ============================================================

class MongoStore:
    """
    Generic CRUD over one collection.

    Subclasses set collection_name and entity (used in error messages).
    Pass a collection explicitly to bypass the global database.
    """

    collection_name: str = None
    entity: str = "Document"
    timestamps: bool = False

    def __init__(self, collection: Collection = None):
        if collection is None:
            collection = get_collection(COLLECTIONS[self.collection_name])
        self.collection: Collection = collection

    def insert(self, doc: dict) -> dict:
        """Insert a document and return it serialized (with its new _id)."""
        doc = to_storable(doc)
        if self.timestamps:
            now = utc_now()
            doc.setdefault("created_at", now)
            doc.setdefault("updated_at", now)
        try:
            self.collection.insert_one(doc)
        except DuplicateKeyError as e:
            raise CreationError(f"{self.entity} already exists") from e
        except PyMongoError as e:
            logger.error("Insert into %s failed: %s", self.collection_name, e)
            raise CreationError(f"Failed to create {self.entity.lower()}") from e
        return serialize_doc(doc)

    def get_by_id(self, doc_id: str) -> Optional[dict]:
        oid = to_object_id(doc_id)
        if oid is None:
            return None
        with store_errors(f"Failed to get {self.entity.lower()}"):
            doc = self.collection.find_one({"_id": oid})
        return serialize_doc(doc)

    def list(self, query: Dict[str, Any] = None) -> List[dict]:
        with store_errors(f"Failed to list {self.collection_name}"):
            return serialize_docs(self.collection.find(query or {}))

    def update(self, doc_id: str, fields: Dict[str, Any]) -> Optional[dict]:
        """$set the given fields. Returns the updated document, None if missing."""
        oid = to_object_id(doc_id)
        if oid is None:
            return None
        fields = to_storable(fields)
        if self.timestamps:
            fields["updated_at"] = utc_now()
        if not fields:
            return self.get_by_id(doc_id)
        try:
            doc = self.collection.find_one_and_update(
                {"_id": oid},
                {"$set": fields},
                return_document=ReturnDocument.AFTER
            )
        except DuplicateKeyError as e:
            raise ConflictError(f"{self.entity} with these details already exists") from e
        except PyMongoError as e:
            logger.error("Update in %s failed: %s", self.collection_name, e)
            raise StoreError(f"Failed to update {self.entity.lower()}") from e
        return serialize_doc(doc)

    def delete(self, doc_id: str) -> bool:
        oid = to_object_id(doc_id)
        if oid is None:
            return False
        with store_errors(f"Failed to delete {self.entity.lower()}"):
            doc = self.collection.find_one_and_delete({"_id": oid})
        return doc is not None


# ============================================================
# ACCOUNTS: students and companies
# ============================================================

class _AccountStore(MongoStore):
    """Accounts log in by email; the password field holds a passlib hash."""

    default_role: str = None

    def create(self, data: dict) -> dict:
        doc = dict(data)
        doc.setdefault("role", self.default_role)
        return self.insert(doc)

    def get_by_email(self, email: str) -> Optional[dict]:
        with store_errors(f"Failed to get {self.entity.lower()}"):
            doc = self.collection.find_one({"email": email})
        return serialize_doc(doc)


class StudentStore(_AccountStore):
    """
    Student accounts.

    Besides CRUD this is the StudentStore the application workflow consumes:
    find_by_id / save for the read-modify-write award, apply_award for the
    single-document variant.
    """

    collection_name = "students"
    entity = "Student"
    default_role = "Student"

    def create(self, data: dict) -> dict:
        doc = dict(data)
        doc.setdefault("points", 0)
        doc.setdefault("badges", [])
        return super().create(doc)

    def find_by_id(self, student_id: str) -> Optional[StudentRecord]:
        """Load the gamification state of a student (None if the id does not resolve)."""
        doc = self.get_by_id(student_id)
        if doc is None:
            return None
        return self._to_record(doc)

    def save(self, record: StudentRecord) -> StudentRecord:
        """Persist points/badges. Other profile fields are left untouched."""
        oid = to_object_id(record.id)
        if oid is None:
            raise StoreError(f"Invalid student id: {record.id}")
        with store_errors("Failed to save student"):
            result = self.collection.update_one(
                {"_id": oid},
                {"$set": {"points": record.points, "badges": list(record.badges)}}
            )
        if result.matched_count == 0:
            raise StoreError(f"Student {record.id} no longer exists")
        return record

    def apply_award(self, student_id: str, event: AwardEvent) -> Optional[StudentRecord]:
        """
        Award points without a read-modify-write.

        $inc makes concurrent awards sum correctly; $addToSet keeps the badge
        unique even if two requests cross the threshold together.
        """
        oid = to_object_id(student_id)
        if oid is None:
            return None
        with store_errors("Failed to award points"):
            doc = self.collection.find_one_and_update(
                {"_id": oid},
                {"$inc": {"points": event.points}},
                return_document=ReturnDocument.AFTER
            )
            if doc is None:
                return None
            if (event.badge_name
                    and doc.get("points", 0) >= event.badge_threshold
                    and event.badge_name not in doc.get("badges", [])):
                doc = self.collection.find_one_and_update(
                    {"_id": oid},
                    {"$addToSet": {"badges": event.badge_name}},
                    return_document=ReturnDocument.AFTER
                )
        if doc is None:
            return None
        return self._to_record(serialize_doc(doc))

    @staticmethod
    def _to_record(doc: dict) -> StudentRecord:
        """Corrupt points/badges in the stored document surface as StoreError."""
        try:
            return StudentRecord(
                id=doc["_id"],
                points=doc.get("points") or 0,
                badges=doc.get("badges") or []
            )
        except pydantic.ValidationError as e:
            logger.error("Unreadable student %s: %s", doc["_id"], e)
            raise StoreError(f"Unreadable student {doc['_id']}") from e


class CompanyStore(_AccountStore):
    collection_name = "companies"
    entity = "Company"
    default_role = "Company"


# ============================================================
# POSTINGS: jobs and internships
# ============================================================

class JobStore(MongoStore):
    """Job postings. company_id is stored as an ObjectId reference."""

    collection_name = "jobs"
    entity = "Job"
    timestamps = True

    def create(self, data: dict) -> dict:
        doc = dict(data)
        company_oid = to_object_id(doc.get("company_id"))
        if company_oid is None:
            raise CreationError("Failed to create job")
        doc["company_id"] = company_oid
        doc.setdefault("status", "Open")
        return self.insert(doc)

    def list_by_company(self, company_id: str) -> List[dict]:
        oid = to_object_id(company_id)
        if oid is None:
            return []
        return self.list({"company_id": oid})


class InternshipStore(MongoStore):
    collection_name = "internships"
    entity = "Internship"

    def create(self, data: dict) -> dict:
        doc = dict(data)
        doc.setdefault("type", "Internship")
        doc.setdefault("status", "Open")
        return self.insert(doc)


# ============================================================
# APPLICATIONS
# ============================================================

class ApplicationStore(MongoStore):
    """
    Applications reference a student and a job (or internship) by ObjectId.
    The same (student, job) pair may appear more than once.
    """

    collection_name = "applications"
    entity = "Application"

    def create(self, student_id: str, job_id: str) -> ApplicationRecord:
        """Insert a new "Applied" application. Unparseable references fail creation."""
        student_oid = to_object_id(student_id)
        job_oid = to_object_id(job_id)
        if student_oid is None or job_oid is None:
            raise CreationError("Failed to create application")

        doc = {
            "student_id": student_oid,
            "job_id": job_oid,
            "status": ApplicationStatus.applied.value,
            "submission_date": utc_now()
        }
        saved = self.insert(doc)
        return ApplicationRecord(
            id=saved["_id"],
            student_id=saved["student_id"],
            job_id=saved["job_id"],
            status=saved["status"],
            submission_date=saved["submission_date"]
        )

    def list_by_student(self, student_id: str) -> List[dict]:
        oid = to_object_id(student_id)
        if oid is None:
            return []
        return self.list({"student_id": oid})
