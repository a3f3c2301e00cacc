"""MongoDB stores - serialization, CRUD, error translation, atomic award."""

from datetime import datetime

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from app.core.errors import ConflictError, CreationError, StoreError
from app.db import mongodb
from app.models.records import AwardEvent, StudentRecord
from app.schemas.schemas import JobType
from app.services.mongo_service import (
    CompanyStore, InternshipStore, JobStore,
    serialize_doc, to_object_id, to_storable
)


def test_to_object_id():
    oid = ObjectId()
    assert to_object_id(oid) is oid
    assert to_object_id(str(oid)) == oid
    assert to_object_id("nope") is None
    assert to_object_id(None) is None
    assert to_object_id(12) is None


def test_serialize_doc_stringifies_object_ids():
    oid, ref = ObjectId(), ObjectId()
    doc = serialize_doc({"_id": oid, "student_id": ref, "points": 3})
    assert doc == {"_id": str(oid), "student_id": str(ref), "points": 3}
    assert serialize_doc(None) is None


def test_to_storable_flattens_enums():
    assert to_storable({"type": JobType.internship, "title": "x"}) == {
        "type": "Internship", "title": "x"
    }


def test_student_defaults(students):
    student = students.create({"name": "Ravi", "email": "ravi@example.com", "password": "h"})
    assert student["points"] == 0
    assert student["badges"] == []
    assert student["role"] == "Student"
    assert students.get_by_email("ravi@example.com")["_id"] == student["_id"]


def test_get_by_id_malformed_id_is_not_found(students):
    assert students.get_by_id("123") is None
    assert students.find_by_id("123") is None
    assert students.update("123", {"name": "x"}) is None
    assert students.delete("123") is False


def test_update_and_delete(fake_db):
    store = CompanyStore()
    company = store.create({"name": "Acme", "email": "a@example.com", "password": "h"})

    updated = store.update(company["_id"], {"industry": "Fintech"})
    assert updated["industry"] == "Fintech"
    assert updated["name"] == "Acme"

    assert store.delete(company["_id"]) is True
    assert store.get_by_id(company["_id"]) is None
    assert store.delete(company["_id"]) is False


def test_duplicate_key_becomes_creation_error(fake_db):
    fake_db["companies"].fail_on["insert_one"] = DuplicateKeyError("E11000 duplicate key")
    with pytest.raises(CreationError, match="already exists"):
        CompanyStore().create({"name": "Acme", "email": "a@example.com", "password": "h"})


def test_duplicate_key_on_update_becomes_conflict(fake_db):
    store = CompanyStore()
    company = store.create({"name": "Acme", "email": "a@example.com", "password": "h"})
    fake_db["companies"].fail_on["find_one_and_update"] = DuplicateKeyError("E11000 duplicate key")

    with pytest.raises(ConflictError, match="already exists"):
        store.update(company["_id"], {"email": "b@example.com"})


def test_driver_errors_become_store_errors(students, fake_db, store_failure):
    fake_db["students"].fail_on["find"] = store_failure
    with pytest.raises(StoreError):
        students.list()


def test_save_only_touches_gamification_fields(students, make_student):
    student_id = make_student(points=5, name="Meera")

    students.save(StudentRecord(id=student_id, points=15, badges=["Job Hunter"]))

    doc = students.get_by_id(student_id)
    assert (doc["points"], doc["badges"], doc["name"]) == (15, ["Job Hunter"], "Meera")


def test_save_missing_student_raises(students):
    with pytest.raises(StoreError):
        students.save(StudentRecord(id=str(ObjectId()), points=10))


def test_apply_award_crosses_threshold_once(students, make_student):
    student_id = make_student(points=40)
    event = AwardEvent(points=10, badge_name="Job Hunter", badge_threshold=50)

    first = students.apply_award(student_id, event)
    second = students.apply_award(student_id, event)

    assert first.points == 50 and first.badges == ["Job Hunter"]
    assert second.points == 60 and second.badges == ["Job Hunter"]


def test_apply_award_unknown_student(students):
    assert students.apply_award(str(ObjectId()), AwardEvent(points=10)) is None


def test_job_timestamps_and_company_reference(fake_db):
    store = JobStore()
    company_id = str(ObjectId())
    job = store.create({
        "title": "Backend Intern", "description": "APIs", "company_name": "Acme",
        "company_id": company_id, "category": "Engineering",
        "type": JobType.internship, "salary": "20k"
    })

    assert job["company_id"] == company_id
    assert job["status"] == "Open"
    assert job["type"] == "Internship"
    assert isinstance(job["created_at"], datetime)
    assert isinstance(fake_db["jobs"].docs[0]["company_id"], ObjectId)
    assert [j["_id"] for j in store.list_by_company(company_id)] == [job["_id"]]
    assert store.list_by_company("bad") == []


def test_job_requires_company_reference(fake_db):
    with pytest.raises(CreationError):
        JobStore().create({"title": "x", "company_id": "bad"})


def test_internship_defaults(fake_db):
    internship = InternshipStore().create({"title": "Data", "company": "Acme", "description": "ML"})
    assert internship["type"] == "Internship"
    assert internship["status"] == "Open"


def test_applications_listed_by_student(applications):
    student_id, other_id = str(ObjectId()), str(ObjectId())
    applications.create(student_id, str(ObjectId()))
    applications.create(student_id, str(ObjectId()))
    applications.create(other_id, str(ObjectId()))

    assert len(applications.list_by_student(student_id)) == 2
    assert applications.list_by_student("bad") == []


def test_indexes_created(fake_db):
    mongodb.init_mongo_indexes()

    assert ("email", {"unique": True}) in fake_db["students"].indexes
    assert ("email", {"unique": True}) in fake_db["companies"].indexes
    # re-applying must stay possible
    (keys, options), = fake_db["applications"].indexes
    assert options == {}


def test_connection_check(fake_db):
    assert mongodb.test_mongo_connection() is True
