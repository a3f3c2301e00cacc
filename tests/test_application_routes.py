"""Application and internship-apply endpoints - gamification through HTTP."""

from bson import ObjectId


def _job(client, headers, **overrides):
    payload = {
        "title": "Backend Intern", "description": "Build APIs", "category": "Engineering",
        "type": "Internship", "salary": "20k",
    }
    payload.update(overrides)
    res = client.post("/jobs", json=payload, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()


def test_apply_awards_points(client, company, make_student):
    _, headers = company
    job = _job(client, headers)
    student_id = make_student(points=0)

    res = client.post("/applications", json={"student_id": student_id, "job_id": job["_id"]})

    assert res.status_code == 201
    body = res.json()
    assert body["points"] == 10
    assert body["badges"] == []
    assert body["application"]["status"] == "Applied"
    assert body["application"]["student_id"] == student_id
    assert body["application"]["job_id"] == job["_id"]
    assert "_id" in body["application"]


def test_apply_grants_badge_at_threshold(client, make_student):
    student_id = make_student(points=45)

    body = client.post(
        "/applications", json={"student_id": student_id, "job_id": str(ObjectId())}
    ).json()

    assert body["points"] == 55
    assert body["badges"] == ["Job Hunter"]
    assert client.get(f"/students/{student_id}").json()["badges"] == ["Job Hunter"]


def test_apply_missing_ids(client, fake_db):
    res = client.post("/applications", json={"student_id": str(ObjectId())})

    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"
    assert fake_db["applications"].docs == []


def test_apply_unknown_student_still_succeeds(client):
    res = client.post(
        "/applications", json={"student_id": str(ObjectId()), "job_id": str(ObjectId())}
    )
    assert res.status_code == 201
    assert (res.json()["points"], res.json()["badges"]) == (0, [])


def test_apply_with_corrupt_student_document_still_succeeds(client, fake_db):
    student_id = str(fake_db["students"].insert_one({"name": "Asha", "points": -5, "badges": []}).inserted_id)

    res = client.post("/applications", json={"student_id": student_id, "job_id": str(ObjectId())})

    assert res.status_code == 201
    assert (res.json()["points"], res.json()["badges"]) == (0, [])
    assert len(fake_db["applications"].docs) == 1


def test_apply_malformed_id_fails_creation(client):
    res = client.post("/applications", json={"student_id": "abc", "job_id": str(ObjectId())})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "CREATION_FAILED"


def test_list_applications_populates_student_and_job(client, company, make_student):
    _, headers = company
    job = _job(client, headers, title="Data Intern")
    student_id = make_student(name="Kiran")
    client.post("/applications", json={"student_id": student_id, "job_id": job["_id"]})

    (application,) = client.get("/applications").json()

    assert application["student"]["name"] == "Kiran"
    assert application["student"]["points"] == 10
    assert "password" not in application["student"]
    assert application["job"]["title"] == "Data Intern"


def test_list_application_with_deleted_student(client, make_student):
    student_id = make_student()
    client.post("/applications", json={"student_id": student_id, "job_id": str(ObjectId())})
    client.delete(f"/students/{student_id}")

    (application,) = client.get("/applications").json()

    assert application["student"] is None
    assert application["job"] is None


def test_student_dashboard(client, company, make_student):
    _, headers = company
    job = _job(client, headers)
    student_id = make_student()
    other_id = make_student()
    client.post("/applications", json={"student_id": student_id, "job_id": job["_id"]})
    client.post("/applications", json={"student_id": other_id, "job_id": job["_id"]})

    res = client.get("/applications/student", params={"student_id": student_id})

    assert res.status_code == 200
    (application,) = res.json()["applications"]
    assert application["job"]["company_name"] == "Acme"


def test_student_dashboard_requires_student_id(client):
    assert client.get("/applications/student").status_code == 400


def test_get_update_delete_application(client, make_student):
    created = client.post(
        "/applications", json={"student_id": make_student(), "job_id": str(ObjectId())}
    ).json()["application"]
    url = f"/applications/{created['_id']}"

    assert client.get(url).json()["status"] == "Applied"

    updated = client.put(url, json={"status": "Reviewed"})
    assert updated.status_code == 200
    assert updated.json()["status"] == "Reviewed"

    assert client.put(url, json={"status": "Lost"}).status_code == 400

    assert client.delete(url).status_code == 200
    assert client.get(url).status_code == 404
    assert client.delete(url).status_code == 404


def _internship(client, headers):
    res = client.post("/internships", json={
        "title": "ML Intern", "company": "Acme", "description": "Models"
    }, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()


def test_internship_apply(client, company, make_student, fake_db):
    _, headers = company
    internship = _internship(client, headers)
    student_id = make_student(points=40)

    res = client.post("/internships/apply", json={
        "student_id": student_id, "internship_id": internship["_id"]
    })

    assert res.status_code == 201
    body = res.json()
    assert body["message"] == "Internship application successful"
    assert (body["points"], body["badges"]) == (50, ["Job Hunter"])
    assert body["application"]["job_id"] == internship["_id"]

    (application,) = client.get("/applications").json()
    assert application["job"]["title"] == "ML Intern"
    assert application["job"]["company_name"] == "Acme"


def test_internship_apply_requires_both_ids(client, make_student):
    res = client.post("/internships/apply", json={"student_id": make_student()})
    assert res.status_code == 400


def test_internship_apply_unknown_internship(client, make_student, fake_db):
    res = client.post("/internships/apply", json={
        "student_id": make_student(), "internship_id": str(ObjectId())
    })
    assert res.status_code == 404
    assert fake_db["applications"].docs == []
