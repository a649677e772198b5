from bson import ObjectId
from fastapi.testclient import TestClient

API = "/api"


def _create(client, name="Alice", email="A@X.com", age=20):
    return client.post(f"{API}/students", json={"name": name, "email": email, "age": age})


def test_index_and_health(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert 'const API = "/api"' in resp.text

    assert client.get("/health").json() == {"status": "ok"}


def test_create_student(client):
    resp = _create(client)
    assert resp.status_code == 201
    body = resp.json()
    assert body["email"] == "a@x.com"
    assert body["name"] == "Alice"
    assert ObjectId.is_valid(body["_id"])


def test_create_student_validation_error(client):
    resp = client.post(f"{API}/students", json={"name": "", "email": "nope", "age": "x"})
    assert resp.status_code == 400
    body = resp.json()
    assert body["error"] == "Validation failed"
    assert {d["path"] for d in body["details"]} == {"name", "email", "age"}


def test_create_student_duplicate_email(client):
    assert _create(client, email="dup@example.com").status_code == 201
    resp = _create(client, name="Bob", email=" DUP@example.com ")
    assert resp.status_code == 409
    assert resp.json() == {"error": "Email already exists"}


def test_list_students_pagination(client):
    for i in range(15):
        _create(client, name=f"S{i}", email=f"s{i}@example.com")

    body = client.get(f"{API}/students", params={"page": 2, "limit": 10}).json()
    assert len(body["data"]) == 5
    assert (body["page"], body["limit"], body["total"]) == (2, 10, 15)

    body = client.get(f"{API}/students", params={"page": "0", "limit": "abc"}).json()
    assert (body["page"], body["limit"]) == (1, 10)
    assert len(body["data"]) == 10

    body = client.get(f"{API}/students").json()
    assert (body["page"], body["limit"]) == (1, 10)


def test_get_student(client):
    sid = _create(client).json()["_id"]

    resp = client.get(f"{API}/students/{sid}")
    assert resp.status_code == 200
    assert resp.json()["student"]["_id"] == sid
    assert resp.json()["marks"] == []

    resp = client.get(f"{API}/students/not-an-id")
    assert resp.status_code == 400
    assert resp.json() == {"error": "Validation failed", "details": [{"path": "id", "message": "Invalid ObjectId"}]}
    assert client.get(f"{API}/students/{ObjectId()}").status_code == 404


def test_update_student(client):
    sid = _create(client).json()["_id"]
    _create(client, name="Bob", email="bob@example.com")

    resp = client.put(f"{API}/students/{sid}", json={"name": " Alicia ", "age": 21})
    assert resp.status_code == 200
    assert resp.json()["name"] == "Alicia"
    assert resp.json()["age"] == 21
    assert resp.json()["email"] == "a@x.com"

    assert client.put(f"{API}/students/{sid}", json={"email": "BOB@example.com"}).status_code == 409
    assert client.put(f"{API}/students/{sid}", json={"age": -2}).status_code == 400
    assert client.put(f"{API}/students/bad", json={"age": 2}).status_code == 400
    assert client.put(f"{API}/students/{ObjectId()}", json={"age": 2}).status_code == 404


def test_delete_student(client):
    sid = _create(client).json()["_id"]
    client.post(f"{API}/marks", json={"studentId": sid, "subject": "Math", "marks": 90})

    resp = client.delete(f"{API}/students/{sid}")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Student and marks deleted"}

    assert client.delete(f"{API}/students/{sid}").status_code == 404
    resp = client.delete(f"{API}/students/bad")
    assert resp.status_code == 400
    assert resp.json()["details"] == [{"path": "id", "message": "Invalid ObjectId"}]


def test_add_mark(client):
    sid = _create(client).json()["_id"]

    resp = client.post(f"{API}/marks", json={"studentId": sid, "subject": " Math ", "marks": 90})
    assert resp.status_code == 201
    body = resp.json()
    assert body["studentId"] == sid
    assert body["subjects"] == [{"subject": "Math", "marks": 90}]

    resp = client.post(f"{API}/marks", json={"studentId": str(ObjectId()), "subject": "Math", "marks": 1})
    assert resp.status_code == 404
    assert resp.json() == {"error": "Student not found"}

    resp = client.post(f"{API}/marks", json={"studentId": "bad", "subject": "Math", "marks": 1})
    assert resp.status_code == 400
    assert resp.json()["details"][0]["path"] == "studentId"


def test_get_marks_by_student(client):
    sid = _create(client).json()["_id"]
    assert client.get(f"{API}/marks/student/{sid}").json() == []

    resp = client.get(f"{API}/marks/student/bad")
    assert resp.status_code == 400
    assert resp.json() == {
        "error": "Validation failed",
        "details": [{"path": "studentId", "message": "Invalid ObjectId"}],
    }


def test_delete_subject(client):
    sid = _create(client).json()["_id"]
    url = f"{API}/marks/student/{sid}/subject"

    resp = client.request("DELETE", url, json={"subject": "Math"})
    assert resp.status_code == 404
    assert resp.json() == {"error": "Marks document not found"}

    client.post(f"{API}/marks", json={"studentId": sid, "subject": "Science", "marks": 85})
    resp = client.request("DELETE", url, json={"subject": "Math"})
    assert resp.status_code == 404
    assert resp.json() == {"error": "Subject not found"}

    assert client.request("DELETE", url, json={}).status_code == 400
    resp = client.request("DELETE", f"{API}/marks/student/bad/subject", json={"subject": "Math"})
    assert resp.status_code == 400
    assert resp.json()["details"] == [{"path": "studentId", "message": "Invalid ObjectId"}]


def test_end_to_end(client):
    resp = _create(client, name="Alice", email="A@X.com", age=20)
    sid = resp.json()["_id"]
    assert resp.json()["email"] == "a@x.com"

    client.post(f"{API}/marks", json={"studentId": sid, "subject": "Math", "marks": 90})
    client.post(f"{API}/marks", json={"studentId": sid, "subject": "Science", "marks": 85})
    assert client.get(f"{API}/marks/student/{sid}").json() == [
        {"subject": "Math", "marks": 90},
        {"subject": "Science", "marks": 85},
    ]

    resp = client.request("DELETE", f"{API}/marks/student/{sid}/subject", json={"subject": "math"})
    assert resp.status_code == 200
    assert resp.json() == {"message": "Subject deleted", "subjects": [{"subject": "Science", "marks": 85}]}

    assert client.delete(f"{API}/students/{sid}").status_code == 200
    assert client.get(f"{API}/students/{sid}").status_code == 404
    assert client.get(f"{API}/marks/student/{sid}").json() == []


def test_unhandled_error_becomes_500(app, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("storage exploded")

    monkeypatch.setattr("app.services.students.list_students", boom)
    with TestClient(app, raise_server_exceptions=False) as c:
        resp = c.get(f"{API}/students")
    assert resp.status_code == 500
    assert resp.json() == {"error": "storage exploded"}


def test_email_display_name_rejected_and_local_domain_accepted(client):
    resp = _create(client, email="Alice <a@x.com>")
    assert resp.status_code == 400
    assert resp.json()["details"][0]["path"] == "email"

    resp = _create(client, email=" Kid@School.local ")
    assert resp.status_code == 201
    assert resp.json()["email"] == "kid@school.local"


def test_huge_page_is_clamped(client):
    _create(client)
    body = client.get(f"{API}/students", params={"page": "99999999999999999999"}).json()
    assert body["page"] == 2**63 - 1
    assert body["data"] == []
    assert body["total"] == 1


def test_unknown_route_and_method_use_error_body(client):
    resp = client.get(f"{API}/nowhere")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Not Found"}

    resp = client.patch(f"{API}/students")
    assert resp.status_code == 405
    assert resp.json() == {"error": "Method Not Allowed"}
