from __future__ import annotations

import io

PRINCIPAL = ("principal@school.test", "Principal123")
CSE = ("asha@school.test", "staff-pass")
ECE = ("ravi@school.test", "staff-pass")

STUDENTS = [{"roll": "1", "name": "Ann"}, {"roll": "2", "name": "Bob"}]


def _seed_roster(client, headers, class_code="CSE-A"):
    resp = client.post("/staff/class-students", json={"classCode": class_code, "students": STUDENTS}, headers=headers)
    assert resp.status_code == 200
    return resp.get_json()


def test_index(client):
    assert client.get("/").status_code == 200


def test_login_returns_token_and_profile(client):
    resp = client.post("/auth/login", json={"email": CSE[0], "password": CSE[1]})
    body = resp.get_json()

    assert resp.status_code == 200
    assert body["token"]
    assert body["staff"] == {"id": 2, "name": "Asha", "email": CSE[0], "role": "staff", "dept": "CSE"}


def test_login_bad_password(client):
    resp = client.post("/auth/login", json={"email": CSE[0], "password": "wrong"})
    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "error": "unauthenticated", "message": "Invalid credentials"}


def test_missing_token(client):
    resp = client.get("/staff/classes")
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "unauthenticated"


def test_garbage_token(client):
    resp = client.get("/staff/classes", headers={"Authorization": "Bearer not.a.jwt"})
    assert resp.status_code == 401


def test_token_of_deleted_user_is_rejected(client, login):
    staff = login(*CSE)
    admin = login(*PRINCIPAL)
    assert client.delete("/admin/staff/2", headers=admin).get_json() == {"ok": True}

    resp = client.get("/staff/classes", headers=staff)
    assert resp.status_code == 401


def test_create_and_list_staff(client, login):
    admin = login(*PRINCIPAL)
    resp = client.post(
        "/admin/create-staff",
        json={"name": "Meena", "email": "meena@school.test", "password": "secret1", "dept": "MECH"},
        headers=admin,
    )
    assert resp.status_code == 200
    assert resp.get_json()["dept"] == "MECH"

    emails = [s["email"] for s in client.get("/admin/staff", headers=admin).get_json()]
    assert "meena@school.test" in emails

    dup = client.post(
        "/admin/create-staff",
        json={"name": "Meena", "email": "meena@school.test", "password": "secret1", "dept": "MECH"},
        headers=admin,
    )
    assert dup.status_code == 400
    assert dup.get_json()["error"] == "email-exists"


def test_staff_cannot_use_admin_routes(client, login):
    resp = client.get("/admin/staff", headers=login(*CSE))
    assert resp.status_code == 403
    assert resp.get_json()["error"] == "principal-only"


def test_principal_cannot_use_staff_routes(client, login):
    resp = client.get("/staff/attendance?classCode=CSE-A&date=2025-01-01", headers=login(*PRINCIPAL))
    assert resp.status_code == 403
    assert resp.get_json()["error"] == "staff-only"


def test_roster_round_trip(client, login):
    staff = login(*CSE)
    roster = _seed_roster(client, staff)
    assert roster["dept"] == "CSE"
    assert roster["classCode"] == "CSE-A"

    students = client.get("/staff/class-students?classCode=CSE-A", headers=staff).get_json()
    assert students == {"students": STUDENTS}

    classes = client.get("/staff/classes", headers=staff).get_json()
    assert [c["classCode"] for c in classes] == ["CSE-A"]

    other = client.get("/staff/classes", headers=login(*ECE)).get_json()
    assert other == []


def test_attendance_default_then_save_then_summary(client, login):
    staff = login(*CSE)
    admin = login(*PRINCIPAL)
    _seed_roster(client, staff)

    default = client.get("/staff/attendance?classCode=CSE-A&date=2025-01-01", headers=staff).get_json()
    assert default["saved"] is False
    assert {r["status"] for r in default["records"]} == {"present"}

    missing = client.get("/admin/attendance-summary?dept=CSE&classCode=CSE-A&date=2025-01-01", headers=admin)
    assert missing.status_code == 404
    assert missing.get_json()["error"] == "attendance-not-found"

    saved = client.post(
        "/staff/attendance",
        json={
            "classCode": "CSE-A",
            "date": "2025-01-01",
            "records": [
                {"roll": "1", "name": "Ann", "status": "present"},
                {"roll": "2", "name": "Bob", "status": "absent"},
            ],
        },
        headers=staff,
    )
    assert saved.status_code == 200
    assert saved.get_json()["saved"] is True

    summary = client.get("/admin/attendance-summary?dept=CSE&classCode=CSE-A&date=2025-01-01", headers=admin).get_json()
    assert summary == {
        "dept": "CSE",
        "classCode": "CSE-A",
        "date": "2025-01-01",
        "total": 2,
        "presentCount": 1,
        "absentCount": 1,
        "presentPercent": 50,
        "absentPercent": 50,
    }

    by_dept = client.get("/admin/attendance-summary-by-dept?dept=CSE&date=2025-01-01", headers=admin).get_json()
    assert by_dept["classes"][0]["classCode"] == "CSE-A"

    record = client.get("/admin/attendance?dept=CSE&classCode=CSE-A&date=2025-01-01", headers=admin).get_json()
    assert [r["status"] for r in record["records"]] == ["present", "absent"]

    depts = client.get("/admin/departments", headers=admin).get_json()
    assert depts == {"departments": ["CSE"]}


def test_past_date_is_locked(client, login):
    staff = login(*CSE)
    _seed_roster(client, staff)

    resp = client.post(
        "/staff/attendance",
        json={"classCode": "CSE-A", "date": "2024-12-31", "records": []},
        headers=staff,
    )
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "past-date-locked"


def test_bad_date_and_missing_records(client, login):
    staff = login(*CSE)
    _seed_roster(client, staff)

    bad_date = client.get("/staff/attendance?classCode=CSE-A&date=2025-1-1", headers=staff)
    assert bad_date.status_code == 400
    assert bad_date.get_json()["error"] == "invalid-date"

    no_records = client.post("/staff/attendance", json={"classCode": "CSE-A", "date": "2025-01-01"}, headers=staff)
    assert no_records.status_code == 400
    assert no_records.get_json()["error"] == "missing-field"


def test_unknown_class_attendance_is_404(client, login):
    resp = client.get("/staff/attendance?classCode=NOPE&date=2025-01-01", headers=login(*CSE))
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "roster-not-found"


def test_news_flow(client, login, container):
    staff = login(*CSE)
    admin = login(*PRINCIPAL)

    created = client.post(
        "/staff/news",
        data={"title": "Lab", "content": "Closed", "image": (io.BytesIO(b"img"), "lab.png")},
        content_type="multipart/form-data",
        headers=staff,
    )
    assert created.status_code == 200
    post = created.get_json()
    assert post["dept"] == "CSE"
    assert post["imageUrl"] == "/uploads/test-lab.png"

    client.post("/staff/news", json={"title": "Holiday", "content": "Monday"}, headers=admin)

    public = client.get("/public/news").get_json()
    assert [p["title"] for p in public] == ["Holiday", "Lab"]
    assert [p["title"] for p in client.get("/staff/my-news", headers=staff).get_json()] == ["Lab"]

    denied = client.delete(f"/staff/news/{post['id']}", headers=login(*ECE))
    assert denied.status_code == 403

    assert client.delete(f"/staff/news/{post['id']}", headers=staff).get_json() == {"ok": True}
    assert container.news_repo.get_by_id(post["id"]) is None


def test_non_object_json_body_is_invalid_input(client, login):
    staff = login(*CSE)
    _seed_roster(client, staff)

    for path in ("/staff/attendance", "/staff/class-students"):
        resp = client.post(path, json=[{"roll": "1"}], headers=staff)
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "invalid-input"

    login_resp = client.post("/auth/login", json=["asha@school.test", "staff-pass"])
    assert login_resp.status_code == 400

    created = client.post("/admin/create-staff", json="Meena", headers=login(*PRINCIPAL))
    assert created.status_code == 400


def test_non_string_status_is_rejected(client, login):
    staff = login(*CSE)
    _seed_roster(client, staff)

    resp = client.post(
        "/staff/attendance",
        json={"classCode": "CSE-A", "date": "2025-01-01", "records": [{"roll": "1", "status": 1}]},
        headers=staff,
    )
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "invalid-status"


def test_storage_failure_is_a_server_error(client, login, container, monkeypatch):
    staff = login(*CSE)
    admin = login(*PRINCIPAL)
    _seed_roster(client, staff)

    def unavailable(**kwargs):
        raise ConnectionError("database unavailable")

    monkeypatch.setattr(container.attendance_repo, "get", unavailable)
    monkeypatch.setattr(container.attendance_repo, "list_for_department_and_date", unavailable)

    urls = [
        ("/staff/attendance?classCode=CSE-A&date=2025-01-01", staff),
        ("/admin/attendance?dept=CSE&classCode=CSE-A&date=2025-01-01", admin),
        ("/admin/attendance-summary?dept=CSE&classCode=CSE-A&date=2025-01-01", admin),
        ("/admin/attendance-summary-by-dept?dept=CSE&date=2025-01-01", admin),
    ]
    for url, headers in urls:
        resp = client.get(url, headers=headers)
        assert resp.status_code == 500, url
        assert resp.get_json() == {"success": False, "error": "server-error", "message": "Server error"}


def test_class_roster_route(client, login):
    staff = login(*CSE)
    _seed_roster(client, staff)

    roster = client.get("/staff/classes/CSE-A", headers=staff)
    assert roster.status_code == 200
    assert roster.get_json()["students"] == STUDENTS

    missing = client.get("/staff/classes/CSE-Z", headers=staff)
    assert missing.status_code == 404
    assert missing.get_json()["error"] == "roster-not-found"

    other = client.get("/staff/classes/CSE-A", headers=login(*ECE))
    assert other.status_code == 404
