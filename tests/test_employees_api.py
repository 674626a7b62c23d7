import io
import os
from datetime import date

import pytest
from fastapi import UploadFile
from app.core.config import settings
from app.models.employee import Employee
from app.models.leave_request import LeaveRequest
from app.models.salary import Salary
from app.models.user import User
from app.schemas.employee import EmployeeUpdate
from app.services import employee_service


def _form(**overrides):
    data = {
        "name": "Sam Carter",
        "email": "sam@example.com",
        "password": "Secret123",
        "employee_code": "EMP-100",
        "doj": "2024-02-01",
        "gender": "male",
        "salary": "42000",
        "account_number": "123456789012",
    }
    data.update(overrides)
    return data


def _png(name="avatar.png"):
    return {"image": (name, b"\x89PNG\r\n\x1a\nfake", "image/png")}


def test_admin_creates_employee_with_image(client, admin_user, auth_headers, db_session):
    response = client.post("/api/employees", headers=auth_headers(admin_user), data=_form(), files=_png())
    assert response.status_code == 200
    data = response.json()
    assert data["employee_code"] == "EMP-100"
    assert data["user"]["email"] == "sam@example.com"
    assert data["user"]["role"] == "employee"
    assert data["doj"] == "2024-02-01"
    assert data["account_number"] == "********9012"

    filename = data["user"]["profile_image"]
    assert filename.endswith(".png")
    assert os.path.exists(os.path.join(settings.upload_dir, filename))

    # Banking details are not stored in clear text
    stored = db_session.query(Employee).filter(Employee.employee_code == "EMP-100").one()
    assert stored.account_number != "123456789012"

    # The new employee can log in
    login = client.post("/api/auth/login", json={"email": "sam@example.com", "password": "Secret123"})
    assert login.status_code == 200


def test_duplicate_email_rejected(client, admin_user, employee_user, auth_headers):
    user, _ = employee_user
    response = client.post(
        "/api/employees", headers=auth_headers(admin_user), data=_form(email=user.email)
    )
    assert response.status_code == 409
    assert response.json()["errors"][0]["msg"] == "User already registered"


def test_disallowed_image_type_rejected(client, admin_user, auth_headers, db_session):
    response = client.post(
        "/api/employees", headers=auth_headers(admin_user), data=_form(),
        files={"image": ("notes.txt", b"hello", "text/plain")},
    )
    assert response.status_code == 400
    assert db_session.query(User).filter(User.email == "sam@example.com").first() is None


def test_employee_cannot_create_employees(client, employee_user, auth_headers):
    user, _ = employee_user
    response = client.post("/api/employees", headers=auth_headers(user), data=_form())
    assert response.status_code == 403


def test_list_and_search(client, admin_user, make_employee, auth_headers):
    make_employee(email="alice@example.com", name="Alice Smith", code="EMP-A")
    make_employee(email="bob@example.com", name="Bob Jones", code="EMP-B")

    response = client.get("/api/employees", headers=auth_headers(admin_user))
    assert response.status_code == 200
    assert response.json()["total"] == 2

    response = client.get("/api/employees", params={"search": "alice"}, headers=auth_headers(admin_user))
    data = response.json()
    assert data["total"] == 1
    assert data["employees"][0]["user"]["name"] == "Alice Smith"


def test_employee_and_user_ids_are_resolved_separately(client, admin_user, make_employee, auth_headers):
    # Admin exists first, so user ids and employee ids are offset
    user_a, employee_a = make_employee(email="a@example.com", name="Amy A")
    user_b, employee_b = make_employee(email="b@example.com", name="Ben B")
    assert user_a.id != employee_a.id

    own_profile = client.get(f"/api/employees/user/{user_a.id}", headers=auth_headers(user_a))
    assert own_profile.status_code == 200
    assert own_profile.json()["id"] == employee_a.id

    own_record = client.get(f"/api/employees/{employee_a.id}", headers=auth_headers(user_a))
    assert own_record.status_code == 200
    assert own_record.json()["user"]["email"] == "a@example.com"

    by_admin = client.get(f"/api/employees/{employee_b.id}", headers=auth_headers(admin_user))
    assert by_admin.json()["user"]["email"] == "b@example.com"

    someone_else = client.get(f"/api/employees/user/{user_b.id}", headers=auth_headers(user_a))
    assert someone_else.status_code == 403


def test_user_without_profile_is_not_found(client, admin_user, auth_headers):
    response = client.get(f"/api/employees/user/{admin_user.id}", headers=auth_headers(admin_user))
    assert response.status_code == 404


def test_get_missing_employee(client, admin_user, auth_headers):
    response = client.get("/api/employees/9999", headers=auth_headers(admin_user))
    assert response.status_code == 404


def test_update_replaces_image(client, admin_user, auth_headers):
    created = client.post(
        "/api/employees", headers=auth_headers(admin_user), data=_form(), files=_png()
    ).json()
    old_file = created["user"]["profile_image"]

    response = client.put(
        f"/api/employees/{created['id']}",
        headers=auth_headers(admin_user),
        data={"name": "Samuel Carter", "salary": "45000"},
        files=_png("new.jpg"),
    )
    assert response.status_code == 200
    data = response.json()
    assert data["user"]["name"] == "Samuel Carter"
    assert data["salary"] == 45000
    assert data["employee_code"] == "EMP-100"
    assert data["user"]["profile_image"] != old_file
    assert not os.path.exists(os.path.join(settings.upload_dir, old_file))
    assert os.path.exists(os.path.join(settings.upload_dir, data["user"]["profile_image"]))


def test_update_to_taken_email_conflicts(client, admin_user, make_employee, auth_headers):
    _, first = make_employee(email="first@example.com")
    make_employee(email="second@example.com")
    response = client.put(
        f"/api/employees/{first.id}", headers=auth_headers(admin_user), data={"email": "second@example.com"}
    )
    assert response.status_code == 409


def test_delete_removes_user_and_records(client, admin_user, employee_user, auth_headers, db_session):
    user, employee = employee_user
    db_session.add(LeaveRequest(
        employee_id=employee.id, leave_type="sick", from_date=date(2025, 1, 6),
        end_date=date(2025, 1, 6), total_days=1, status="pending", reason="Flu",
    ))
    db_session.add(Salary(
        employee_id=employee.id, basic_salary=1000, allowances=0, deductions=0,
        net_salary=1000, pay_date=date(2025, 1, 31),
    ))
    db_session.commit()
    user_id, employee_id = user.id, employee.id

    response = client.delete(f"/api/employees/{employee_id}", headers=auth_headers(admin_user))
    assert response.status_code == 200

    db_session.expire_all()
    assert db_session.get(User, user_id) is None
    assert db_session.get(Employee, employee_id) is None
    assert db_session.query(LeaveRequest).filter(LeaveRequest.employee_id == employee_id).count() == 0
    assert db_session.query(Salary).filter(Salary.employee_id == employee_id).count() == 0


def test_employees_by_department(client, admin_user, make_employee, auth_headers):
    department = client.post(
        "/api/department", headers=auth_headers(admin_user), json={"dep_name": "Finance"}
    ).json()
    _, staffed = make_employee(email="fin@example.com")
    make_employee(email="other@example.com")
    client.put(
        f"/api/employees/{staffed.id}", headers=auth_headers(admin_user),
        data={"department_id": str(department["id"])},
    )

    response = client.get(f"/api/employees/department/{department['id']}", headers=auth_headers(admin_user))
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 1
    assert data["employees"][0]["department"]["dep_name"] == "Finance"


def test_failed_update_discards_new_image(db_session, make_employee, monkeypatch):
    _, employee = make_employee(email="img@example.com")
    before = set(os.listdir(settings.upload_dir))

    def failing_commit():
        raise RuntimeError("database unavailable")

    monkeypatch.setattr(db_session, "commit", failing_commit)
    image = UploadFile(file=io.BytesIO(b"\x89PNG\r\n\x1a\nfake"), filename="new.png")

    with pytest.raises(RuntimeError):
        employee_service.update_employee(db_session, employee.id, EmployeeUpdate(name="Renamed"), image)

    assert set(os.listdir(settings.upload_dir)) == before
