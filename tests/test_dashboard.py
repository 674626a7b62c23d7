from datetime import date

import pytest
from app.models.leave_request import LeaveRequest


def test_summary_counts(client, admin_user, make_employee, auth_headers, db_session):
    year = date.today().year
    _, first = make_employee(email="one@example.com", salary=3000)
    make_employee(email="two@example.com", salary=4500)
    client.post("/api/department", headers=auth_headers(admin_user), json={"dep_name": "HR"})

    for status, start in (("pending", date(year, 1, 5)), ("approved", date(year, 2, 5)),
                          ("approved", date(year - 1, 6, 5))):
        db_session.add(LeaveRequest(
            employee_id=first.id, leave_type="casual", from_date=start, end_date=start,
            total_days=1, status=status, reason="Errand",
        ))
    db_session.commit()

    response = client.get("/api/dashboard/summary", headers=auth_headers(admin_user))
    assert response.status_code == 200
    data = response.json()
    assert data["total_employees"] == 2
    assert data["total_departments"] == 1
    assert data["monthly_pay"] == 7500
    assert data["year"] == year
    assert data["leave_summary"] == {"pending": 1, "approved": 1, "rejected": 0, "applied": 2}


def test_summary_is_admin_only(client, employee_user, auth_headers):
    user, _ = employee_user
    response = client.get("/api/dashboard/summary", headers=auth_headers(user))
    assert response.status_code == 403
