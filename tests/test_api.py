from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from src.site_payroll.site_payroll.common.clock import FixedClock
from src.site_payroll.site_payroll.container import assemble
from src.site_payroll.site_payroll.core.exceptions import StoreError
from src.site_payroll.site_payroll.labourers.model import Labourer
from src.site_payroll.site_payroll.main import create_app
from tests.fakes import InMemoryAdvances, InMemoryAttendance, InMemoryLabourers, InMemoryOvertime


@pytest.fixture()
def ledgers():
    attendance = InMemoryAttendance()
    attendance.sites = {1: "North Tower"}
    attendance.active_labourers = {1: 2}
    return {
        "labourers_repo": InMemoryLabourers(
            [
                Labourer(labourer_id=1, full_name="Ravi", rate=Decimal("500"), site_id=1),
                Labourer(labourer_id=2, full_name="Meena", rate=Decimal("450"), site_id=1),
            ]
        ),
        "attendance_repo": attendance,
        "overtime_repo": InMemoryOvertime(),
        "advances_repo": InMemoryAdvances(),
    }


@pytest.fixture()
def client(monkeypatch, ledgers):
    monkeypatch.setenv("APP_ENV", "testing")
    container = assemble(**ledgers, clock=FixedClock(datetime(2026, 3, 10, 18, 0)))
    app = create_app(container)
    return app.test_client()


def _submission(status="full", food_provided=False):
    return {
        "food_provided": food_provided,
        "records": [
            {"labourer_id": 1, "site_id": 1, "supervisor_id": 7, "date": "2026-03-10", "status": status},
            {"labourer_id": 2, "site_id": 1, "supervisor_id": 7, "date": "2026-03-10", "status": "half"},
        ],
    }


def test_submit_then_resubmit_returns_conflict(client):
    first = client.post("/api/attendance", json=_submission())
    assert first.status_code == 200
    assert first.get_json()["record_count"] == 2

    second = client.post("/api/attendance", json=_submission(status="absent"))
    assert second.status_code == 409
    assert second.get_json()["error"] == "conflict_error"

    lock = client.get("/api/attendance/lock-status?site_id=1&date=2026-03-10").get_json()
    assert lock == {"is_locked": True, "food_provided": False}

    rows = client.get("/api/attendance?date=2026-03-10&site_id=1").get_json()
    assert [r["status"] for r in rows] == ["full", "half"]


def test_invalid_submission_returns_400(client):
    body = _submission()
    body["records"][1]["date"] = "2026-03-09"

    resp = client.post("/api/attendance", json=body)

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_non_json_body_returns_400(client):
    resp = client.post("/api/attendance", data="records", content_type="text/plain")

    assert resp.status_code == 400


def test_store_failure_returns_503(client, ledgers):
    ledgers["attendance_repo"].fail_on_write = True

    resp = client.post("/api/attendance", json=_submission())

    assert resp.status_code == 503
    assert resp.get_json()["error"] == StoreError.kind


def test_labour_summary_and_wage_month(client):
    client.post("/api/attendance", json=_submission(food_provided=True))
    client.post("/api/overtime", json={"labourer_id": 1, "site_id": 1, "date": "2026-03-10", "hours": 2, "amount": 200})
    resp = client.post("/api/advances", json={"labourer_id": 1, "amount": 100, "date": "2026-03-10"})
    assert resp.status_code == 201

    summary = client.get("/api/reports/labour-summary?start_date=2026-03-01&end_date=2026-03-31&site_id=1").get_json()
    by_id = {row["labourer_id"]: row for row in summary}
    assert by_id[1]["current_net_payable"] == 4000 + 200 - 100
    assert by_id[2]["wage"] == 4 * 450

    month = client.get("/api/reports/wage-month?month=2026-03").get_json()
    assert {row["labourer_id"]: row["total_payable"] for row in month} == {1: 4100.0, 2: 1800.0}


def test_report_params_are_validated(client):
    assert client.get("/api/reports/labour-summary?start_date=2026-03-01").status_code == 400
    assert client.get("/api/reports/wage-month?month=2026-13").status_code == 400
    assert client.get("/api/reports/wage-month").status_code == 400


def test_site_attendance_report(client):
    client.post("/api/attendance", json=_submission())

    [row] = client.get("/api/reports/site-attendance?date=2026-03-10").get_json()

    assert row == {
        "site_id": 1,
        "site_name": "North Tower",
        "total_labourers": 2,
        "present_count": 2,
        "absent_count": 0,
        "is_submitted": True,
    }


def test_overtime_and_advance_listing(client):
    client.post(
        "/api/overtime",
        json=[{"labourer_id": 2, "site_id": 1, "date": "2026-03-10", "hours": 1.5, "amount": 150}],
    )
    client.post("/api/advances", json={"labourer_id": 2, "amount": 75, "date": "2026-03-09", "notes": "bus"})

    [ot] = client.get("/api/overtime?date=2026-03-10").get_json()
    assert (ot["labourer_id"], ot["hours"], ot["amount"]) == (2, 1.5, 150.0)

    [adv] = client.get("/api/advances?labourer_id=2").get_json()
    assert adv["date"] == date(2026, 3, 9).isoformat()
    assert adv["notes"] == "bus"


def test_unknown_route_is_json_404(client):
    resp = client.get("/api/nope")

    assert resp.status_code == 404
    assert resp.get_json()["success"] is False
