from __future__ import annotations

from typing import Any
from uuid import UUID

from fastapi.testclient import TestClient
from sqlalchemy import func, select
from sqlalchemy.orm import Session, sessionmaker

from conftest import ADMIN_HEADERS, PRESIDENT_HEADERS
from el_arca.api.app import create_app
from el_arca.db.models.debt import Debt, DebtStatus

BATCH_PATH = "/v1/debts/batch"


def _payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "total_amount": "9000.00",
        "due_date": "2099-12-31",
        "debt_type": "contribution",
        "description": "Apoyo para reparacion de moto",
        "category": "accident",
        "bank_name": "BBVA Mexico",
        "bank_clabe": "012345678901234567",
        "bank_holder": "Tesoreria Moto Club",
    }
    payload.update(overrides)
    return payload


def _count_debts(factory: sessionmaker[Session]) -> int:
    with factory() as session:
        return int(session.scalar(select(func.count(Debt.id))) or 0)


def test_commit_distribution_creates_one_debt_per_chapter(
    client: TestClient,
    federation: list[UUID],
    sqlite_session_factory: sessionmaker[Session],
) -> None:
    response = client.post(BATCH_PATH, json=_payload(), headers=ADMIN_HEADERS)

    assert response.status_code == 201
    body = response.json()
    assert body["debts_created"] == 4
    assert len(body["debt_ids"]) == 4
    assert body["total_amount"] == "9000.00"
    assert body["cost_per_member"] == "204.55"

    with sqlite_session_factory() as session:
        debts = list(
            session.scalars(
                select(Debt).where(Debt.batch_id == UUID(body["batch_id"]))
            ).all()
        )
    assert len(debts) == 4
    assert {debt.chapter_id for debt in debts} == set(federation)
    assert {debt.status for debt in debts} == {DebtStatus.PENDING}
    assert {debt.created_by for debt in debts} == {"admin-1"}
    assert sum(debt.amount for debt in debts) == 9000


def test_commit_distribution_accepts_account_number_instead_of_clabe(
    client: TestClient,
    federation: list[UUID],
) -> None:
    response = client.post(
        BATCH_PATH,
        json=_payload(bank_clabe=None, bank_account="1234 5678 90"),
        headers=ADMIN_HEADERS,
    )

    assert response.status_code == 201
    listing = client.get(
        "/v1/debts",
        params={"batch_id": response.json()["batch_id"]},
        headers=ADMIN_HEADERS,
    )
    assert {item["bank_account"] for item in listing.json()["items"]} == {
        "1234567890"
    }


def test_commit_distribution_requires_bank_reference(
    client: TestClient,
    federation: list[UUID],
    sqlite_session_factory: sessionmaker[Session],
) -> None:
    response = client.post(
        BATCH_PATH,
        json=_payload(bank_clabe="", bank_account="  "),
        headers=ADMIN_HEADERS,
    )

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "INVALID_INPUT"
    assert body["details"] == {"fields": ["bank_clabe", "bank_account"]}
    assert _count_debts(sqlite_session_factory) == 0


def test_commit_distribution_rejects_past_due_date(
    client: TestClient,
    federation: list[UUID],
    sqlite_session_factory: sessionmaker[Session],
) -> None:
    response = client.post(
        BATCH_PATH,
        json=_payload(due_date="2000-01-01"),
        headers=ADMIN_HEADERS,
    )

    assert response.status_code == 400
    assert response.json()["details"]["due_date"] == "2000-01-01"
    assert _count_debts(sqlite_session_factory) == 0


def test_commit_distribution_rejects_unknown_category(
    client: TestClient,
    federation: list[UUID],
) -> None:
    response = client.post(
        BATCH_PATH,
        json=_payload(category="party"),
        headers=ADMIN_HEADERS,
    )

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_INPUT"


def test_commit_distribution_without_chapters_returns_404(
    client: TestClient,
    sqlite_session_factory: sessionmaker[Session],
) -> None:
    response = client.post(BATCH_PATH, json=_payload(), headers=ADMIN_HEADERS)

    assert response.status_code == 404
    assert _count_debts(sqlite_session_factory) == 0


def test_commit_distribution_is_admin_only(
    client: TestClient,
    federation: list[UUID],
    sqlite_session_factory: sessionmaker[Session],
) -> None:
    response = client.post(BATCH_PATH, json=_payload(), headers=PRESIDENT_HEADERS)

    assert response.status_code == 403
    assert _count_debts(sqlite_session_factory) == 0


def test_openapi_contains_batch_route() -> None:
    schema = create_app().openapi()

    operation = schema["paths"][BATCH_PATH]["post"]
    assert {"201", "400", "404", "422", "503"} <= set(operation["responses"])
