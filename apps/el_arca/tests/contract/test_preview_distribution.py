from __future__ import annotations

from uuid import UUID

from fastapi.testclient import TestClient
from sqlalchemy import func, select
from sqlalchemy.orm import Session, sessionmaker

from conftest import ADMIN_HEADERS, PRESIDENT_HEADERS, seed_chapters
from el_arca.api.app import create_app
from el_arca.db.models.debt import Debt

PREVIEW_PATH = "/v1/debts/preview-distribution"


def test_preview_distribution_returns_plan(
    client: TestClient,
    federation: list[UUID],
    sqlite_session_factory: sessionmaker[Session],
) -> None:
    response = client.get(
        PREVIEW_PATH,
        params={"total_amount": "9000"},
        headers=ADMIN_HEADERS,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["total_amount"] == "9000.00"
    assert body["total_chapters"] == 4
    assert body["total_members"] == 44
    assert body["cost_per_member"] == "204.55"
    assert [item["chapter_id"] for item in body["distribution"]] == [
        str(chapter_id) for chapter_id in federation
    ]
    assert [
        (item["chapter_name"], item["members"], item["assigned_amount"])
        for item in body["distribution"]
    ] == [
        ("Guadalajara", 14, "2863.64"),
        ("Monterrey", 10, "2045.45"),
        ("Puebla", 12, "2454.55"),
        ("Queretaro", 8, "1636.36"),
    ]

    with sqlite_session_factory() as session:
        assert session.scalar(select(func.count(Debt.id))) == 0


def test_preview_distribution_adjusts_first_chapter(
    client: TestClient,
    sqlite_session_factory: sessionmaker[Session],
) -> None:
    with sqlite_session_factory() as session:
        seed_chapters(session, [("Alfa", 1), ("Bravo", 1), ("Charlie", 1)])

    response = client.get(
        PREVIEW_PATH,
        params={"total_amount": "10.00"},
        headers=ADMIN_HEADERS,
    )

    assert response.status_code == 200
    assert [item["assigned_amount"] for item in response.json()["distribution"]] == [
        "3.34",
        "3.33",
        "3.33",
    ]


def test_preview_distribution_ignores_inactive_chapters(
    client: TestClient,
    federation: list[UUID],
    sqlite_session_factory: sessionmaker[Session],
) -> None:
    with sqlite_session_factory() as session:
        seed_chapters(session, [("Aguascalientes", 99)], is_active=False)

    response = client.get(
        PREVIEW_PATH,
        params={"total_amount": "9000"},
        headers=ADMIN_HEADERS,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["total_chapters"] == 4
    assert "Aguascalientes" not in {
        item["chapter_name"] for item in body["distribution"]
    }


def test_preview_distribution_rejects_zero_amount(
    client: TestClient,
    federation: list[UUID],
) -> None:
    response = client.get(
        PREVIEW_PATH,
        params={"total_amount": "0"},
        headers=ADMIN_HEADERS,
    )

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_INPUT"


def test_preview_distribution_rejects_amount_above_cap(
    client: TestClient,
    federation: list[UUID],
) -> None:
    response = client.get(
        PREVIEW_PATH,
        params={"total_amount": "10000000.01"},
        headers=ADMIN_HEADERS,
    )

    assert response.status_code == 400
    assert response.json()["details"]["max_total_amount"] == "10000000"


def test_preview_distribution_rejects_malformed_amount(
    client: TestClient,
    federation: list[UUID],
) -> None:
    response = client.get(
        PREVIEW_PATH,
        params={"total_amount": "12.345"},
        headers=ADMIN_HEADERS,
    )

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_INPUT"


def test_preview_distribution_without_chapters_returns_404(
    client: TestClient,
) -> None:
    response = client.get(
        PREVIEW_PATH,
        params={"total_amount": "100"},
        headers=ADMIN_HEADERS,
    )

    assert response.status_code == 404
    assert response.json()["code"] == "NO_ACTIVE_CHAPTERS"


def test_preview_distribution_without_members_returns_422(
    client: TestClient,
    sqlite_session_factory: sessionmaker[Session],
) -> None:
    with sqlite_session_factory() as session:
        seed_chapters(session, [("Alfa", 0), ("Bravo", 0)])

    response = client.get(
        PREVIEW_PATH,
        params={"total_amount": "100"},
        headers=ADMIN_HEADERS,
    )

    assert response.status_code == 422
    assert response.json()["code"] == "NO_MEMBERS"


def test_preview_distribution_requires_identity(
    client: TestClient,
    federation: list[UUID],
) -> None:
    response = client.get(PREVIEW_PATH, params={"total_amount": "100"})

    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHENTICATED"


def test_preview_distribution_rejects_unknown_role(
    client: TestClient,
    federation: list[UUID],
) -> None:
    response = client.get(
        PREVIEW_PATH,
        params={"total_amount": "100"},
        headers={"X-Actor-Id": "someone", "X-Actor-Role": "treasurer"},
    )

    assert response.status_code == 401


def test_preview_distribution_is_admin_only(
    client: TestClient,
    federation: list[UUID],
) -> None:
    response = client.get(
        PREVIEW_PATH,
        params={"total_amount": "100"},
        headers=PRESIDENT_HEADERS,
    )

    assert response.status_code == 403
    assert response.json()["code"] == "FORBIDDEN"


def test_openapi_contains_preview_route() -> None:
    schema = create_app().openapi()

    operation = schema["paths"][PREVIEW_PATH]["get"]
    assert {"200", "400", "401", "403", "404", "422"} <= set(operation["responses"])
