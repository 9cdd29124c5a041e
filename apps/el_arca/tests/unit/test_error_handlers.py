from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError

from el_arca.api.error_handlers import register_error_handlers
from el_arca.domain.errors import NoMembersError, PersistenceFailureError


def _client_raising(exc: Exception) -> TestClient:
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/boom")
    def boom() -> None:
        raise exc

    return TestClient(app, raise_server_exceptions=False)


def test_domain_error_handler_returns_contract_shape() -> None:
    client = _client_raising(NoMembersError(message="Roster is empty"))

    response = client.get("/boom")

    assert response.status_code == 422
    assert response.json() == {
        "code": "NO_MEMBERS",
        "message": "Roster is empty",
    }


def test_domain_error_handler_includes_details() -> None:
    client = _client_raising(
        PersistenceFailureError(details={"expected": 4, "persisted": 3})
    )

    response = client.get("/boom")

    assert response.status_code == 503
    body = response.json()
    assert body["code"] == "PERSISTENCE_FAILURE"
    assert body["details"] == {"expected": 4, "persisted": 3}


def test_integrity_error_maps_to_unprocessable_entity() -> None:
    client = _client_raising(
        IntegrityError(
            "INSERT INTO arca_chapters",
            {},
            Exception('duplicate key value violates "uq_arca_chapters_name"'),
        )
    )

    response = client.get("/boom")

    assert response.status_code == 422
    body = response.json()
    assert body["code"] == "PERSISTENCE_FAILURE"
    assert "details" not in body


def test_unexpected_error_maps_to_internal_server_error() -> None:
    client = _client_raising(RuntimeError("kaboom"))

    response = client.get("/boom")

    assert response.status_code == 500
    body = response.json()
    assert body["code"] == "INTERNAL_SERVER_ERROR"
    assert body["details"] == {"error_type": "RuntimeError"}


def test_integrity_error_names_known_constraint() -> None:
    client = _client_raising(
        IntegrityError(
            "INSERT INTO arca_debts",
            {},
            Exception(
                "new row violates check constraint "
                '"ck_arca_debts_bank_reference_present"'
            ),
        )
    )

    response = client.get("/boom")

    assert response.status_code == 422
    body = response.json()
    assert body["details"] == {"constraint": "ck_arca_debts_bank_reference_present"}
    assert "CLABE" in body["message"]
