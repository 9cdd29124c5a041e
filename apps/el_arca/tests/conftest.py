from __future__ import annotations

from collections.abc import Generator, Sequence
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from el_arca.api.app import create_app
from el_arca.db.base import Base, import_orm_models
from el_arca.db.models.chapter import Chapter
from el_arca.db.models.debt import Debt, DebtCategory, DebtStatus, DebtType
from el_arca.db.session import (
    build_engine,
    build_session_factory,
    get_db_session,
)

ADMIN_HEADERS = {"X-Actor-Id": "admin-1", "X-Actor-Role": "admin"}
PRESIDENT_HEADERS = {"X-Actor-Id": "president-1", "X-Actor-Role": "president"}


@pytest.fixture
def sqlite_session_factory() -> Generator[sessionmaker[Session], None, None]:
    import_orm_models()
    engine = build_engine("sqlite+pysqlite:///:memory:")
    Base.metadata.create_all(engine)
    factory = build_session_factory(engine)
    try:
        yield factory
    finally:
        Base.metadata.drop_all(engine)


def seed_chapters(
    session: Session,
    roster: Sequence[tuple[str, int]],
    *,
    is_active: bool = True,
) -> list[UUID]:
    chapters = [
        Chapter(id=uuid4(), name=name, member_count=members, is_active=is_active)
        for name, members in roster
    ]
    session.add_all(chapters)
    session.commit()
    return [chapter.id for chapter in chapters]


def seed_debt(
    session: Session,
    *,
    chapter_id: UUID,
    amount: str = "100.00",
    due_date: date = date(2099, 12, 31),
    status: DebtStatus = DebtStatus.PENDING,
    batch_id: UUID | None = None,
    created_at: datetime | None = None,
    description: str = "Aniversario nacional",
) -> UUID:
    debt = Debt(
        id=uuid4(),
        batch_id=batch_id or uuid4(),
        chapter_id=chapter_id,
        amount=Decimal(amount),
        description=description,
        debt_type=DebtType.CONTRIBUTION,
        category=DebtCategory.ANNIVERSARY,
        due_date=due_date,
        status=status,
        bank_name="BBVA Mexico",
        bank_clabe="012345678901234567",
        bank_account=None,
        bank_holder="Tesoreria Moto Club",
        created_by="admin-1",
    )
    if created_at is not None:
        debt.created_at = created_at
    session.add(debt)
    session.commit()
    return debt.id


@pytest.fixture
def client(
    sqlite_session_factory: sessionmaker[Session],
) -> Generator[TestClient, None, None]:
    app = create_app()

    def override_get_db_session() -> Generator[Session, None, None]:
        with sqlite_session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def federation(sqlite_session_factory: sessionmaker[Session]) -> list[UUID]:
    """Four active chapters with 44 members in total, in name order."""

    with sqlite_session_factory() as session:
        return seed_chapters(
            session,
            [
                ("Guadalajara", 14),
                ("Monterrey", 10),
                ("Puebla", 12),
                ("Queretaro", 8),
            ],
        )
