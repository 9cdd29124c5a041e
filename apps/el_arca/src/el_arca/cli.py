"""CLI bootstrap for El Arca."""

import typer

from el_arca.core.logging import configure_logging
from el_arca.core.settings import LogLevel
from el_arca.db.session import SessionFactory
from el_arca.domain.actor import SYSTEM_ACTOR
from el_arca.domain.errors import DomainError, InvalidInputError
from el_arca.domain.money import format_money, parse_amount
from el_arca.repositories.chapter_repository import ChapterRepository
from el_arca.repositories.debt_repository import DebtRepository
from el_arca.services.debt_service import DebtService
from el_arca.services.distribution_service import DistributionService

app = typer.Typer(help="Treasury tools for proportional debt distribution.")


@app.callback()
def main_callback(
    log_level: LogLevel | None = typer.Option(
        None, "--log-level", case_sensitive=False, help="Override LOG_LEVEL."
    ),
) -> None:
    configure_logging(log_level)


@app.command("healthcheck")
def healthcheck() -> None:
    """Verify that the CLI entrypoint is available."""
    typer.echo("el-arca is ready")


@app.command("preview")
def preview(
    total_amount: str = typer.Argument(..., help="Amount to split, e.g. 9000.00"),
) -> None:
    """Print how an amount would be split across active chapters."""
    try:
        amount = parse_amount(total_amount)
    except InvalidInputError as exc:
        raise typer.BadParameter(exc.message, param_hint="TOTAL_AMOUNT") from exc

    with SessionFactory() as session:
        service = DistributionService(
            chapter_repository=ChapterRepository(session),
            debt_repository=DebtRepository(session),
            session=session,
        )
        try:
            plan = service.preview_distribution(amount, actor=SYSTEM_ACTOR)
        except DomainError as exc:
            typer.echo(f"{exc.code}: {exc.message}", err=True)
            raise typer.Exit(code=1) from exc

    for item in plan.items:
        typer.echo(
            f"{item.chapter_name}: {item.member_count} miembros -> "
            f"{format_money(item.assigned_amount)}"
        )
    typer.echo(
        f"Total: {format_money(plan.total_amount)} | "
        f"Capitulos: {plan.total_chapters} | "
        f"Miembros: {plan.total_members} | "
        f"Costo por miembro: {format_money(plan.cost_per_member)}"
    )


@app.command("mark-overdue")
def mark_overdue() -> None:
    """Flag pending debts past their due date as overdue."""
    with SessionFactory() as session:
        service = DebtService(debt_repository=DebtRepository(session), session=session)
        updated = service.mark_overdue_debts(actor=SYSTEM_ACTOR)
    typer.echo(f"Deudas vencidas: {updated}")


def main() -> None:
    """Run the El Arca CLI application."""
    app()


if __name__ == "__main__":
    main()
