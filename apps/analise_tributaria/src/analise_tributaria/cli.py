"""CLI bootstrap for analise-tributaria."""

from pathlib import Path

import typer

from analise_tributaria.core.logging import configure_logging
from analise_tributaria.core.settings import get_settings
from analise_tributaria.domain.errors import DomainError
from analise_tributaria.services.ingestion_service import analyze_spreadsheet
from analise_tributaria.services.nbs_service import DEFAULT_NBS_SHEET_INDEX

app = typer.Typer(help="CLI for NCM/CFOP tax classification analysis.")
INPUT_FILE_ARGUMENT = typer.Argument(..., exists=True, dir_okay=False)
SHEET_INDEX_OPTION = typer.Option(DEFAULT_NBS_SHEET_INDEX, min=0)


@app.callback()
def main_callback() -> None:
    configure_logging(get_settings().log_level)


@app.command("healthcheck")
def healthcheck() -> None:
    """Verify that the CLI entrypoint is available."""
    typer.echo("analise-tributaria is ready")


@app.command("analyze")
def analyze(path: Path = INPUT_FILE_ARGUMENT) -> None:
    """Consolidate a local spreadsheet and print its summary."""
    try:
        report = analyze_spreadsheet(path.read_bytes())
    except DomainError as exc:
        typer.echo(exc.message, err=True)
        raise typer.Exit(code=1) from exc

    resumo = report.resumo
    if report.empresa is not None:
        typer.echo(f"Empresa: {report.empresa.nome or '-'}")
        typer.echo(f"CNPJ: {report.empresa.cnpj or '-'}")
    typer.echo(f"Combinacoes: {resumo.total_combinacoes}")
    typer.echo(
        f"Definidos: {resumo.total_ok} | "
        f"Nao encontrados: {resumo.total_ausente} | "
        f"CFOPs sem cClasstrib: {resumo.total_cfop_na}"
    )
    typer.echo(f"Casos ausentes: {len(report.casos_ausentes)}")


@app.command("bootstrap-admin")
def bootstrap_admin() -> None:
    """Create the default administrator user when it does not exist."""
    from analise_tributaria.db.session import SessionFactory
    from analise_tributaria.repositories.company_repository import CompanyRepository
    from analise_tributaria.repositories.user_repository import UserRepository
    from analise_tributaria.services.user_service import UserService

    settings = get_settings()
    with SessionFactory() as session:
        service = UserService(
            user_repository=UserRepository(session),
            company_repository=CompanyRepository(session),
            session=session,
            bcrypt_rounds=settings.bcrypt_rounds,
        )
        user, created = service.ensure_admin(
            username=settings.admin_username,
            password=settings.admin_password,
        )
    if created:
        typer.echo(f"Administrador criado: {user.username}")
    else:
        typer.echo(f"Administrador ja existe: {user.username}")


@app.command("import-nbs")
def import_nbs(
    path: Path = INPUT_FILE_ARGUMENT,
    sheet_index: int = SHEET_INDEX_OPTION,
) -> None:
    """Replace the NBS table with the rows of a reference workbook."""
    from analise_tributaria.db.session import SessionFactory
    from analise_tributaria.repositories.nbs_repository import NbsRepository
    from analise_tributaria.services.nbs_service import NbsService

    with SessionFactory() as session:
        service = NbsService(nbs_repository=NbsRepository(session), session=session)
        try:
            inserted = service.import_workbook(
                path.read_bytes(), sheet_index=sheet_index
            )
        except DomainError as exc:
            typer.echo(exc.message, err=True)
            raise typer.Exit(code=1) from exc
    typer.echo(f"Linhas NBS importadas: {inserted}")


def main() -> None:
    """Run the analise-tributaria CLI application."""
    app()


if __name__ == "__main__":
    main()
