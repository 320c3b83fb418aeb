import json

import typer

from mealime_pipeline.application.use_cases.ensure_mealime_session import EnsureMealimeSessionUseCase
from mealime_pipeline.domain.errors import MealimeError, UpstreamRejected
from mealime_pipeline.infrastructure.adapters.mealime.session import MealimeSession
from mealime_pipeline.infrastructure.bootstrap import build_session

app = typer.Typer(help="Mealime grocery list CLI")


def _logged_in(csrf_retries: int = 0) -> MealimeSession:
    session = build_session()
    result = EnsureMealimeSessionUseCase(session, csrf_retries=csrf_retries).execute()
    if result.status != "READY":
        typer.echo(result.message, err=True)
        raise typer.Exit(code=1)
    return session


@app.command()
def login(csrf_retries: int = typer.Option(0, "--csrf-retries", "-r")) -> None:
    session = build_session()
    result = EnsureMealimeSessionUseCase(session, csrf_retries=csrf_retries).execute()
    typer.echo(f"{result.status}: {result.message}")
    if result.status != "READY":
        raise typer.Exit(code=1)


@app.command()
def add(query: str = typer.Argument(..., help='e.g. "milk, eggs and bread"')) -> None:
    session = _logged_in()
    try:
        report = session.submit_query(query)
    except UpstreamRejected as e:
        if e.report and e.report.results:
            typer.echo(e.report.text)
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)
    typer.echo(report.text)


@app.command("add-item")
def add_item(item: str = typer.Argument(...)) -> None:
    session = _logged_in()
    try:
        result = session.submit_item(item)
    except UpstreamRejected as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)
    typer.echo(result.detail)


@app.command("meal-plan")
def meal_plan() -> None:
    session = _logged_in()
    try:
        data = session.get_meal_plan()
    except MealimeError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)
    typer.echo(json.dumps(data, indent=2))


@app.command()
def reset() -> None:
    session = build_session()
    try:
        session.reset()
    except MealimeError as e:
        typer.echo(f"Reset done, login failed: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo("Cookie jar reset, logged in again")
