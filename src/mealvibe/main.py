"""
MealVibe - CLI Entry Point.

Usage:
    mealvibe wizard          Walk through the questions in the terminal
    mealvibe serve           Start the API server
    mealvibe health          Show configuration
    mealvibe --help          Show help
"""

import asyncio
import base64
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from intake.answers import OTHER_ALLERGY
from intake.forms import FREE_FORM_SUGGESTIONS, QUESTIONS, get_form_options
from intake.session import WizardSession
from intake.steps import Step

app = typer.Typer(
    name="mealvibe",
    help="MealVibe - meal ideas that match your mood.",
    add_completion=False,
)
console = Console()

BACK = "b"


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _build_session(api_url: str | None, include_camera: bool) -> WizardSession:
    """Session wired to a remote API, or to in-process LLM services."""
    from mealvibe.config import settings

    if api_url:
        from intake.client import HttpFridgeScanner, HttpRecommendationClient

        timeout = settings.request_timeout_seconds
        recommender = HttpRecommendationClient(api_url, timeout=timeout)
        scanner = HttpFridgeScanner(api_url, timeout=timeout)
    else:
        from mealvibe.services.fridge_scan import LLMFridgeScanner
        from mealvibe.services.recommendations import LLMRecommender

        recommender = LLMRecommender()
        scanner = LLMFridgeScanner()

    return WizardSession(
        recommender=recommender,
        scanner=scanner,
        include_camera=include_camera,
        scan_wait_timeout=settings.scan_wait_timeout_seconds,
    )


def _option_labels(step: Step) -> list[tuple[str, str]]:
    """(value, label) pairs for a multi-select step."""
    options = get_form_options()[step.value]
    if step.value in FREE_FORM_SUGGESTIONS:
        return [(o, o) for o in options]
    return [(o["id"], f"{o['emoji']}  {o['label']}") for o in options]


def _ask_multi_select(session: WizardSession, step: Step) -> bool:
    """
    Show options and toggle the user's picks.

    Returns False if the user asked to go back.
    """
    field_name = step.value
    options = _option_labels(step)
    selected = session.answers.selected(field_name)

    table = Table(show_header=False, box=None)
    for i, (value, label) in enumerate(options, start=1):
        mark = "[green]✔[/green]" if value in selected else " "
        table.add_row(f"{i}.", mark, label)
    console.print(table)

    hint = "numbers, comma separated"
    if field_name in FREE_FORM_SUGGESTIONS:
        hint += ", or type your own"
    raw = console.input(f"[dim]({hint}; Enter to continue, '{BACK}' to go back)[/dim] ").strip()

    if raw.lower() == BACK:
        return False

    for token in filter(None, (t.strip() for t in raw.split(","))):
        if token.isdigit() and 1 <= int(token) <= len(options):
            value = options[int(token) - 1][0]
        else:
            value = token
        try:
            session.toggle(field_name, value)
        except ValueError as e:
            console.print(f"[yellow]{e}[/yellow]")

    if step == Step.ALLERGIES and session.answers.has_other_allergy:
        text = console.input("Please specify your other allergy or intolerance: ")
        session.set_text("other_allergy", text)
    return True


def _render_suggestions(session: WizardSession) -> None:
    if session.error:
        console.print(f"[yellow]{session.error}[/yellow]")
    suggestions = session.suggestions
    if suggestions is None:
        return
    console.print(f"\n[bold magenta]{suggestions.message}[/bold magenta]\n")
    for s in suggestions.suggestions:
        console.print(Panel(f"{s.prep}\n\n[dim]{s.vibe}[/dim]", title=s.title, border_style="magenta"))


async def _run_wizard(session: WizardSession, photo: Path | None) -> None:
    while True:
        step = session.current_step
        question = QUESTIONS.get(step.value, {})
        if step != Step.RECOMMENDATIONS:
            index, total = session.sequencer.position()
            console.print(f"\n[bold]{question.get('title', '')}[/bold]  [dim]{index}/{total}[/dim]")
            if question.get("subtitle"):
                console.print(f"[dim]{question['subtitle']}[/dim]")

        if step == Step.WELCOME:
            console.input("[dim]Press Enter to get started[/dim] ")
            await session.advance()

        elif step == Step.CAMERA:
            if photo is not None:
                image = base64.b64encode(photo.read_bytes()).decode()
                console.print(f"[dim]Scanning {photo.name} in the background...[/dim]")
                await session.capture_photo(image)
            else:
                await session.skip_camera()

        elif step == Step.INGREDIENTS:
            raw = console.input(f"[dim]('{BACK}' to go back)[/dim] ").strip()
            if raw.lower() == BACK:
                session.retreat()
                continue
            session.set_text("ingredients", raw)
            with console.status("Finding something that feels just right..."):
                await session.advance()

        elif step == Step.RECOMMENDATIONS:
            _render_suggestions(session)
            choice = console.input("\n[bold](m)[/bold]ore ideas, [bold](r)[/bold]estart, [bold](q)[/bold]uit: ").strip().lower()
            if choice == "m":
                with console.status("Cooking up more ideas..."):
                    await session.show_more()
            elif choice == "r":
                session.restart()
            elif choice in ("q", "quit", "exit"):
                console.print("\n[dim]Enjoy your meal! 👋[/dim]")
                return

        else:
            if not _ask_multi_select(session, step):
                session.retreat()
                continue
            if not session.sequencer.can_advance(session.answers):
                console.print("[yellow]Pick at least one option to continue.[/yellow]")
                continue
            await session.advance()


@app.command()
def wizard(
    api_url: str = typer.Option(None, "--api-url", help="Use a deployed MealVibe API instead of calling OpenAI directly"),
    photo: Path = typer.Option(None, "--photo", help="Fridge photo (JPEG) to scan", exists=True, dir_okay=False),
    no_camera: bool = typer.Option(False, "--no-camera", help="Leave out the fridge photo step"),
    log_prompts: bool = typer.Option(False, "--log-prompts", "-l", help="Log all LLM prompts to prompt_logs/"),
) -> None:
    """Walk through the questions and get three meal ideas."""
    from mealvibe.config import settings
    from mealvibe.llm.prompt_logger import enable_prompt_logging

    _configure_logging(settings.log_level)

    if log_prompts or settings.mealvibe_log_prompts:
        enable_prompt_logging(True)
        console.print("[dim]📝 Prompt logging enabled. Check prompt_logs/ after the session.[/dim]")

    console.print(
        Panel.fit(
            "[bold magenta]MealVibe[/bold magenta]\n"
            "No more staring into the fridge feeling uninspired.\n\n"
            "[dim]Press Ctrl+C to quit at any time.[/dim]",
            title="Welcome",
            border_style="magenta",
        )
    )

    include_camera = settings.include_camera_step and not no_camera
    session = _build_session(api_url or settings.api_base_url, include_camera)

    try:
        asyncio.run(_run_wizard(session, photo))
    except KeyboardInterrupt:
        console.print("\n\n[dim]Session interrupted. Goodbye! 👋[/dim]")


@app.command()
def serve(
    port: int = typer.Option(8000, "--port", "-p", help="Port to run on"),
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable auto-reload for development"),
) -> None:
    """Start the API server."""
    import os

    import uvicorn

    actual_port = int(os.environ.get("PORT", port))

    console.print("\n[bold magenta]MealVibe API[/bold magenta]")
    console.print(f"Starting server on http://localhost:{actual_port}")
    console.print("[dim]Press Ctrl+C to stop[/dim]\n")

    uvicorn.run(
        "mealvibe.web.app:app",
        host="0.0.0.0",
        port=actual_port,
        reload=reload,
    )


@app.command()
def health() -> None:
    """Check configuration."""
    from mealvibe.config import settings

    console.print("\n[bold]MealVibe Health Check[/bold]\n")

    try:
        console.print("[green]OK[/green] Configuration loaded")
        console.print(f"   Environment: {settings.mealvibe_env}")
        console.print(f"   Log level: {settings.log_level}")
        console.print(f"   Auth backend: {settings.auth_backend}")
        console.print(f"   Recommendation model: {settings.recommendation_model}")
        console.print(f"   Vision model: {settings.vision_model}")
        console.print(f"   Camera step: {'on' if settings.include_camera_step else 'off'}")
    except Exception as e:
        console.print(f"[red]FAIL[/red] Configuration error: {e}")
        raise typer.Exit(1)

    if settings.auth_backend == "supabase":
        try:
            from mealvibe.db.client import get_service_client

            get_service_client().table("profiles").select("id").limit(1).execute()
            console.print("[green]OK[/green] Supabase profiles table reachable")
        except Exception as e:
            console.print(f"[red]FAIL[/red] Supabase: {e}")
            raise typer.Exit(1)

    console.print("\n[green]All checks passed![/green]")


@app.command()
def version() -> None:
    """Show version information."""
    from mealvibe import __version__

    console.print(f"MealVibe version {__version__}")


if __name__ == "__main__":
    app()
