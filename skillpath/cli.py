"""
skillpath CLI - generate learning content from the terminal.

Usage:
    skillpath flashcards "React Hooks" -n 5
    skillpath quiz "SQL joins" -n 10 --content notes.md
    skillpath module-quiz "Binary Search Trees"
    skillpath module "Binary Search Trees" --detailed
    skillpath path "UX Design" --career
    skillpath careers --name Ada --goal "Data Engineer" -s Python -i Databases
    skillpath chat "What is a closure?" --topic JavaScript
    skillpath profile --name Ada --goal "Data Engineer" -s Python -i Databases
    skillpath complete PATH_ID 2
    skillpath summary PATH_ID

Every generation command accepts --json for machine-readable output.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Annotated, Any, TypeVar

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from config import get_settings
from skillpath.exceptions import (
    ConfigurationError,
    GenerationExhaustedError,
    InvalidInputError,
    SkillpathError,
)
from skillpath.generation import (
    ChatContext,
    ChatGenerator,
    ModuleContentGenerator,
    PathGenerator,
    StudyGenerator,
)
from skillpath.log_config import configure_logging
from skillpath.models import UserProfile
from skillpath.progress import mark_module_complete, summarize_career
from skillpath.providers.adapter import CompletionAdapter, build_adapter
from skillpath.store import SqlDocumentStore, StaticIdentity
from skillpath.workflows import create_profile_with_paths

T = TypeVar("T")

# =============================================================================
# CLI Setup
# =============================================================================

app = typer.Typer(
    name="skillpath",
    help="skillpath - LLM-generated flashcards, quizzes, lessons and learning paths",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

JsonOption = Annotated[bool, typer.Option("--json", help="Print raw JSON instead of tables")]


@app.callback()
def main_callback(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show provider attempts and retries")] = False,
) -> None:
    configure_logging(get_settings(), level="DEBUG" if verbose else "WARNING")


def _generate(operation: Callable[[CompletionAdapter], Awaitable[T]]) -> T:
    """Run one generation against a fresh adapter, mapping errors to exit codes."""

    async def runner() -> T:
        adapter = build_adapter(get_settings())
        try:
            return await operation(adapter)
        finally:
            await adapter.aclose()

    try:
        return asyncio.run(runner())
    except ConfigurationError as e:
        console.print(f"[red]Configuration error:[/] {e.message}")
        raise typer.Exit(2)
    except (InvalidInputError, GenerationExhaustedError) as e:
        console.print(f"[red]{e.message}[/]")
        raise typer.Exit(1)


def _print_json(data: Any) -> None:
    console.print_json(json.dumps(data))


# =============================================================================
# Study Commands
# =============================================================================


@app.command()
def flashcards(
    topic: Annotated[str, typer.Argument(help="Flashcard topic")],
    count: Annotated[int, typer.Option("--count", "-n", help="Number of cards")] = 5,
    as_json: JsonOption = False,
) -> None:
    """Generate flashcards with increasing difficulty."""
    cards = _generate(lambda adapter: StudyGenerator(adapter).generate_flashcards(topic, count))

    if as_json:
        _print_json([card.to_dict() for card in cards])
        return

    table = Table(title=f"Flashcards: {topic}")
    table.add_column("#", style="dim", width=3)
    table.add_column("Front", style="cyan")
    table.add_column("Back")
    for card in cards:
        table.add_row(str(card.id), card.front_html, card.back_html)
    console.print(table)


@app.command()
def quiz(
    topic: Annotated[str, typer.Argument(help="Quiz topic")],
    count: Annotated[int, typer.Option("--count", "-n", help="Number of questions")] = 5,
    content: Annotated[
        Path | None, typer.Option("--content", "-c", help="Text file used as grounding material")
    ] = None,
    as_json: JsonOption = False,
) -> None:
    """Generate a mixed single/multiple-choice quiz."""
    if content is not None and not content.exists():
        console.print(f"[red]File not found: {content}[/]")
        raise typer.Exit(1)
    grounding = content.read_text(encoding="utf-8") if content else None

    result = _generate(lambda adapter: StudyGenerator(adapter).generate_quiz_data(topic, count, grounding))

    if as_json:
        _print_json(result.to_dict())
        return

    for number, question in enumerate(result.questions, start=1):
        console.print(f"\n[bold]{number}. {question.question}[/] [dim]({question.question_type})[/]")
        for answer in question.answers:
            marker = "[green]✓[/]" if answer in question.correct_answers else " "
            console.print(f"   {marker} {answer}")
        if question.explanation:
            console.print(f"   [dim]{question.explanation}[/]")


@app.command("module-quiz")
def module_quiz(
    module_name: Annotated[str, typer.Argument(help="Module title")],
    as_json: JsonOption = False,
) -> None:
    """Generate the five-question quiz for a module."""
    result = _generate(lambda adapter: StudyGenerator(adapter).generate_quiz(module_name))

    if as_json:
        _print_json(result.to_dict())
        return

    for number, question in enumerate(result.questions, start=1):
        console.print(f"\n[bold]{number}. {question.question}[/]")
        for index, option in enumerate(question.options):
            marker = "[green]✓[/]" if index == question.correct_index else " "
            console.print(f"   {marker} {chr(ord('a') + index)}) {option}")


@app.command()
def module(
    module_name: Annotated[str, typer.Argument(help="Module title or topic")],
    detailed: Annotated[bool, typer.Option("--detailed", "-d", help="Four advanced sections")] = False,
    as_json: JsonOption = False,
) -> None:
    """Generate lesson content for a module."""
    content = _generate(lambda adapter: ModuleContentGenerator(adapter).generate(module_name, detailed=detailed))

    if as_json:
        _print_json(content.to_dict())
        return

    console.print(Panel(f"[bold cyan]{content.title}[/]\nType: {content.type}", border_style="cyan"))
    for section in content.sections:
        console.print(f"\n[bold]{section.title}[/]")
        console.print(section.content)
        for point in section.key_points:
            console.print(f"  • {point}")
        if section.code_example:
            console.print(f"\n[dim]{section.code_example.language}[/]")
            console.print(section.code_example.code)


# =============================================================================
# Path Commands
# =============================================================================


@app.command()
def path(
    goal: Annotated[str, typer.Argument(help="Topic or career goal")],
    career: Annotated[bool, typer.Option("--career", help="Rich career modules instead of titles")] = False,
    detailed: Annotated[bool, typer.Option("--detailed", "-d", help="Detailed module content")] = False,
    as_json: JsonOption = False,
) -> None:
    """Generate a learning path."""
    path_type = "career" if career else "topic"
    modules = _generate(
        lambda adapter: PathGenerator(adapter).generate_learning_path(goal, type=path_type, detailed=detailed)
    )

    if as_json:
        _print_json([m if isinstance(m, str) else m.to_dict() for m in modules])
        return

    table = Table(title=f"Learning path: {goal}")
    if career:
        table.add_column("Module", style="cyan")
        table.add_column("Time", style="dim")
        table.add_column("Description")
        for item in modules:
            table.add_row(item.title, item.estimated_time, item.description)
    else:
        table.add_column("Module", style="cyan")
        for item in modules:
            table.add_row(item)
    console.print(table)


def _profile(name: str, goal: str, skills: list[str] | None, interests: list[str] | None) -> UserProfile:
    return UserProfile(name=name, goal=goal, skills=skills or [], interests=interests or [])


@app.command()
def careers(
    goal: Annotated[str, typer.Option("--goal", "-g", help="Career goal")],
    name: Annotated[str, typer.Option("--name", help="Learner name")] = "Learner",
    skill: Annotated[list[str] | None, typer.Option("--skill", "-s", help="Current skill (repeatable)")] = None,
    interest: Annotated[list[str] | None, typer.Option("--interest", "-i", help="Interest (repeatable)")] = None,
    as_json: JsonOption = False,
) -> None:
    """Suggest four personalized career paths."""
    profile = _profile(name, goal, skill, interest)
    paths = _generate(lambda adapter: PathGenerator(adapter).generate_career_paths(profile))

    if as_json:
        _print_json([career_path.to_dict() for career_path in paths])
        return

    table = Table(title=f"Career paths for {profile.name}")
    table.add_column("Path", style="cyan")
    table.add_column("Difficulty")
    table.add_column("Time")
    table.add_column("Relevance", justify="right")
    table.add_column("Modules", justify="right")
    for career_path in paths:
        table.add_row(
            career_path.path_name,
            career_path.difficulty,
            career_path.estimated_time_to_complete,
            f"{career_path.relevance_score}%",
            str(len(career_path.modules)),
        )
    console.print(table)


@app.command()
def chat(
    message: Annotated[str, typer.Argument(help="Question for the assistant")],
    topic: Annotated[str | None, typer.Option("--topic", help="Conversation topic")] = None,
    level: Annotated[str | None, typer.Option("--level", help="Beginner/Intermediate/Advanced")] = None,
    focus: Annotated[str | None, typer.Option("--focus", help="Aspect to focus on")] = None,
    as_json: JsonOption = False,
) -> None:
    """Ask the learning assistant a question."""
    context = ChatContext(topic=topic, level=level, focus=focus)
    reply = _generate(lambda adapter: ChatGenerator(adapter).generate_chat_response(message, context))

    if as_json:
        _print_json({"response": reply})
        return
    console.print(reply)


# =============================================================================
# Profile & Progress Commands
# =============================================================================


@app.command()
def profile(
    goal: Annotated[str, typer.Option("--goal", "-g", help="Career goal")],
    name: Annotated[str, typer.Option("--name", help="Learner name")] = "Learner",
    skill: Annotated[list[str] | None, typer.Option("--skill", "-s", help="Current skill (repeatable)")] = None,
    interest: Annotated[list[str] | None, typer.Option("--interest", "-i", help="Interest (repeatable)")] = None,
    user_id: Annotated[str, typer.Option("--user-id", help="Identity to store the profile under")] = "local-user",
) -> None:
    """Create a profile and store its four generated career paths."""
    learner = _profile(name, goal, skill, interest)
    settings = get_settings()
    store = SqlDocumentStore(settings.database_url)
    identity = StaticIdentity(user_id=user_id, name=name)

    result = _generate(
        lambda adapter: create_profile_with_paths(
            learner,
            store,
            identity,
            PathGenerator(adapter),
            users_collection=settings.users_collection,
            paths_collection=settings.career_paths_collection,
        )
    )

    console.print(f"[green]Profile stored as {result.user['id']}[/]")
    table = Table(title="Stored career paths")
    table.add_column("ID", style="dim")
    table.add_column("Path", style="cyan")
    table.add_column("Modules", justify="right")
    for record in result.career_paths:
        table.add_row(record["id"], record["careerName"], str(len(record["modules"])))
    console.print(table)


@app.command()
def complete(
    path_id: Annotated[str, typer.Argument(help="Stored career path id")],
    module_index: Annotated[int, typer.Argument(help="0-based module index")],
) -> None:
    """Mark a module of a stored career path as completed."""
    settings = get_settings()
    store = SqlDocumentStore(settings.database_url)
    try:
        record = asyncio.run(
            mark_module_complete(store, path_id, module_index, collection=settings.career_paths_collection)
        )
    except SkillpathError as e:
        console.print(f"[red]{e.message}[/]")
        raise typer.Exit(1)
    console.print(f"[green]Progress: {record['progress']}%[/]")


@app.command()
def summary(
    path_id: Annotated[str, typer.Argument(help="Stored career path id")],
    as_json: JsonOption = False,
) -> None:
    """Show the career summary for a stored path."""
    settings = get_settings()
    store = SqlDocumentStore(settings.database_url)
    try:
        record = asyncio.run(store.get_document(settings.career_paths_collection, path_id))
    except SkillpathError as e:
        console.print(f"[red]{e.message}[/]")
        raise typer.Exit(1)

    result = summarize_career(record)
    if as_json:
        _print_json(result.to_dict())
        return

    console.print(
        Panel(
            f"[bold cyan]{result.career_name}[/]\n"
            f"Readiness: {result.readiness}%\n"
            f"Modules: {result.completed_modules}/{result.total_modules}\n"
            f"Time spent: {result.time_spent_hours} hrs",
            border_style="cyan",
        )
    )
    for suggestion in result.suggestions:
        console.print(f"  • {suggestion}")


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
