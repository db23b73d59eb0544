"""Interactive CLI application."""
import logging
import sys

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from course_player.accounts import (
    ROLE_ADMIN, ROLE_STUDENT, authenticate, has_admin, register_user, validate_credentials,
)
from course_player.cipher import hash_password
from course_player.config import Settings, load_settings
from course_player.container import read_container, write_container
from course_player.dashboard import calc_completion, get_chapter_overview, get_status_color
from course_player.db import init_db
from course_player.editor import save_chapter_edit
from course_player.engine import ProgressEngine
from course_player.errors import CourseError
from course_player.importer import read_course_document
from course_player.models import Course
from course_player.progress import SQLiteProgressStore
from course_player.quiz import MAX_ERRORS, Effect
from course_player.seed import is_seeded, seed_container

console = Console()


def show_welcome():
    console.print(Panel(
        "[bold]Course Player[/bold]\n[dim]Read the theory, pass the quiz, move on[/dim]",
        title="Welcome", border_style="blue",
    ))


def prompt_credentials() -> tuple[str, str]:
    login = Prompt.ask("Login").strip()
    password = Prompt.ask("Password", password=True)
    return login, password


def cmd_register(db_path: str) -> bool:
    login, password = prompt_credentials()
    try:
        validate_credentials(login, password)
    except CourseError as e:
        console.print(f"[red]{e}[/red]")
        return False
    # nobody can create an admin from inside the app, so the first account is one
    role = ROLE_STUDENT if has_admin(db_path) else ROLE_ADMIN
    if not register_user(db_path, login, hash_password(password), role):
        console.print("[red]Registration failed. That login may already exist.[/red]")
        return False
    console.print(f"[green]User '{login}' registered as {role}. You can log in now.[/green]")
    return True


def cmd_login(db_path: str) -> tuple[str, int] | None:
    login, password = prompt_credentials()
    if not login or not password:
        console.print("[red]Please fill in both login and password.[/red]")
        return None
    result = authenticate(db_path, login, hash_password(password))
    if result is None:
        console.print("[red]Wrong login or password.[/red]")
    return result


def show_theory(engine: ProgressEngine) -> None:
    chapter = engine.current_chapter
    console.print(Panel(
        chapter.content or "[dim]No theory for this chapter.[/dim]",
        title=f"Chapter {engine.chapter_index + 1}: {chapter.title}",
        border_style="cyan",
    ))
    if not chapter.has_quiz:
        console.print("[dim]This chapter has no quiz.[/dim]")


def run_quiz(engine: ProgressEngine) -> Effect:
    """Ask questions until the chapter is passed or failed."""
    chapter = engine.current_chapter
    chapter_number = engine.chapter_index + 1
    total = len(chapter.questions)
    while True:
        q_index = engine.quiz_state.question_index
        question = chapter.questions[q_index]
        console.print(f"\n[bold]Question {q_index + 1} of {total}:[/bold] {question.text}\n")
        for i, option in enumerate(question.options, 1):
            console.print(f"  [cyan]{i})[/cyan] {option}")
        if question.options:
            choices = [str(i) for i in range(1, len(question.options) + 1)]
            selected = int(Prompt.ask("\nYour answer", choices=choices)) - 1
        else:
            console.print("[yellow]This question has no options and cannot be answered.[/yellow]")
            selected = -1
        effect = engine.submit_answer(selected)
        if effect is Effect.CONTINUE:
            console.print("[green]Correct![/green]")
        elif effect is Effect.CLEAR_SELECTION:
            errors = engine.quiz_state.error_count
            console.print(f"[red]Wrong answer.[/red] Mistakes: {errors} of {MAX_ERRORS} allowed.")
        elif effect is Effect.CHAPTER_PASSED:
            console.print(f"[green]Test passed! Chapter {chapter_number} complete.[/green]")
            return effect
        else:
            console.print(f"[red]{MAX_ERRORS} mistakes. Study the theory again and retry.[/red]")
            return effect


def cmd_progress(db_path: str, user_id: int, course: Course) -> None:
    table = Table(title="Your Progress")
    table.add_column("#", justify="right")
    table.add_column("Chapter", style="cyan")
    table.add_column("Status")
    table.add_column("Score", justify="right")
    for row in get_chapter_overview(db_path, user_id, course):
        color = get_status_color(row["status"])
        table.add_row(
            str(row["index"] + 1),
            row["title"],
            f"[{color}]{row['status']}[/{color}]",
            "" if row["score"] is None else str(row["score"]),
        )
    console.print(table)
    console.print(f"\n  Completed: [bold]{calc_completion(db_path, user_id, course)}%[/bold]")


def run_student(db_path: str, course: Course, user_id: int) -> None:
    engine = ProgressEngine(SQLiteProgressStore(db_path), course, user_id)
    if engine.resume().course_complete:
        console.print("[green]Congratulations! You have completed the whole course.[/green]")
    while True:
        show_theory(engine)
        has_quiz = engine.current_chapter.has_quiz
        console.print(f"\n[bold]Commands:[/bold] {'quiz' if has_quiz else 'next'}, progress, quit")
        choice = Prompt.ask("[bold]>[/bold]", default="quiz" if has_quiz else "next").strip().lower()
        if choice == "quiz":
            if not engine.start_quiz():
                console.print("[yellow]There is no quiz for this chapter.[/yellow]")
                continue
            was_complete = engine.course_complete
            effect = run_quiz(engine)
            if effect is Effect.CHAPTER_PASSED and engine.course_complete and not was_complete:
                console.print("[green]Congratulations! You have completed the whole course.[/green]")
        elif choice == "next":
            if not engine.skip_empty_chapter():
                console.print("[yellow]Pass this chapter's quiz to move on.[/yellow]")
        elif choice == "progress":
            cmd_progress(db_path, user_id, course)
        elif choice in ("quit", "exit", "q"):
            return
        else:
            console.print("[red]Unknown command. Try again.[/red]")


def show_chapters(course: Course) -> None:
    table = Table(title="Course Chapters")
    table.add_column("#", justify="right")
    table.add_column("Title", style="cyan")
    table.add_column("Questions", justify="right")
    for i, chapter in enumerate(course.chapters, 1):
        table.add_row(str(i), chapter.title, str(len(chapter.questions)))
    console.print(table)


def cmd_edit(course: Course, container_path: str, key: str) -> Course:
    if course.is_empty:
        console.print("[yellow]The course has no chapters to edit.[/yellow]")
        return course
    show_chapters(course)
    choices = [str(i) for i in range(1, len(course.chapters) + 1)]
    index = int(Prompt.ask("Chapter", choices=choices)) - 1
    chapter = course.chapters[index]
    title = Prompt.ask("Title", default=chapter.title)
    content = Prompt.ask("Content [dim](blank keeps the current text)[/dim]", default="")
    updated = save_chapter_edit(course, index, title, content or chapter.content, container_path, key)
    if updated is None:
        console.print(f"[red]Changes were not saved. Check that the title is not empty and {container_path} is writable.[/red]")
        return course
    console.print(f"[green]Changes to \"{updated.chapters[index].title}\" saved.[/green]")
    return updated


def cmd_import(course: Course, container_path: str, key: str) -> Course:
    file_path = Prompt.ask("Course document (JSON or YAML)")
    imported = read_course_document(file_path)
    if imported.is_empty:
        console.print(f"[red]No chapters could be read from {file_path}[/red]")
        return course
    if not write_container(imported, container_path, key):
        console.print(f"[red]Could not write {container_path}[/red]")
        return course
    console.print(f"[green]Imported {len(imported.chapters)} chapters.[/green]")
    return imported


def run_admin(course: Course, container_path: str, key: str) -> None:
    while True:
        console.print("\n[bold]Commands:[/bold] list, edit, import, quit")
        choice = Prompt.ask("[bold]>[/bold]", default="list").strip().lower()
        if choice == "list":
            show_chapters(course)
        elif choice == "edit":
            course = cmd_edit(course, container_path, key)
        elif choice == "import":
            course = cmd_import(course, container_path, key)
        elif choice in ("quit", "exit", "q"):
            return
        else:
            console.print("[red]Unknown command. Try again.[/red]")


def start_session(settings: Settings, role: str, user_id: int) -> None:
    course = read_container(settings.container_path, settings.key)
    if role == ROLE_ADMIN:
        if course.is_empty:
            console.print("[yellow]Could not load the course data. Use 'import' to replace it.[/yellow]")
        run_admin(course, settings.container_path, settings.key)
    elif course.is_empty:
        console.print("[red]Could not load the course data.[/red]")
    else:
        run_student(settings.db_path, course, user_id)


def main():
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    init_db(settings.db_path)
    if not is_seeded(settings.container_path):
        console.print("[dim]Building course data for first use...[/dim]")
        if not seed_container(settings.source_path, settings.container_path, settings.key):
            console.print(f"[red]Could not build the course from {settings.source_path}[/red]")
            sys.exit(1)
        console.print("[green]Ready![/green]\n")

    show_welcome()

    while True:
        console.print("\n[bold]Commands:[/bold] login, register, quit")
        choice = Prompt.ask("[bold]>[/bold]", default="login").strip().lower()
        try:
            if choice == "login":
                result = cmd_login(settings.db_path)
                if result is not None:
                    role, user_id = result
                    start_session(settings, role, user_id)
            elif choice == "register":
                cmd_register(settings.db_path)
            elif choice in ("quit", "exit", "q"):
                console.print("[dim]Goodbye![/dim]")
                break
            else:
                console.print("[red]Unknown command. Try again.[/red]")
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")


if __name__ == "__main__":
    main()
