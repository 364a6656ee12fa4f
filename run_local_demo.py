# run_local_demo.py
import mimetypes
import os
import sys

# Local backends unless the environment says otherwise; the data store is
# mirrored to disk so separate commands see each other's records.
os.environ.setdefault("LMS_ENV", "local")
os.environ.setdefault("DATASTORE_LOCAL_DIR", "./local_data")

import click

from config.logging_config import configure_logging
from config.models import Collections, Lesson, Profile, SelectedFile, SubmissionRequest, UserRole
from services.app import LMSApp, build_app
from services.errors import LMSError

logger = configure_logging()


SAMPLE_LESSON = {
    "id": "lesson-1",
    "title": "Introduction to Photosynthesis",
    "content": "Plants convert light energy, water and carbon dioxide into glucose and oxygen.",
}

SAMPLE_QUIZ = {
    "id": "quiz-1",
    "lesson_id": "lesson-1",
    "title": "Photosynthesis Basics",
    "questions_json": [
        {"question": "Which gas do plants absorb?", "options": ["Oxygen", "Carbon dioxide", "Nitrogen"], "correct_answer": 1},
        {"question": "Where does photosynthesis happen?", "options": ["Mitochondria", "Nucleus", "Chloroplast"], "correct_answer": 2},
        {"question": "What is produced besides oxygen?", "options": ["Glucose", "Salt"], "correct_answer": 0},
    ],
}

SAMPLE_PROFILES = [
    Profile(id="teacher-1", full_name="Ada Teacher", role=UserRole.TEACHER, email="ada@example.edu"),
    Profile(id="student-1", full_name="Jane Doe", role=UserRole.STUDENT, email="jane@example.edu"),
]


def _sign_in(app: LMSApp, user_id: str) -> Profile:
    profile = app.session.load_profile(user_id)
    if profile is None:
        raise click.ClickException(f"No profile for user {user_id}; run 'seed' first.")
    app.session.sign_in(profile)
    return profile


@click.group()
@click.pass_context
def cli(ctx):
    """LMS core local demo."""
    ctx.obj = build_app()


@cli.command()
@click.pass_obj
def seed(app: LMSApp):
    """Insert sample profiles, a lesson and a quiz."""
    for profile in SAMPLE_PROFILES:
        app.datastore.insert(Collections.PROFILES, profile.model_dump(mode="json"))
    app.datastore.insert(Collections.LESSONS, Lesson(**SAMPLE_LESSON).model_dump(mode="json"))
    app.datastore.insert(Collections.QUIZZES, SAMPLE_QUIZ)
    click.echo("✅ Seeded 2 profiles, 1 lesson and 1 quiz.")


@cli.command("take-quiz")
@click.argument("quiz_id")
@click.option("--user", "user_id", default="student-1", show_default=True)
@click.option("--answers", required=True, help="Comma-separated option indexes, e.g. 1,2,0")
@click.option("--hint", is_flag=True, help="Ask for a hint on every question.")
@click.pass_obj
def take_quiz(app: LMSApp, quiz_id: str, user_id: str, answers: str, hint: bool):
    """Answer a quiz non-interactively and print the result."""
    _sign_in(app, user_id)
    try:
        session = app.start_quiz(quiz_id)
        for raw in answers.split(","):
            question = session.current_question
            click.echo(f"Q{session.engine.current_index + 1}: {question.prompt}")
            if hint:
                click.echo(f"   AI Hint: {session.request_hint()}")
            session.select_answer(int(raw))
            session.next_question()
            if session.is_finished:
                break
        result = session.result()
    except (LMSError, ValueError) as e:
        click.echo(f"❌ Quiz failed: {e}", err=True)
        sys.exit(1)

    click.echo(f"Score: {result.score} / {result.total} ({result.percentage}%)")


@cli.command()
@click.argument("lesson_id")
@click.argument("question")
@click.pass_obj
def ask(app: LMSApp, lesson_id: str, question: str):
    """Ask the AI tutor about a lesson."""
    try:
        tutor = app.open_tutor(lesson_id)
    except LMSError as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)
    click.echo(tutor.ask(question))


@cli.command()
@click.argument("activity_name")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--user", "user_id", default="student-1", show_default=True)
@click.pass_obj
def submit(app: LMSApp, activity_name: str, path: str, user_id: str):
    """Upload a file as an activity submission."""
    profile = _sign_in(app, user_id)
    with open(path, "rb") as f:
        content = f.read()
    request = SubmissionRequest(
        owner_display_name=profile.full_name,
        activity_name=activity_name,
        selected_file=SelectedFile.from_bytes(os.path.basename(path), content, mimetypes.guess_type(path)[0]),
    )

    click.echo(f"Auto-named: {app.recorder.preview_name(profile.full_name, activity_name, request.selected_file.name)}")
    try:
        record = app.recorder.submit_request(profile.id, request)
    except LMSError as e:
        click.echo(f"❌ Upload failed: {e}", err=True)
        sys.exit(1)

    click.echo(f"✅ Submission {record.id} stored at {record.external_file_location}")


@cli.command()
@click.option("--user", "user_id", default="teacher-1", show_default=True)
@click.option("--search", default="", help="Filter on student or activity name.")
@click.option("--csv", "as_csv", is_flag=True, help="Print CSV instead of a table.")
@click.pass_obj
def gradebook(app: LMSApp, user_id: str, search: str, as_csv: bool):
    """List submissions (teachers only)."""
    _sign_in(app, user_id)
    try:
        rows = app.gradebook.list_submissions(search)
    except LMSError as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)

    if as_csv:
        click.echo(app.gradebook.export_csv(rows), nl=False)
        return

    if not rows:
        click.echo("No submissions found matching the criteria.")
    for row in rows:
        click.echo(
            f"{row.student_name:<20} {row.submission.activity_name:<25} "
            f"{row.submission.created_at:%Y-%m-%d}  {row.submission.external_file_location}"
        )


if __name__ == "__main__":
    cli()
