import json

import click
from flask.cli import with_appcontext

from bookwise.extensions import db
from bookwise.models.book import Book
from bookwise.repositories.book_repo import BookRepo
from bookwise.repositories.unit_of_work import unit_of_work

BOOK_FIELDS = (
    "title", "author", "genre", "rating", "description", "summary",
    "cover_url", "cover_color", "video_url", "content",
)


def book_from_entry(entry: dict) -> Book:
    total = int(entry.get("total_copies", 1))
    available = int(entry.get("available_copies", total))
    # tutarlılık
    total = max(total, 0)
    available = min(max(available, 0), total)
    return Book(
        **{k: entry[k] for k in BOOK_FIELDS if k in entry},
        total_copies=total,
        available_copies=available,
    )


@click.command("init-db")
@with_appcontext
def init_db_command():
    """Tabloları oluşturur."""
    db.create_all()
    click.echo("Database tables created.")


@click.command("seed-books")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@with_appcontext
def seed_books_command(path):
    """JSON listesinden kitap kataloğu yükler."""
    with open(path, "r", encoding="utf-8") as f:
        entries = json.load(f)

    with unit_of_work("seed"):
        for entry in entries:
            BookRepo.add(book_from_entry(entry))

    click.echo(f"Seeded {len(entries)} books.")


def register_commands(app):
    app.cli.add_command(init_db_command)
    app.cli.add_command(seed_books_command)
