from concurrent.futures import ThreadPoolExecutor

import click
from core.errors import BookFriendsError
from core.sa.database import Database
from core.services.collection_service import CollectionManager
from core.utils.http import BookMetadataClient

@click.group()
def collection():
    """Commands for the books stored in users' collections"""
    pass

def _run(database_url, action):
    database = Database(database_url)
    try:
        # Leaving the executor block waits for the book cache write-back
        with database.get_db() as session, ThreadPoolExecutor(max_workers=1) as executor:
            manager = CollectionManager.from_session(
                session,
                provider=BookMetadataClient(),
                session_factory=database.get_session,
                executor=executor
            )
            return action(manager)
    except BookFriendsError as e:
        click.echo(click.style(f"Error: {e}", fg='red'), err=True)
        raise SystemExit(1)

@collection.command()
@click.argument('user_id')
@click.argument('isbn')
@click.option('--database-url', default=None, help='Database URL (defaults to DATABASE_URL)')
def add(user_id: str, isbn: str, database_url):
    """Store a book in a user's collection"""
    _run(database_url, lambda manager: manager.add_to_collection(user_id, isbn))
    click.echo(click.style(f"Stored {isbn} for user {user_id}", fg='green'))

@collection.command()
@click.argument('user_id')
@click.argument('isbn')
@click.option('--database-url', default=None, help='Database URL (defaults to DATABASE_URL)')
def remove(user_id: str, isbn: str, database_url):
    """Remove a book from a user's collection"""
    _run(database_url, lambda manager: manager.remove_from_collection(user_id, isbn))
    click.echo(click.style(f"Removed {isbn} for user {user_id}", fg='green'))

@collection.command(name='list')
@click.argument('user_id')
@click.option('--database-url', default=None, help='Database URL (defaults to DATABASE_URL)')
def list_books(user_id: str, database_url):
    """List the books in a user's collection"""
    books = _run(database_url, lambda manager: manager.list_collection(user_id))
    if not books:
        click.echo("No books stored")
        return
    for book in books:
        author = f" by {book.author}" if book.author else ""
        click.echo(f"{click.style(book.isbn, fg='cyan')}  {book.title}{author}")
