from concurrent.futures import ThreadPoolExecutor

import click
from core.errors import BookFriendsError
from core.resolvers.book_resolver import BookResolver
from core.sa.database import Database
from core.utils.http import BookMetadataClient

@click.group()
def book():
    """Book related commands"""
    pass

@book.command()
@click.argument('isbn')
@click.option('--database-url', default=None, help='Database URL (defaults to DATABASE_URL)')
def resolve(isbn: str, database_url):
    """Resolve a book by ISBN, caching it if it was fetched

    Example:
        cli book resolve 9787020002207
    """
    database = Database(database_url)
    try:
        # The executor is joined before the session closes
        with database.get_db() as session, ThreadPoolExecutor(max_workers=1) as executor:
            resolver = BookResolver(
                session,
                provider=BookMetadataClient(),
                session_factory=database.get_session,
                executor=executor
            )
            book_info = resolver.resolve(isbn)
    except BookFriendsError as e:
        click.echo(click.style(f"Error resolving book: {e}", fg='red'), err=True)
        raise SystemExit(1)

    click.echo("Resolved book:")
    click.echo(f"  ISBN: {book_info.isbn}")
    click.echo(f"  Title: {book_info.title}")
    if book_info.author:
        click.echo(f"  Author(s): {book_info.author}")
    if book_info.tags:
        click.echo(f"  Tags: {', '.join(book_info.tags)}")
