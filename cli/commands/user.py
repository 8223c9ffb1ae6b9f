import click
from core.errors import BookFriendsError
from core.sa.database import Database
from core.sa.repositories.user import UserRepository
from core.services.user_service import UserService

@click.group()
def user():
    """User related commands"""
    pass

@user.command()
@click.argument('phone_number')
@click.argument('nick_name')
@click.password_option()
@click.option('--database-url', default=None, help='Database URL (defaults to DATABASE_URL)')
def register(phone_number: str, nick_name: str, password: str, database_url):
    """Register a new user

    Example:
        cli user register 13800000000 reader
    """
    database = Database(database_url)
    try:
        with database.get_db() as session:
            new_user = UserService(UserRepository(session)).register(phone_number, password, nick_name)
            click.echo("Successfully registered user:")
            click.echo(f"  ID: {new_user.id}")
            click.echo(f"  Nick name: {new_user.nick_name}")
    except BookFriendsError as e:
        click.echo(click.style(f"Error registering user: {e}", fg='red'), err=True)
        raise SystemExit(1)
