import click
from core.sa.database import Database

@click.group()
def db():
    """Database commands"""
    pass

@db.command()
@click.option('--database-url', default=None, help='Database URL (defaults to DATABASE_URL)')
def init(database_url):
    """Create all tables that do not exist yet"""
    database = Database(database_url)
    database.init_db()
    click.echo(click.style("Database initialized", fg='green'))
