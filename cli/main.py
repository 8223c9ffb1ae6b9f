# cli/main.py
import click
from core.utils.log import setup_logging
from .commands.db import db
from .commands.user import user
from .commands.collection import collection
from .commands.book import book

@click.group()
@click.option('--verbose', is_flag=True, help='Enable debug logging')
def cli(verbose: bool):
    """Book Friends CLI"""
    setup_logging('DEBUG' if verbose else None)

cli.add_command(db)
cli.add_command(user)
cli.add_command(collection)
cli.add_command(book)

def main():
    """Entry point for the CLI"""
    cli()

if __name__ == '__main__':
    main()
