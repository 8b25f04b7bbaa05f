# Journal_app/cli.py

import click
from flask import current_app
from werkzeug.security import generate_password_hash

from .storage import get_storage


def register_cli(app):

    @app.cli.command('hash-password')
    @click.argument('password')
    def hash_password(password):
        """Print a password hash suitable for seeding a user row."""
        click.echo(generate_password_hash(password))

    @app.cli.command('create-user')
    @click.argument('username')
    @click.password_option()
    @click.option('--name', default=None)
    @click.option('--email', default=None)
    def create_user(username, password, name, email):
        """Create a journal user."""
        storage = get_storage()
        if storage.get_user_by_username(username):
            raise click.ClickException(f"Username already exists: {username}")
        user = storage.create_user(username, generate_password_hash(password), name=name, email=email)
        current_app.logger.info("User created from CLI", extra={'user_id': user.id})
        click.echo(f"Created user {user.username} (id={user.id})")
