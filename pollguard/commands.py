import click

from .extensions import db
from .models.user import User


def register_commands(app):
    @app.cli.command("set-role")
    @click.argument("email")
    @click.argument("role", type=click.Choice(User.ROLES))
    def set_role(email, role):
        """Grant or revoke the admin role; roles are never self-assigned."""
        user = User.query.filter_by(email=email.lower().strip()).first()
        if not user:
            raise click.ClickException(f"No user with email {email}")
        user.role = role
        db.session.commit()
        click.echo(f"{user.email} is now {role}")
