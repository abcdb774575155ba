import click
from newsdesk.extensions import db
from newsdesk.domain.permissions import ROLES
from newsdesk.models.user import User
from newsdesk.utils.transaction import transactional


def register_cli(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all tables (development shortcut for `flask db upgrade`)."""
        db.create_all()
        click.echo("Database tables created")

    @app.cli.command("create-user")
    @click.option("--email", required=True)
    @click.option("--password", required=True)
    @click.option("--role", type=click.Choice(ROLES), default="contributor", show_default=True)
    @click.option("--first-name", default="")
    @click.option("--last-name", default="")
    def create_user(email, password, role, first_name, last_name):
        """Create an editorial user."""
        if User.query.filter_by(email=email.lower()).first():
            raise click.ClickException(f"User {email} already exists")

        user = User()
        user.email = email.lower()
        user.role = role
        user.first_name = first_name
        user.last_name = last_name
        user.set_password(password)

        with transactional():
            db.session.add(user)

        click.echo(f"Created {role} {user.email} ({user.id})")
