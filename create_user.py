import click

from kpi_tracker import create_app, db
from kpi_tracker.models.user import User, ROLES, ROLE_ADMIN


@click.command()
@click.option("--email", required=True, help="Login email of the new account.")
@click.option("--name", default="Administrator", show_default=True)
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
@click.option("--role", type=click.Choice(ROLES), default=ROLE_ADMIN, show_default=True)
def create_user(email, name, password, role):
    """Create the first account so somebody can log in and manage the rest."""
    app = create_app()
    with app.app_context():
        email = email.strip().lower()

        # Do nothing if the email is already taken
        if User.query.filter_by(email=email).first():
            click.echo(f"User with email '{email}' already exists.")
            return

        user = User(email=email, name=name, role=role)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()

        click.echo(f"{role.capitalize()} created successfully! (id={user.id}, email={email})")


if __name__ == "__main__":
    create_user()
