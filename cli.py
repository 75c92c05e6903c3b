import typer

app = typer.Typer()


@app.command()
def create_admin_user(
    role: str = typer.Option("moderator", help="admin, moderator, vendor or vendor_moderator"),
    vendor_id: str = typer.Option(None, help="vendor account id, vendor_moderator only"),
):
    from models import factory_session
    from models.AdminUser import AdminRole
    from repository.admin_user import create_admin_user as insert_admin_user
    from core.security import generate_hash_password

    try:
        admin_role = AdminRole(role)
    except ValueError:
        raise typer.BadParameter(f"unknown role {role}")
    if admin_role == AdminRole.VENDOR_MODERATOR and not vendor_id:
        raise typer.BadParameter("vendor_moderator needs --vendor-id")

    email = typer.prompt("email")
    password = typer.prompt("password", hide_input=True, confirmation_prompt=True)

    with factory_session() as db:
        admin = insert_admin_user(
            db=db,
            email=email,
            password=generate_hash_password(password),
            role=admin_role,
            vendor_id=vendor_id,
            is_commit=True,
        )
        typer.echo(f"created {admin.role} {admin.email} ({admin.id})")


@app.command()
def checkin_example_data():
    from models import factory_session
    from seeders.initial_checkin_data import initialize_checkin_data

    with factory_session() as session:
        initialize_checkin_data(db=session)


if __name__ == "__main__":
    app()
