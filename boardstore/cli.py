import json

import click


@click.group()
def main() -> None:
    """Boardstore - workspace data service for boards."""


@main.command()
@click.option("--host", default=None, help="Bind host (default: from BOARDSTORE_HOST or 0.0.0.0).")
@click.option("--port", default=None, type=int, help="Bind port (default: from BOARDSTORE_PORT or 8000).")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development.")
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Start the HTTP API server."""
    import uvicorn

    from boardstore.server.settings import BoardstoreSettings

    settings = BoardstoreSettings()

    uvicorn.run(
        "boardstore.server.app:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level="warning",  # uvicorn's own logging is intercepted by loguru
    )


# ---------------------------------------------------------------------------
# Workspace administration
# ---------------------------------------------------------------------------


def _open_store():
    """Build a WorkspaceStore from BOARDSTORE_* settings, with logging set up."""
    from boardstore.server.db.engine import create_engine
    from boardstore.server.log import setup_logging
    from boardstore.server.managers.workspaces import WorkspaceStore
    from boardstore.server.settings import BoardstoreSettings

    settings = BoardstoreSettings()
    setup_logging(settings.log_level, db_type=settings.db_type)
    if not settings.database_url:
        msg = "BOARDSTORE_DATABASE_URL is not set."
        raise click.ClickException(msg)
    return WorkspaceStore.from_settings(create_engine(settings.database_url), settings)


@main.group()
def workspace() -> None:
    """Inspect and update workspaces."""


@workspace.command()
@click.argument("workspace_id")
def get(workspace_id: str) -> None:
    """Print a workspace as JSON."""
    from boardstore.server.errors import WorkspaceNotFoundError

    store = _open_store()
    try:
        ws = store.get_workspace(workspace_id)
    except WorkspaceNotFoundError:
        msg = f"Workspace '{workspace_id}' not found."
        raise click.ClickException(msg) from None
    click.echo(ws.model_dump_json(indent=2))


@workspace.command()
def count() -> None:
    """Print the number of workspaces."""
    click.echo(_open_store().get_workspace_count())


@workspace.command("list-for-user")
@click.argument("user_id")
def list_for_user(user_id: str) -> None:
    """List the workspaces USER_ID belongs to, with board counts."""
    from boardstore.server.errors import UnsupportedDatabaseError

    store = _open_store()
    try:
        workspaces = store.get_user_workspaces(user_id)
    except UnsupportedDatabaseError as exc:
        raise click.ClickException(str(exc)) from None
    for ws in workspaces:
        click.echo(f"{ws.id}\t{ws.board_count}\t{ws.title}")


@workspace.command("regenerate-token")
@click.argument("workspace_id")
@click.option("--modified-by", default="system", help="User id recorded as the modifier.")
def regenerate_token(workspace_id: str, modified_by: str) -> None:
    """Replace the signup token of WORKSPACE_ID and print the new one."""
    click.echo(_open_store().regenerate_signup_token(workspace_id, modified_by=modified_by))


@workspace.command("set-settings")
@click.argument("workspace_id")
@click.argument("settings_json")
@click.option("--modified-by", default="system", help="User id recorded as the modifier.")
def set_settings(workspace_id: str, settings_json: str, modified_by: str) -> None:
    """Replace the settings of WORKSPACE_ID with the SETTINGS_JSON document."""
    from boardstore.server.models.workspace import Workspace

    try:
        settings = json.loads(settings_json)
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON: {exc}"
        raise click.BadParameter(msg, param_hint="SETTINGS_JSON") from None

    _open_store().upsert_settings(Workspace(id=workspace_id, settings=settings, modified_by=modified_by))
    click.echo(f"Settings updated for {workspace_id}.")


if __name__ == "__main__":
    main()
