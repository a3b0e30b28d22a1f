"""sftpadmin CLI - Main commands."""
from datetime import datetime
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from sftpadmin import AdminClient, APIConfig, BasicAuth, SftpAdminError, StatusCodeError, User

app = typer.Typer(
    name="sftpadmin",
    help="SFTP server administration CLI",
    add_completion=False
)
console = Console()

_state = {'config': APIConfig.default()}


def format_timestamp(ms: int) -> str:
    """Formats a unix timestamp in milliseconds, 0 as '-'."""
    if not ms:
        return "-"
    return datetime.fromtimestamp(ms / 1000).strftime("%Y-%m-%d %H:%M:%S")


def get_client() -> AdminClient:
    return AdminClient(_state['config'])


def fail(error: Exception):
    """Prints an error and exits with status 1."""
    console.print(f"[red]{error}[/red]")
    if isinstance(error, StatusCodeError):
        api_error = error.api_error
        if api_error and (api_error.error or api_error.message):
            console.print(f"[red]{api_error.message} {api_error.error}[/red]")
    raise typer.Exit(1)


@app.callback()
def main(
    url: str = typer.Option(None, "--url", envvar="SFTPADMIN_BASE_URL", help="Server base URL"),
    username: str = typer.Option("", "--username", "-u", envvar="SFTPADMIN_USERNAME", help="Basic auth username"),
    password: str = typer.Option("", "--password", "-p", envvar="SFTPADMIN_PASSWORD", help="Basic auth password"),
    insecure: bool = typer.Option(False, "--insecure", "-k", help="Skip TLS certificate verification"),
):
    """Manage users, connections and backups of an SFTP server."""
    config = APIConfig.insecure() if insecure else APIConfig.default()
    if url:
        config.base_url = url
    config.auth = BasicAuth(username, password)
    _state['config'] = config


@app.command()
def version():
    """Show server version."""
    with get_client() as client:
        try:
            info = client.get_version().data
        except SftpAdminError as e:
            fail(e)
    console.print(f"Version: {info.version}")
    console.print(f"Commit: {info.commit_hash or '-'}")
    console.print(f"Build date: {info.build_date or '-'}")


@app.command()
def status():
    """Show data provider status."""
    with get_client() as client:
        try:
            result = client.get_provider_status()
        except SftpAdminError as e:
            fail(e)
    for key, value in result.data.items():
        console.print(f"{key}: {value}")


@app.command()
def users(
    limit: int = typer.Option(0, "--limit", "-l", help="Maximum number of users"),
    offset: int = typer.Option(0, "--offset", "-o", help="Users to skip"),
    username: str = typer.Option("", "--username", "-n", help="Exact username filter"),
):
    """List users."""
    with get_client() as client:
        try:
            result = client.get_users(limit, offset, username)
        except SftpAdminError as e:
            fail(e)
    
    table = Table()
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Username")
    table.add_column("Status")
    table.add_column("Home dir")
    table.add_column("Quota", justify="right")
    table.add_column("Last login", style="dim")
    
    for user in result.data:
        status_str = "[green]active[/green]" if user.status else "[red]disabled[/red]"
        quota = f"{user.used_quota_size:,}/{user.quota_size:,}" if user.quota_size else f"{user.used_quota_size:,}"
        table.add_row(str(user.id), user.username, status_str, user.home_dir,
                      quota, format_timestamp(user.last_login))
    
    console.print(table)


@app.command()
def user(user_id: int = typer.Argument(..., help="User database id")):
    """Show a user."""
    with get_client() as client:
        try:
            found = client.get_user_by_id(user_id).data
        except SftpAdminError as e:
            fail(e)
    console.print(f"ID: {found.id}")
    console.print(f"Username: {found.username}")
    console.print(f"Home dir: {found.home_dir}")
    console.print(f"UID/GID: {found.uid}/{found.gid}")
    console.print(f"Expiration: {format_timestamp(found.expiration_date)}")
    for directory, perms in sorted(found.permissions.items()):
        console.print(f"Permissions {directory}: {', '.join(perms)}")
    for folder in found.virtual_folders:
        console.print(f"Virtual folder: {folder.virtual_path} -> {folder.mapped_path}")


@app.command("rm-user")
def rm_user(user_id: int = typer.Argument(..., help="User database id")):
    """Remove a user."""
    with get_client() as client:
        try:
            client.remove_user(User(id=user_id))
        except SftpAdminError as e:
            fail(e)
    console.print(f"[green]User {user_id} removed[/green]")


@app.command("quota-scans")
def quota_scans():
    """List active quota scans."""
    with get_client() as client:
        try:
            scans = client.get_quota_scans().data
        except SftpAdminError as e:
            fail(e)
    if not scans:
        console.print("[yellow]No active quota scans[/yellow]")
        return
    for scan in scans:
        console.print(f"{scan.username} started {format_timestamp(scan.start_time)}")


@app.command()
def connections():
    """List active connections."""
    with get_client() as client:
        try:
            active = client.get_connections().data
        except SftpAdminError as e:
            fail(e)
    
    table = Table()
    table.add_column("ID", style="dim")
    table.add_column("Username", style="cyan")
    table.add_column("Protocol")
    table.add_column("Remote address")
    table.add_column("Connected")
    table.add_column("Transfers", justify="right")
    
    for conn in active:
        table.add_row(conn.connection_id, conn.username, conn.protocol, conn.remote_address,
                      format_timestamp(conn.connection_time), str(len(conn.active_transfers)))
    
    console.print(table)


@app.command("close-connection")
def close_connection(connection_id: str = typer.Argument(..., help="Connection id")):
    """Close an active connection."""
    with get_client() as client:
        try:
            client.close_connection(connection_id)
        except SftpAdminError as e:
            fail(e)
    console.print(f"[green]Connection {connection_id} closed[/green]")


@app.command()
def dump(
    output_file: str = typer.Argument(..., help="Backup file, relative to the server backups path"),
    indent: Optional[str] = typer.Option(None, "--indent", help="Set to 1 for indented JSON"),
):
    """Dump users to a backup file on the server."""
    with get_client() as client:
        try:
            result = client.dump_data(output_file, indent or "")
        except SftpAdminError as e:
            fail(e)
    console.print(f"[green]{result.data.get('message', 'Data saved')}[/green]")


@app.command()
def load(
    input_file: str = typer.Argument(..., help="Backup file on the server"),
    scan_quota: Optional[str] = typer.Option(None, "--scan-quota", help="0 no scan, 1 scan, 2 scan users with quota"),
    mode: Optional[str] = typer.Option(None, "--mode", help="0 add and update, 1 add only"),
):
    """Restore users from a backup file on the server."""
    with get_client() as client:
        try:
            result = client.load_data(input_file, scan_quota or "", mode or "")
        except SftpAdminError as e:
            fail(e)
    console.print(f"[green]{result.data.get('message', 'Data restored')}[/green]")


if __name__ == "__main__":
    app()
