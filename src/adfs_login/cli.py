"""Command-line interface for ADFS IdP-initiated sign-on."""
from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from .client import AdfsClient
from .cli_schema import SETTINGS_VIEW, TableView, settings_rows
from .config import ClientConfig
from .exceptions import AdfsLoginError, CredentialsError
from .settings import DEFAULT_SETTINGS_PATH, resolve_settings

app = typer.Typer(help="ADFS IdP-initiated sign-on CLI.", no_args_is_help=True)

console = Console(force_terminal=False, color_system=None)


def _shared_options() -> dict[str, Any]:  # pragma: no cover - helper indirection
    return {
        "hostname": typer.Option(
            None, "--host", help="Identity provider host (scheme optional, https assumed)."
        ),
        "username": typer.Option(None, "--username", "-u", help="Login username."),
        "password": typer.Option(
            None, "--password", "-p", help="Login password.", hide_input=True
        ),
        "config_path": typer.Option(
            DEFAULT_SETTINGS_PATH,
            "--config",
            envvar="ADFS_CONFIG",
            help="Path to an ini file with a [default] section (user, pass, host).",
        ),
        "prompt": typer.Option(
            True,
            "--prompt/--no-prompt",
            help="Prompt for credential values that are still missing.",
            show_default=True,
        ),
        "verbose": typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    }


_SHARED_OPTIONS = _shared_options()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _build_client(
    verify_ssl: bool,
    cert_path: Path | None,
    timeout: float,
) -> AdfsClient:
    verify_target: bool | str
    if cert_path:
        expanded_cert = cert_path.expanduser()
        if not expanded_cert.exists():
            raise typer.BadParameter("Certificate file not found for --cert option.")
        if not verify_ssl:
            raise typer.BadParameter("Cannot combine --cert with --no-verify.")
        verify_target = str(expanded_cert)
    else:
        verify_target = verify_ssl

    config = ClientConfig(verify_ssl=verify_target, timeout=timeout if timeout > 0 else None)
    return AdfsClient(config=config)


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2))


def _render_rich_table(view: TableView, rows: Sequence[Mapping[str, Any]]) -> None:
    table = Table(
        title=view.title,
        box=box.SIMPLE,
        show_lines=False,
        header_style="bold cyan",
    )
    for column in view.columns:
        table.add_column(column.header, justify=column.justify)
    for row in rows:
        table.add_row(*(column.render(row) for column in view.columns))
    console.print(table)


def _handle_error(exc: AdfsLoginError) -> None:
    message = f"Login failed: {exc}"
    if exc.status_code is not None:
        message = f"Login failed (status {exc.status_code}): {exc}"
    typer.secho(message, err=True, fg=typer.colors.RED)
    raise typer.Exit(code=1)


@app.command("login")
def login(
    hostname: str | None = _SHARED_OPTIONS["hostname"],
    username: str | None = _SHARED_OPTIONS["username"],
    password: str | None = _SHARED_OPTIONS["password"],
    config_path: Path = _SHARED_OPTIONS["config_path"],
    prompt: bool = _SHARED_OPTIONS["prompt"],
    verbose: bool = _SHARED_OPTIONS["verbose"],
    verify_ssl: bool = typer.Option(
        True,
        "--verify/--no-verify",
        envvar="ADFS_VERIFY_SSL",
        help="Enable or disable TLS certificate verification.",
        show_default=True,
    ),
    cert_path: Path | None = typer.Option(
        None,
        "--cert",
        envvar="ADFS_CA_CERT",
        help="Path to a custom CA bundle for TLS verification.",
    ),
    timeout: float = typer.Option(
        30.0, help="Request timeout in seconds (0 disables).", show_default=True
    ),
    output_json: bool = typer.Option(
        False, "--json", "-j", help="Print the assertion wrapped in a JSON object."
    ),
) -> None:
    """Sign in to the identity provider and print the base64 SAML assertion."""

    _configure_logging(verbose)
    try:
        credentials = resolve_settings(
            username=username,
            password=password,
            hostname=hostname,
            settings_path=config_path,
            interactive=prompt,
        ).to_credentials()
    except CredentialsError as exc:
        _handle_error(exc)
        return

    with _build_client(verify_ssl, cert_path, timeout) as client:
        try:
            assertion = client.login(credentials)
        except AdfsLoginError as exc:
            _handle_error(exc)
            return

    if output_json:
        _echo_json({"hostname": credentials.hostname, "assertion": assertion})
    else:
        typer.echo(assertion)


@app.command("settings")
def show_settings(
    hostname: str | None = _SHARED_OPTIONS["hostname"],
    username: str | None = _SHARED_OPTIONS["username"],
    password: str | None = _SHARED_OPTIONS["password"],
    config_path: Path = _SHARED_OPTIONS["config_path"],
    verbose: bool = _SHARED_OPTIONS["verbose"],
) -> None:
    """Show the resolved credential settings and where each value came from."""

    _configure_logging(verbose)
    try:
        resolved = resolve_settings(
            username=username,
            password=password,
            hostname=hostname,
            settings_path=config_path,
            interactive=False,
        )
    except CredentialsError as exc:
        _handle_error(exc)
        return
    _render_rich_table(SETTINGS_VIEW, settings_rows(resolved.values, resolved.sources))


if __name__ == "__main__":  # pragma: no cover
    app()
