"""Obtain a refresh token for the channel owner from a local browser session."""

from __future__ import annotations

import typer
from google_auth_oauthlib.flow import InstalledAppFlow

from services.broadcaster import youtube

cli = typer.Typer(add_completion=False)


@cli.callback()
def main() -> None:
    """Setup helpers for the broadcast relay."""
    pass


@cli.command()
def run(port: int = typer.Option(0, help="Local callback port; 0 picks a free one")) -> None:
    """Run the consent flow and print the refresh token."""
    config = youtube.client_config()
    config["installed"] = config.pop("web")
    flow = InstalledAppFlow.from_client_config(config, youtube.SCOPES)
    # opens browser; handles http://localhost:<port> callback
    creds = flow.run_local_server(port=port, access_type="offline", prompt="consent")
    if not creds.refresh_token:
        typer.echo("No refresh token issued; revoke the app's access and retry", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"YOUTUBE_REFRESH_TOKEN={creds.refresh_token}")


if __name__ == "__main__":  # pragma: no cover
    cli()
