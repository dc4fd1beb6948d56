#!/usr/bin/env python3
"""
Config Commands - inspect and initialize stuntc configuration
"""

import typer
import yaml
from rich.console import Console

from ..core.config import get_config_manager

console = Console()


def config_show():
    """Print the merged configuration as YAML"""
    config = get_config_manager()
    merged = config.get_config(force_reload=True)

    console.print(f"[dim]# global:  {config.global_config_file}[/dim]")
    if config.project_config_file:
        console.print(f"[dim]# project: {config.project_config_file}[/dim]")
    else:
        console.print("[dim]# project: (none)[/dim]")
    console.print(
        yaml.dump(merged, default_flow_style=False, sort_keys=True).rstrip(),
        markup=False,
        highlight=False,
    )


def config_init(force: bool):
    """Write the default configuration into ./.stunt/config.yaml"""
    try:
        path = get_config_manager().write_project_config(force=force)
    except FileExistsError as e:
        console.print(
            f"❌ [red]Config already exists:[/red] {e} (use --force to overwrite)"
        )
        raise typer.Exit(1)
    except OSError as e:
        console.print(f"❌ [red]Could not write config:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"✅ [green]Created project config:[/green] {path}")


def register_config_commands(app: typer.Typer):
    """Register config commands with the main CLI app"""

    config_app = typer.Typer(name="config", help="⚙️ Configuration management")

    @config_app.command("show")
    def show_command():
        """Show the merged configuration"""
        config_show()

    @config_app.command("init")
    def init_command(
        force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
    ):
        """Create .stunt/config.yaml in the current directory"""
        config_init(force)

    app.add_typer(config_app, name="config")
