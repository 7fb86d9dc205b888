"""Admin commands for init and backup."""

import shutil
import sys
from datetime import datetime
from pathlib import Path

from purse.commands.display import console, handle_errors
from purse.config import create_default_config, get_config_path, get_data_path, load_settings
from purse.store import LedgerStore, build_persistence


def init_command(force: bool = False) -> None:
    """Create the config file and an empty ledger."""
    config_path = get_config_path()

    if config_path.exists() and not force:
        console.print("[red]Initialization failed:[/red]", style="bold")
        console.print(f"  Config already exists: {config_path}")
        console.print("\n[yellow]Use 'purse init --force' to overwrite[/yellow]")
        sys.exit(1)

    try:
        console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
        create_default_config(config_path)
        console.print("[green]✓[/green] Config file created (permissions: 600)")
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)

    with handle_errors():
        settings = load_settings(config_path)

    data_path = get_data_path(settings)
    if data_path.exists() and not force:
        console.print(f"[dim]Keeping existing ledger: {data_path}[/dim]")
    else:
        # Saving through the store creates the file in the configured format
        store = LedgerStore(build_persistence(settings))
        store.set_starting_balance(0)
        console.print(f"[green]✓[/green] Ledger created at {data_path}")

    console.print("\n[green]Initialization complete![/green]", style="bold")


def backup_command(output_dir: str | None = None) -> None:
    """Backup ledger and configuration files."""
    config_path = get_config_path()

    with handle_errors():
        data_path = get_data_path(load_settings(config_path))

    if not data_path.exists():
        console.print("[red]Ledger not found. Run 'purse init' first.[/red]", style="bold")
        sys.exit(1)

    if output_dir:
        backup_dir = Path(output_dir).expanduser()
    else:
        backup_dir = Path.home() / ".purse" / "backups"

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    data_backup = backup_dir / f"{data_path.stem}_{timestamp}{data_path.suffix}"
    config_backup = backup_dir / f"config_{timestamp}.toml"

    try:
        backup_dir.mkdir(parents=True, exist_ok=True)

        shutil.copy2(data_path, data_backup)
        console.print(f"[green]✓[/green] Ledger backed up to: {data_backup}")

        if config_path.exists():
            shutil.copy2(config_path, config_backup)
            console.print(f"[green]✓[/green] Config backed up to: {config_backup}")

        console.print("\n[green]Backup complete![/green]", style="bold")
        console.print(f"[dim]Backup directory: {backup_dir}[/dim]")

    except OSError as e:
        console.print(f"[red]Backup failed: {e}[/red]", style="bold")
        sys.exit(1)
