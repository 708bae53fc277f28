#!/usr/bin/env python3
"""
Rich-based interactive shell for the Cyber Management System.
"""

import sys
from typing import Callable, Dict, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt

from cyber_cms.config import CMSConfig
from cyber_cms.database import Record
from cyber_cms.logging_config import get_cms_logger, setup_logging
from cyber_cms.storage import RecordStore

logger = get_cms_logger(__name__)

MENU_TITLE = "=== Cyber Management System Menu ==="
MENU_OPTIONS = [
    (1, "Add User"),
    (2, "List Users"),
    (3, "Add Device"),
    (4, "List Devices"),
    (5, "Exit"),
]
EXIT_CHOICE = 5


def display_menu(console: Console) -> None:
    console.print()
    console.print(f"[bold blue]{MENU_TITLE}[/bold blue]")
    for number, label in MENU_OPTIONS:
        console.print(f"{number}. {label}")


def parse_choice(raw: str) -> Optional[int]:
    """Parse a menu selection, returning None if it is not a known option."""
    try:
        choice = int(raw.strip())
    except ValueError:
        return None
    if choice not in dict(MENU_OPTIONS):
        return None
    return choice


def printable(text: str) -> str:
    """Replace bytes that were not valid UTF-8 on disk with U+FFFD for display."""
    return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def display_records(
    title: str, records: Sequence[Record], empty_message: str, console: Console
) -> None:
    """Print a heading and one row per record, or an explicit empty message."""
    console.print()
    console.print(f"[bold]{title}:[/bold]")
    for record in records:
        console.print(escape(printable(record.describe())))
    if not records:
        console.print(f"[yellow]{empty_message}[/yellow]")


def warn_if_unsafe(record: Record, console: Console) -> None:
    fields = record.unsafe_fields()
    if fields:
        console.print(
            f"[yellow]Warning: commas in {escape(', '.join(fields))} are not escaped; "
            "this record will not reload as entered.[/yellow]"
        )


def handle_add_user(store: RecordStore, console: Console) -> None:
    username = Prompt.ask("Enter username", console=console)
    role = Prompt.ask("Enter role", console=console)
    user = store.add_user(username, role)
    console.print("[green]User added successfully.[/green]")
    warn_if_unsafe(user, console)


def handle_list_users(store: RecordStore, console: Console) -> None:
    display_records("Users", store.list_users(), "No users available.", console)


def handle_add_device(store: RecordStore, console: Console) -> None:
    name = Prompt.ask("Enter device name", console=console)
    ip = Prompt.ask("Enter IP address", console=console)
    status = Prompt.ask("Enter status (active/inactive)", console=console)
    device = store.add_device(name, ip, status)
    console.print("[green]Device added successfully.[/green]")
    warn_if_unsafe(device, console)


def handle_list_devices(store: RecordStore, console: Console) -> None:
    display_records("Devices", store.list_devices(), "No devices available.", console)


HANDLERS: Dict[int, Callable[[RecordStore, Console], None]] = {
    1: handle_add_user,
    2: handle_list_users,
    3: handle_add_device,
    4: handle_list_devices,
}


def handle_command(raw: str, store: RecordStore, console: Console) -> bool:
    """Handle one menu selection.

    Args:
        raw: The operator's answer to the menu prompt
        store: Store the selection operates on
        console: Console for output

    Returns:
        Whether the shell should exit
    """
    choice = parse_choice(raw)
    if choice is None:
        logger.debug(f"Invalid menu selection: {raw!r}")
        console.print("[red]Invalid option, try again.[/red]")
        return False

    if choice == EXIT_CHOICE:
        console.print("Exiting system...")
        return True

    HANDLERS[choice](store, console)
    return False


def run_menu(store: RecordStore, console: Console) -> None:
    """Loop over the menu until the operator exits or input ends."""
    while True:
        display_menu(console)
        try:
            raw = Prompt.ask("Choose an option", console=console)
            should_exit = handle_command(raw, store, console)
        except EOFError:
            console.print()
            console.print("Exiting system...")
            logger.info("Input closed, leaving menu")
            break

        if should_exit:
            break


def main() -> int:
    """Main entry point for the shell."""
    config = CMSConfig.from_env()
    setup_logging(config.log_level, config.log_file)
    logger.info(
        f"Starting shell (users={config.users_path}, devices={config.devices_path})"
    )

    console = Console()
    with RecordStore.from_config(config) as store:
        run_menu(store, console)
    return 0


if __name__ == "__main__":
    sys.exit(main())
