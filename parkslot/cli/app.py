"""
Main CLI application using Typer.
"""

import logging
from functools import partial
from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..adapters.sql_store import SqlReservationStore
from ..config import AppConfig, get_default_config_path
from ..domain.calendar import DAY_NAMES, week_range_label
from ..domain.calendar import today as local_today
from ..domain.exceptions import ParkingError
from ..domain.grid import GridCell, build_week_grid
from ..domain.models import SlotKey, TimeSlot
from ..services.booking_engine import BookingEngine

app = typer.Typer(
    name="parkslot",
    help="Reserve parking places over the working week",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml"),
]


def _load_config(config_file: Optional[Path]) -> AppConfig:
    config_path = config_file or get_default_config_path()
    return AppConfig.load_from_yaml(config_path)


def _build_engine(config: AppConfig) -> BookingEngine:
    """Wire the SQL store and the engine from configuration."""
    store = SqlReservationStore.from_url(
        config.database_url,
        user_ids=[user.id for user in config.users],
        max_attempts=config.store.max_attempts,
        retry_delay_seconds=config.store.retry_delay_seconds,
    )
    return BookingEngine(
        store,
        window_days=config.booking_window_days,
        places=config.places,
        clock=partial(local_today, config.timezone),
    )


def _render_cell(cell: GridCell) -> str:
    if cell.is_free:
        return "[dim]volno[/dim]"

    text = f"{cell.format_display()} [dim]#{cell.reservation.id}[/dim]"
    if cell.is_priority:
        return f"[bold yellow]{text} ★[/bold yellow]"
    return f"[yellow]{text}[/yellow]"


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show log output.")] = False,
):
    """
    Parking place reservations.
    """
    if verbose:
        logging.basicConfig(
            level=logging.INFO,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


@app.command()
def week(
    offset: Annotated[int, typer.Option("--offset", "-o", help="Weeks from now (negative for past weeks)")] = 0,
    config_file: ConfigOption = None,
):
    """
    Show the booking grid of one week.

    Examples:

        parkslot week
        parkslot week --offset 1
    """
    try:
        config = _load_config(config_file)
        engine = _build_engine(config)
        today = engine.today()

        grid = build_week_grid(
            engine.week_dates(offset, today),
            engine.places,
            engine.snapshot(),
            config.roster(),
        )

        table = Table(
            title=f"Rezervace parkovacích míst {week_range_label(offset, today)}",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Čas", style="bold")
        table.add_column("Místo", justify="right")
        for name, day in zip(DAY_NAMES, grid.dates):
            table.add_column(f"{name} {day.day}. {day.month}.")

        for time_slot, place, cells in grid.rows():
            table.add_row(time_slot.value, str(place), *[_render_cell(cell) for cell in cells])

        console.print()
        console.print(table)
        console.print()

    except (FileNotFoundError, ValueError, ParkingError) as e:
        console.print(f"[bold red]Chyba:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def reserve(
    username: Annotated[str, typer.Argument(help="Acting user")],
    place: Annotated[int, typer.Argument(help="Parking place number")],
    day: Annotated[str, typer.Argument(help="Date (YYYY-MM-DD)")],
    time_slot: Annotated[TimeSlot, typer.Argument(help="Time slot")],
    config_file: ConfigOption = None,
):
    """
    Reserve a parking place.

    Example:

        parkslot reserve petr 3 2024-11-25 7-13
    """
    try:
        config = _load_config(config_file)
        requestor = config.resolve_user(username)

        try:
            slot_date = pendulum.from_format(day, "YYYY-MM-DD").date()
        except ValueError as e:
            console.print(f"[red]Neplatné datum: {e}[/red]")
            raise typer.Exit(1)

        engine = _build_engine(config)
        reservation = engine.reserve(
            requestor,
            SlotKey(place=place, date=slot_date, time_slot=time_slot),
        )
        console.print(
            f"[green]✓ Rezervace #{reservation.id} vytvořena:[/green] {reservation.slot}"
        )

    except (FileNotFoundError, ValueError, ParkingError) as e:
        console.print(f"[bold red]Chyba:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def cancel(
    username: Annotated[str, typer.Argument(help="Acting user")],
    reservation_id: Annotated[int, typer.Argument(help="Reservation number as shown by 'week'")],
    config_file: ConfigOption = None,
):
    """
    Cancel a reservation (own reservations, or any as admin).
    """
    try:
        config = _load_config(config_file)
        requestor = config.resolve_user(username)
        engine = _build_engine(config)

        engine.cancel(requestor, reservation_id)
        console.print(f"[green]✓ Rezervace #{reservation_id} zrušena.[/green]")

    except (FileNotFoundError, ValueError, ParkingError) as e:
        console.print(f"[bold red]Chyba:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def list_users(
    config_file: ConfigOption = None,
):
    """
    List all configured users.
    """
    try:
        config = _load_config(config_file)

        if not config.users:
            console.print("[yellow]V konfiguraci nejsou žádní uživatelé.[/yellow]")
            return

        table = Table(
            title="Uživatelé",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Uživatel", style="bold yellow")
        table.add_column("Jméno")
        table.add_column("SPZ", style="dim")
        table.add_column("Role")
        table.add_column("Prioritní")

        for user in config.users:
            table.add_row(
                user.username,
                user.name,
                user.plate,
                user.role.value,
                "ano" if user.priority else "ne",
            )

        console.print()
        console.print(table)
        console.print()

    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Chyba:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]parkslot[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
