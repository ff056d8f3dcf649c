"""Command-line interface for ShoppersPoint."""

from __future__ import annotations

from pathlib import Path
from typing import List, NoReturn, Optional

import typer
from pydantic import ValidationError

from shopperspoint.config import get_settings
from shopperspoint.formatting import format_item, format_price, format_tax_percent, format_total
from shopperspoint.logging_utils import configure_logging
from shopperspoint.models.forms import MAX_TAX_PERCENT, NewItemForm, NewListForm, parse_tax_percent
from shopperspoint.models.shopping import Category
from shopperspoint.storage.sqlite import SqliteKeyValueStore
from shopperspoint.store import ShoppingStore

app = typer.Typer(help="ShoppersPoint shopping list commands.", no_args_is_help=True)


def _fail(message: str) -> NoReturn:
    typer.secho(message, fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def _validation_message(exc: ValidationError) -> str:
    return "; ".join(error["msg"] for error in exc.errors())


def _to_positions(indexes: List[int]) -> List[int]:
    """Convert 1-based indexes typed by the user to 0-based positions."""
    return [index - 1 for index in indexes]


@app.callback()
def _root(
    ctx: typer.Context,
    database: Optional[Path] = typer.Option(
        None,
        "--database",
        help="SQLite database path (defaults to SHOPPERSPOINT_DATABASE_PATH).",
    ),
) -> None:
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)
    ctx.obj = {
        "database": database or settings.database_path,
        "default_tax_rate": settings.default_tax_rate,
    }


def _store(ctx: typer.Context) -> ShoppingStore:
    """Open the store on first use so `--help` never touches the database."""
    state = ctx.obj
    if "store" not in state:
        backend = SqliteKeyValueStore(state["database"])
        state["store"] = ShoppingStore(backend, default_tax_rate=state["default_tax_rate"])
    return state["store"]


@app.command("lists")
def show_lists(ctx: typer.Context) -> None:
    """Show every shopping list; the selected one is marked with '*'."""
    store = _store(ctx)
    if not store.lists:
        typer.echo("No shopping lists yet.")
        return
    for number, shopping_list in enumerate(store.lists, start=1):
        marker = "*" if shopping_list.id == store.selected_list_id else " "
        count = len(shopping_list.items)
        noun = "item" if count == 1 else "items"
        typer.echo(
            f"{marker} {number}. {shopping_list.name} ({count} {noun}, {format_price(shopping_list.subtotal())})"
        )


@app.command("new-list")
def new_list(ctx: typer.Context, name: str = typer.Argument(..., help="Name of the new list.")) -> None:
    """Create a list and select it."""
    store = _store(ctx)
    try:
        form = NewListForm(name=name)
    except ValidationError as exc:
        _fail(_validation_message(exc))
    created = store.add_list(form.name)
    typer.echo(f"Created and selected '{created.name}'.")


@app.command("select")
def select(ctx: typer.Context, index: int = typer.Argument(..., help="1-based list number.")) -> None:
    """Select the list shown at INDEX by `lists`."""
    store = _store(ctx)
    if not 1 <= index <= len(store.lists):
        _fail(f"No list numbered {index}.")
    chosen = store.lists[index - 1]
    store.select_list(chosen.id)
    typer.echo(f"Selected '{chosen.name}'.")


@app.command("delete-list")
def delete_list(
    ctx: typer.Context,
    indexes: List[int] = typer.Argument(..., help="1-based list numbers to delete."),
) -> None:
    """Delete lists by number."""
    store = _store(ctx)
    before = len(store.lists)
    store.delete_list(_to_positions(indexes))
    typer.echo(f"Deleted {before - len(store.lists)} list(s).")


@app.command("items")
def show_items(ctx: typer.Context) -> None:
    """Show the items of the selected list and its total."""
    store = _store(ctx)
    selected = store.selected_list
    typer.echo(f"Items in {selected.name if selected else 'List'}")
    for number, item in enumerate(selected.items if selected else [], start=1):
        typer.echo(f"  {number}. {format_item(item)}")
    typer.echo(format_total(store))


@app.command("add-item")
def add_item(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Item name."),
    price: str = typer.Argument(..., help="Price, e.g. 3.49."),
    category: Category = typer.Option(Category.FOOD, "--category", "-c", case_sensitive=False),
) -> None:
    """Add an item to the selected list."""
    store = _store(ctx)
    try:
        form = NewItemForm(name=name, category=category, price=price)
    except ValidationError as exc:
        _fail(_validation_message(exc))
    item = store.add_item(form.name, form.category, form.price)
    if item is None:
        _fail("No list selected; create one with `new-list` first.")
    typer.echo(f"Added {format_item(item)}.")


@app.command("delete-item")
def delete_item(
    ctx: typer.Context,
    indexes: List[int] = typer.Argument(..., help="1-based item numbers to delete."),
) -> None:
    """Delete items from the selected list by number."""
    store = _store(ctx)
    selected = store.selected_list
    if selected is None:
        _fail("No list selected.")
    before = len(selected.items)
    store.delete_item(_to_positions(indexes))
    after = len(store.selected_list.items) if store.selected_list else 0
    typer.echo(f"Deleted {before - after} item(s).")


@app.command("clear-items")
def clear_items(ctx: typer.Context) -> None:
    """Remove every item from the selected list."""
    store = _store(ctx)
    store.clear_items()
    typer.echo("Cleared all items.")


@app.command("tax")
def tax(
    ctx: typer.Context,
    percent: Optional[int] = typer.Argument(None, help=f"Whole tax percent (0-{MAX_TAX_PERCENT})."),
) -> None:
    """Show or set the tax rate."""
    store = _store(ctx)
    if percent is not None:
        try:
            store.set_tax_rate(parse_tax_percent(percent))
        except ValueError as exc:
            _fail(str(exc))
    typer.echo(f"Tax Rate: {format_tax_percent(store.tax_rate)}")


@app.command("total")
def total(ctx: typer.Context) -> None:
    """Print the selected list's total including tax."""
    store = _store(ctx)
    typer.echo(format_total(store))


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point for `python -m shopperspoint`."""
    app(prog_name="shopperspoint", args=argv)


if __name__ == "__main__":
    main()
