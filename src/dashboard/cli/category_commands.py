"""Category, subcategory and brand CLI commands."""

import typer
from rich.prompt import Confirm
from rich.table import Table

from src.dashboard.core.services.category_service import CategoryService

from .utils import console, open_api, run

categories_app = typer.Typer(help="Manage categories and subcategories")
brands_app = typer.Typer(help="Manage the brands offered per subcategory")


def _print_brands(brands: list[str], category_id: str, subcategory_id: str) -> None:
    if not brands:
        console.print(f"[yellow]No brands for {category_id}/{subcategory_id}[/yellow]")
        return
    for brand in brands:
        console.print(f"• {brand}")


@categories_app.command("list")
def list_categories() -> None:
    """List all categories."""

    async def _list():
        async with open_api() as api:
            return await CategoryService(api).get_categories()

    categories = run(_list())
    if not categories:
        console.print("[yellow]No categories found[/yellow]")
        return

    table = Table(title="Categories")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Icon")
    table.add_column("Subcategories", justify="right")
    for category in categories:
        table.add_row(
            category.id, category.name, category.icon or "", str(len(category.subcategories))
        )
    console.print(table)


@categories_app.command("show")
def show_category(category_id: str = typer.Argument(..., help="Category ID")) -> None:
    """Show a category and its subcategories."""

    async def _get():
        async with open_api() as api:
            return await CategoryService(api).get_category(category_id)

    category = run(_get())
    console.print(f"[bold]{category.icon or ''} {category.name}[/bold]")
    if category.description:
        console.print(category.description)

    table = Table(title="Subcategories")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Description")
    for subcategory in category.subcategories:
        table.add_row(subcategory.id, subcategory.name, subcategory.description or "")
    console.print(table)


@categories_app.command("create")
def create_category(
    name: str = typer.Argument(..., help="Category name"),
    description: str = typer.Option("", "--description", "-d", help="Description"),
    image: str = typer.Option("", "--image", help="Image URL"),
    icon: str = typer.Option("", "--icon", help="Icon or emoji"),
) -> None:
    """Create a category."""

    async def _create():
        async with open_api() as api:
            return await CategoryService(api).create_category(
                {"name": name, "description": description, "image": image, "icon": icon}
            )

    category = run(_create())
    console.print(f"[green]✅ Created category '{category.name}' ({category.id})[/green]")


@categories_app.command("update")
def update_category(
    category_id: str = typer.Argument(..., help="Category ID"),
    name: str = typer.Option(..., "--name", "-n", help="New name"),
    description: str = typer.Option("", "--description", "-d", help="Description"),
    image: str = typer.Option("", "--image", help="Image URL"),
    icon: str = typer.Option("", "--icon", help="Icon or emoji"),
) -> None:
    """Update a category."""

    async def _update():
        async with open_api() as api:
            return await CategoryService(api).update_category(
                category_id,
                {"name": name, "description": description, "image": image, "icon": icon},
            )

    category = run(_update())
    console.print(f"[green]✅ Updated category '{category.name}'[/green]")


@categories_app.command("delete")
def delete_category(
    category_id: str = typer.Argument(..., help="Category ID"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation prompt"),
) -> None:
    """Delete a category."""
    if not force and not Confirm.ask(f"Delete category {category_id}?", console=console):
        console.print("[yellow]Cancelled[/yellow]")
        return

    async def _delete():
        async with open_api() as api:
            await CategoryService(api).delete_category(category_id)

    run(_delete())
    console.print(f"[green]✅ Deleted category {category_id}[/green]")


@categories_app.command("add-sub")
def add_subcategory(
    category_id: str = typer.Argument(..., help="Category ID"),
    name: str = typer.Argument(..., help="Subcategory name"),
    description: str = typer.Option("", "--description", "-d", help="Description"),
    image: str = typer.Option("", "--image", help="Image URL"),
) -> None:
    """Add a subcategory to a category."""

    async def _add():
        async with open_api() as api:
            return await CategoryService(api).add_subcategory(
                category_id, {"name": name, "description": description, "image": image}
            )

    subcategory = run(_add())
    console.print(f"[green]✅ Added subcategory '{subcategory.name}' ({subcategory.id})[/green]")


@categories_app.command("update-sub")
def update_subcategory(
    category_id: str = typer.Argument(..., help="Category ID"),
    subcategory_id: str = typer.Argument(..., help="Subcategory ID"),
    name: str = typer.Option(..., "--name", "-n", help="New name"),
    description: str = typer.Option("", "--description", "-d", help="Description"),
    image: str = typer.Option("", "--image", help="Image URL"),
) -> None:
    """Update a subcategory."""

    async def _update():
        async with open_api() as api:
            await CategoryService(api).update_subcategory(
                category_id,
                subcategory_id,
                {"name": name, "description": description, "image": image},
            )

    run(_update())
    console.print(f"[green]✅ Updated subcategory '{name}'[/green]")


@brands_app.command("list")
def list_brands(
    category_id: str = typer.Argument(..., help="Category ID"),
    subcategory_id: str = typer.Argument(..., help="Subcategory ID"),
) -> None:
    """List the brands of a subcategory."""

    async def _list():
        async with open_api() as api:
            return await CategoryService(api).fetch_brands(category_id, subcategory_id)

    _print_brands(run(_list()), category_id, subcategory_id)


@brands_app.command("add")
def add_brand(
    category_id: str = typer.Argument(..., help="Category ID"),
    subcategory_id: str = typer.Argument(..., help="Subcategory ID"),
    brand: str = typer.Argument(..., help="Brand name"),
) -> None:
    """Add a brand and print the updated list."""

    async def _add():
        async with open_api() as api:
            return await CategoryService(api).add_brand(category_id, subcategory_id, brand)

    brands = run(_add())
    console.print(f"[green]✅ Added brand '{brand}'[/green]")
    _print_brands(brands, category_id, subcategory_id)


@brands_app.command("remove")
def remove_brand(
    category_id: str = typer.Argument(..., help="Category ID"),
    subcategory_id: str = typer.Argument(..., help="Subcategory ID"),
    brand: str = typer.Argument(..., help="Brand name"),
) -> None:
    """Remove a brand and print the updated list."""

    async def _remove():
        async with open_api() as api:
            return await CategoryService(api).delete_brand(category_id, subcategory_id, brand)

    brands = run(_remove())
    console.print(f"[green]✅ Removed brand '{brand}'[/green]")
    _print_brands(brands, category_id, subcategory_id)
