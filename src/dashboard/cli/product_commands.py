"""Product CLI commands, including the interactive product form."""

import typer
from rich.prompt import Confirm, Prompt
from rich.table import Table

from src.dashboard.core.cascade import TemplateCascade
from src.dashboard.core.models.product import ProductDraft
from src.dashboard.core.rendering import render_fields
from src.dashboard.core.services.api_client import ApiClient
from src.dashboard.core.services.category_service import CategoryService
from src.dashboard.core.services.product_service import ProductService

from .utils import choose, console, open_api, run

products_app = typer.Typer(help="Manage products")


def _ask(label: str, default: str = "", required: bool = False) -> str:
    while True:
        value = Prompt.ask(label, default=default, show_default=bool(default), console=console)
        value = value.strip()
        if value or not required:
            return value
        console.print("[red]This field is required[/red]")


def _ask_scalars(draft: ProductDraft) -> None:
    draft.name = _ask("Product name", draft.name, required=True)
    draft.price = _ask("Price", draft.price, required=True)
    draft.original_price = _ask("Original price", draft.original_price)
    draft.stock = int(_ask("Stock", str(draft.stock)) or 0)
    draft.weight = _ask("Weight", draft.weight)
    draft.description = _ask("Description", draft.description)
    draft.image_url = _ask("Image URL", draft.image_url)


async def _choose_selection(cascade: TemplateCascade, category_id, subcategory_id) -> None:
    if category_id is None:
        category_id = choose(
            "Category",
            [(category.id, f"{category.icon or ''} {category.name}") for category in cascade.categories],
            allow_empty=False,
        )
    await cascade.select_category(category_id)

    if subcategory_id is None and cascade.subcategories:
        subcategory_id = choose(
            "Subcategory",
            [(subcategory.id, subcategory.name) for subcategory in cascade.subcategories],
            empty_label="no subcategory (default template)",
        )
    if subcategory_id:
        await cascade.select_subcategory(subcategory_id)

    if cascade.brands:
        brand = choose("Brand", [(brand, brand) for brand in cascade.brands])
        cascade.select_brand(brand)


def _fill_dynamic_fields(cascade: TemplateCascade) -> None:
    template = cascade.template
    draft = cascade.draft
    if template.feature_fields:
        console.print("[bold]Features[/bold]")
        draft.features = render_fields(template.feature_fields, draft.features, console)
    if template.spec_fields:
        console.print("[bold]Specifications[/bold]")
        draft.specifications = render_fields(template.spec_fields, draft.specifications, console)


async def _submit(api: ApiClient, cascade: TemplateCascade, product_id: str | None):
    draft = cascade.validate()
    service = ProductService(api)
    if product_id:
        saved = await service.update_product(product_id, draft)
    else:
        saved = await service.create_product(draft)
    cascade.close_draft()
    return saved


@products_app.command("list")
def list_products(
    search: str = typer.Option("", "--search", "-q", help="Filter by name"),
) -> None:
    """List products."""

    async def _list():
        async with open_api() as api:
            return await ProductService(api).list_products()

    products = [
        product
        for product in run(_list())
        if search.lower() in str(product.get("name", "")).lower()
    ]
    if not products:
        console.print("[yellow]No products found[/yellow]")
        return

    table = Table(title="Products")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Category")
    table.add_column("Price", justify="right")
    table.add_column("Stock", justify="right")
    for product in products:
        table.add_row(
            str(product.get("_id", "")),
            str(product.get("name", "")),
            str(product.get("category", "")),
            str(product.get("price", "")),
            str(product.get("stock", "")),
        )
    console.print(table)
    console.print(f"\n[green]Found {len(products)} products[/green]")


@products_app.command("delete")
def delete_product(
    product_id: str = typer.Argument(..., help="Product ID"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation prompt"),
) -> None:
    """Delete a product."""
    if not force and not Confirm.ask(f"Delete product {product_id}?", console=console):
        console.print("[yellow]Cancelled[/yellow]")
        return

    async def _delete():
        async with open_api() as api:
            await ProductService(api).delete_product(product_id)

    run(_delete())
    console.print(f"[green]✅ Deleted product {product_id}[/green]")


@products_app.command("create")
def create_product(
    category_id: str | None = typer.Option(None, "--category", "-c", help="Category ID"),
    subcategory_id: str | None = typer.Option(None, "--sub", "-s", help="Subcategory ID"),
) -> None:
    """Create a product through the interactive form."""

    async def _create():
        async with open_api() as api:
            cascade = TemplateCascade(CategoryService(api))
            draft = await cascade.open_draft()
            _ask_scalars(draft)
            await _choose_selection(cascade, category_id, subcategory_id)
            _fill_dynamic_fields(cascade)
            return await _submit(api, cascade, None)

    product = run(_create()) or {}
    console.print(f"[green]✅ Created product '{product.get('name')}' ({product.get('_id')})[/green]")


@products_app.command("edit")
def edit_product(
    product_id: str = typer.Argument(..., help="Product ID"),
    change_category: bool = typer.Option(
        False, "--change-category", help="Pick a new category and subcategory"
    ),
) -> None:
    """Edit a product through the interactive form."""

    async def _edit():
        async with open_api() as api:
            product = await ProductService(api).get_product(product_id)
            cascade = TemplateCascade(CategoryService(api))
            draft = await cascade.open_draft(product)
            _ask_scalars(draft)
            if change_category or not draft.category_id:
                await _choose_selection(cascade, None, None)
            _fill_dynamic_fields(cascade)
            return await _submit(api, cascade, product_id)

    product = run(_edit()) or {}
    console.print(f"[green]✅ Updated product '{product.get('name')}'[/green]")
