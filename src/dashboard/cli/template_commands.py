"""Feature/specification template CLI commands.

Each editing command loads the current template, applies one change and
saves the whole template back.
"""

import typer
from rich.table import Table

from src.dashboard.core.models.template import FieldKind, Template
from src.dashboard.core.services.category_service import CategoryService
from src.dashboard.core.template_editor import TemplateEditor

from .utils import console, open_api, run

template_app = typer.Typer(help="Manage feature and specification templates")

_SUBCATEGORY_OPTION = typer.Option(
    None, "--sub", "-s", help="Subcategory ID (omit for the category default template)"
)


def _fields_table(title: str, fields: list, identifier_header: str) -> Table:
    table = Table(title=title)
    table.add_column(identifier_header, style="cyan")
    table.add_column("Label", style="green")
    table.add_column("Type")
    table.add_column("Options")
    table.add_column("Required", justify="center")
    for field in fields:
        options = ", ".join(field.options) if field.kind is FieldKind.SELECT else ""
        table.add_row(
            field.identifier, field.label, field.kind.value, options, "✅" if field.required else ""
        )
    return table


def _print_template(template: Template) -> None:
    if template.is_empty:
        console.print("[yellow]Template has no fields[/yellow]")
        return
    console.print(_fields_table("Features", template.feature_fields, "Name"))
    console.print(_fields_table("Specifications", template.spec_fields, "Key"))


@template_app.command("show")
def show_template(
    category_id: str = typer.Argument(..., help="Category ID"),
    subcategory_id: str | None = _SUBCATEGORY_OPTION,
) -> None:
    """Show the template resolved for a category or subcategory."""

    async def _show():
        async with open_api() as api:
            return await TemplateEditor(CategoryService(api)).load(category_id, subcategory_id)

    _print_template(run(_show()))


@template_app.command("add-feature")
def add_feature(
    category_id: str = typer.Argument(..., help="Category ID"),
    name: str = typer.Argument(..., help="Field name (storage key)"),
    label: str = typer.Argument(..., help="Field label"),
    subcategory_id: str | None = _SUBCATEGORY_OPTION,
    type: FieldKind = typer.Option(FieldKind.TEXT, "--type", "-t", help="Input kind"),
    options: str = typer.Option("", "--options", "-o", help="Comma-separated choices for select"),
    required: bool = typer.Option(False, "--required", help="Require a value"),
    placeholder: str = typer.Option("", "--placeholder", help="Placeholder text"),
) -> None:
    """Add a feature field and save the template."""

    async def _add():
        async with open_api() as api:
            editor = TemplateEditor(CategoryService(api))
            await editor.load(category_id, subcategory_id)
            editor.add_feature(name, label, type.value, options, required, placeholder)
            return await editor.save()

    template = run(_add())
    console.print(f"[green]✅ Added feature '{name}'[/green]")
    _print_template(template)


@template_app.command("add-spec")
def add_spec(
    category_id: str = typer.Argument(..., help="Category ID"),
    key: str = typer.Argument(..., help="Specification key"),
    label: str = typer.Argument(..., help="Field label"),
    subcategory_id: str | None = _SUBCATEGORY_OPTION,
    type: FieldKind = typer.Option(FieldKind.TEXT, "--type", "-t", help="Input kind (no checkbox)"),
    options: str = typer.Option("", "--options", "-o", help="Comma-separated choices for select"),
    required: bool = typer.Option(False, "--required", help="Require a value"),
    placeholder: str = typer.Option("", "--placeholder", help="Placeholder text"),
) -> None:
    """Add a specification field and save the template."""

    async def _add():
        async with open_api() as api:
            editor = TemplateEditor(CategoryService(api))
            await editor.load(category_id, subcategory_id)
            editor.add_spec(key, label, type.value, options, required, placeholder)
            return await editor.save()

    template = run(_add())
    console.print(f"[green]✅ Added specification '{key}'[/green]")
    _print_template(template)


@template_app.command("remove")
def remove_field(
    category_id: str = typer.Argument(..., help="Category ID"),
    subcategory_id: str | None = _SUBCATEGORY_OPTION,
    feature: str | None = typer.Option(None, "--feature", help="Feature name to remove"),
    spec: str | None = typer.Option(None, "--spec", help="Specification key to remove"),
) -> None:
    """Remove a feature or specification field and save the template."""
    if not feature and not spec:
        console.print("[red]❌ Pass --feature or --spec[/red]")
        raise typer.Exit(code=1)

    async def _remove():
        async with open_api() as api:
            editor = TemplateEditor(CategoryService(api))
            await editor.load(category_id, subcategory_id)
            if feature:
                editor.remove_feature(feature)
            if spec:
                editor.remove_spec(spec)
            return await editor.save()

    template = run(_remove())
    console.print("[green]✅ Template saved[/green]")
    _print_template(template)
