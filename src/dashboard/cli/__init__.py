"""Main CLI application module."""

import typer

from src.dashboard.runtime.logging_setup import configure_logging

from .auth_commands import auth_app
from .category_commands import brands_app, categories_app
from .product_commands import products_app
from .template_commands import template_app

app = typer.Typer(
    help="🛒 Catalog dashboard CLI - manage categories, templates and products",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(auth_app, name="auth")
app.add_typer(categories_app, name="categories")
app.add_typer(brands_app, name="brands")
app.add_typer(template_app, name="template")
app.add_typer(products_app, name="products")


@app.callback()
def _setup(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        case_sensitive=False,
        help="Logging level (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL).",
    ),
) -> None:
    configure_logging(log_level)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
