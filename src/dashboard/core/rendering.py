"""Interactive input for dynamic template fields.

There is one renderer per ``FieldKind``; the table is checked against the
enum at import time so a new kind cannot fall through to a default input.
"""

from collections.abc import Callable

from rich.console import Console
from rich.prompt import Confirm, Prompt

from src.dashboard.core.models.template import AnyField, FieldKind, FieldValue


def _label(field: AnyField) -> str:
    label = field.label or field.identifier
    return f"{label} [red]*[/red]" if field.required else label


def _ask_text(field: AnyField, current: FieldValue, console: Console) -> FieldValue:
    default = current if isinstance(current, str) else ""
    while True:
        value = Prompt.ask(
            _label(field), default=default, show_default=bool(default), console=console
        ).strip()
        if value or not field.required:
            return value
        console.print("[red]This field is required[/red]")


def _ask_number(field: AnyField, current: FieldValue, console: Console) -> FieldValue:
    default = current if isinstance(current, str) else ""
    while True:
        value = Prompt.ask(
            _label(field), default=default, show_default=bool(default), console=console
        ).strip()
        if not value:
            if not field.required:
                return ""
            console.print("[red]This field is required[/red]")
            continue
        try:
            float(value)
        except ValueError:
            console.print("[red]Please enter a number[/red]")
            continue
        # The backend stores numeric inputs as entered
        return value


def _ask_select(field: AnyField, current: FieldValue, console: Console) -> FieldValue:
    options = list(field.options)
    default = current if isinstance(current, str) and current in options else ""
    hint = field.placeholder or "Select..."
    console.print(f"[dim]{hint} ({' / '.join(options) or 'no options'})[/dim]")
    while True:
        value = Prompt.ask(
            _label(field), default=default, show_default=bool(default), console=console
        ).strip()
        if not value and not field.required:
            return ""
        if value in options:
            return value
        console.print(f"[red]Choose one of: {', '.join(options)}[/red]")


def _ask_checkbox(field: AnyField, current: FieldValue, console: Console) -> FieldValue:
    checked = current is True or current == "true"
    return Confirm.ask(_label(field), default=checked, console=console)


_RENDERERS: dict[FieldKind, Callable[[AnyField, FieldValue, Console], FieldValue]] = {
    FieldKind.TEXT: _ask_text,
    FieldKind.NUMBER: _ask_number,
    FieldKind.SELECT: _ask_select,
    FieldKind.CHECKBOX: _ask_checkbox,
}

_unhandled = set(FieldKind) - set(_RENDERERS)
if _unhandled:
    raise RuntimeError(f"No renderer for field kinds: {sorted(k.value for k in _unhandled)}")


def render_field(field: AnyField, current: FieldValue, console: Console) -> FieldValue:
    """Prompt for one field's value, starting from ``current``."""
    return _RENDERERS[field.kind](field, current, console)


def render_fields(
    fields: list[AnyField], values: dict[str, FieldValue], console: Console
) -> dict[str, FieldValue]:
    """Prompt for every field in template order and return the new mapping."""
    return {
        field.identifier: render_field(field, values.get(field.identifier, field.default_value()), console)
        for field in fields
    }
