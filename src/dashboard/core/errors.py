"""Exceptions raised by the dashboard client."""


class ApiError(Exception):
    """Raised when the backend answers with a non-2xx status."""

    def __init__(self, status_code: int, message: str, url: str) -> None:
        super().__init__(f"HTTP {status_code} from {url}: {message}")
        self.status_code = status_code
        self.message = message
        self.url = url


class UnknownSelectionError(ValueError):
    """Raised when a selection is not part of the currently loaded choices."""


class DraftValidationError(ValueError):
    """Raised at submit time when a product draft is incomplete."""

    def __init__(self, missing: list[str]) -> None:
        super().__init__(f"Missing required fields: {', '.join(missing)}")
        self.missing = missing
