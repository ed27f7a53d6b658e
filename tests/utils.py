import asyncio
import json
from collections.abc import Callable
from typing import Any

import httpx

from src.dashboard.core.models.template import Template

Handler = Callable[[httpx.Request], httpx.Response]


class FakeBackend:
    """Route table in front of ``httpx.MockTransport`` that records every request."""

    def __init__(self):
        self.routes: dict[tuple[str, str], Handler] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, json_body: Any = None, status_code: int = 200) -> None:
        self.routes[(method.upper(), path)] = lambda request: httpx.Response(
            status_code, json=json_body
        )

    def add_handler(self, method: str, path: str, handler: Handler) -> None:
        self.routes[(method.upper(), path)] = handler

    def add_error(self, method: str, path: str, exc: Exception) -> None:
        def _raise(request: httpx.Request) -> httpx.Response:
            raise exc

        self.routes[(method.upper(), path)] = _raise

    def _dispatch(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, json={"error": f"No route for {request.url.path}"})
        return handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._dispatch)

    def paths(self, method: str | None = None) -> list[str]:
        return [
            request.url.path
            for request in self.requests
            if method is None or request.method == method.upper()
        ]

    def last_json(self) -> Any:
        return json.loads(self.requests[-1].content)


class FakeCatalog:
    """In-process stand-in for ``CategoryService`` whose responses can be held back.

    ``hold(key)`` returns an event; requests for that key wait until it is set,
    which lets a test finish a newer selection before an older one.
    """

    def __init__(self, categories, templates, brands):
        self.categories = categories
        self.templates = templates
        self.brands = brands
        self.template_calls: list[tuple[str, str | None]] = []
        self.brand_calls: list[tuple[str, str]] = []
        self.never_answer: set[tuple] = set()
        self._gates: dict[tuple, asyncio.Event] = {}

    def hold(self, key: tuple) -> asyncio.Event:
        self._gates[key] = asyncio.Event()
        return self._gates[key]

    async def _wait(self, key: tuple) -> None:
        if key in self._gates:
            await self._gates[key].wait()
        if key in self.never_answer:
            await asyncio.sleep(3600)

    async def get_categories(self):
        return list(self.categories)

    async def get_feature_template(self, category_id, subcategory_id=None):
        key = (category_id, subcategory_id)
        self.template_calls.append(key)
        await self._wait(key)
        return Template.model_validate(self.templates.get(key, {}))

    async def get_brands(self, category_id, subcategory_id):
        key = (category_id, subcategory_id)
        self.brand_calls.append(key)
        await self._wait(("brands",) + key)
        return list(self.brands.get(key, []))
