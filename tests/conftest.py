import asyncio
from dataclasses import dataclass, field
from typing import Any

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from status_notifier.config import Settings


def detail_page(*body_lines: str) -> str:
    """A detail page shaped like the real one: one element per text line."""
    inner = "\n".join(f"<div>{line}</div>" for line in body_lines)
    return (
        "<html><head><title>Incident</title>"
        "<style>.x { color: red; }</style>"
        "<script>window.__DATA__ = {\"Updates\": 1};</script>"
        "</head><body>"
        f"{inner}"
        "<footer><a href='/'>Show current status</a><p>Powered by Fluxer</p></footer>"
        "</body></html>"
    )


@dataclass
class FakeStatusSite:
    """
    In-process stand-in for the status page and the chat webhook.

    Serves /summary.json, /incidents/<id> detail pages and records every
    POST made to /webhook.
    """
    summary: Any = field(default_factory=lambda: {"activeIncidents": [], "activeMaintenances": []})
    pages: dict[str, str] = field(default_factory=dict)
    summary_status: int = 200
    webhook_status: int = 204
    webhook_body: str = ""
    posts: list[dict] = field(default_factory=list)
    detail_hits: list[str] = field(default_factory=list)

    async def _summary(self, request: web.Request) -> web.Response:
        if self.summary_status != 200:
            return web.Response(status=self.summary_status, text="unavailable")
        if isinstance(self.summary, str):
            return web.Response(text=self.summary, content_type="text/plain")
        return web.json_response(self.summary)

    async def _detail(self, request: web.Request) -> web.Response:
        slug = request.match_info["slug"]
        self.detail_hits.append(slug)
        if slug not in self.pages:
            return web.Response(status=404, text="not found")
        return web.Response(text=self.pages[slug], content_type="text/html")

    async def _webhook(self, request: web.Request) -> web.Response:
        self.posts.append(await request.json())
        if self.webhook_status >= 400:
            return web.Response(status=self.webhook_status, text=self.webhook_body)
        return web.Response(status=self.webhook_status)

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/summary.json", self._summary)
        app.router.add_get("/incidents/{slug}", self._detail)
        app.router.add_post("/webhook", self._webhook)
        return app


@pytest.fixture
def site() -> FakeStatusSite:
    return FakeStatusSite()


@pytest.fixture
def serve(tmp_path):
    """
    Run a coroutine against a live FakeStatusSite.

    The coroutine is called with Settings whose URLs all point at the
    in-process server; detail pages under /incidents/ count as on-origin.
    """
    def _serve(site: FakeStatusSite, func):
        async def go():
            async with TestServer(site.app()) as server:
                settings = Settings(
                    webhook_url=str(server.make_url("/webhook")),
                    state_file=str(tmp_path / "state.json"),
                    summary_url=str(server.make_url("/summary.json")),
                    status_origin=str(server.make_url("/incidents/")),
                )
                return await func(settings, str(server.make_url("/")))
        return asyncio.run(go())
    return _serve
