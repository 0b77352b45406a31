from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

import httpx
import pytest
from dotenv import load_dotenv

TEST_ROOT = Path(__file__).resolve().parent

# Load test/.env first so a developer can point the suite elsewhere
load_dotenv(TEST_ROOT / ".env", override=False)

# Settings are read when cityprefs is first imported; keep the suite on SQLite
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOGFIRE_ENABLED", "false")


@pytest.fixture(autouse=True)
def _global_offline_http_guard(monkeypatch: pytest.MonkeyPatch):
    allowed_prefixes: Iterable[str] = (
        "http://localhost",
        "http://127.0.0.1",
        "http://test",
        "/",  # Allow relative paths (used by ASGI transport)
    )

    orig_sync = httpx.Client.request
    orig_async = httpx.AsyncClient.request

    def _is_allowed(url_str: str) -> bool:
        return any(url_str.startswith(p) for p in allowed_prefixes)

    def offline_sync(self, method, url, *args, **kwargs):
        url_str = str(url)
        if _is_allowed(url_str):
            return orig_sync(self, method, url, *args, **kwargs)
        raise RuntimeError(f"External HTTP blocked by global offline guard: {url_str}")

    async def offline_async(self, method, url, *args, **kwargs):
        url_str = str(url)
        if _is_allowed(url_str):
            return await orig_async(self, method, url, *args, **kwargs)
        raise RuntimeError(f"External HTTP blocked by global offline guard (async): {url_str}")

    monkeypatch.setattr(httpx.Client, "request", offline_sync, raising=True)
    monkeypatch.setattr(httpx.AsyncClient, "request", offline_async, raising=True)
