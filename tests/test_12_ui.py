"""
Tests for the server-rendered article pages.
"""
from __future__ import annotations

import pytest
from httpx import AsyncClient

from tests.conftest import create_article


@pytest.mark.asyncio
async def test_article_page(client: AsyncClient):
    art = await create_article(client, "Redwood", "# Tall\n\n```python\nx = 1\n```\n")
    resp = await client.get(f"/article/{art['id']}")
    assert resp.status_code == 200
    assert "text/html" in resp.headers["content-type"]
    assert "<h1>Tall</h1>" in resp.text
    assert f"#{art['id']}" in resp.text
    # pygments stylesheet inlined
    assert ".highlight .k" in resp.text


@pytest.mark.asyncio
async def test_article_page_with_slug(client: AsyncClient):
    art = await create_article(client, "Coast Redwood", "hello")
    resp = await client.get(f"/article/{art['id']}/coast-redwood")
    assert resp.status_code == 200
    assert "<p>hello</p>" in resp.text


@pytest.mark.asyncio
async def test_slug_is_cosmetic(client: AsyncClient):
    art = await create_article(client, "Coast Redwood", "hello")
    resp = await client.get(f"/article/{art['id']}/anything-at-all")
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_missing_article_page_is_404(client: AsyncClient):
    resp = await client.get("/article/4242")
    assert resp.status_code == 404
    assert "Could not find article #4242" in resp.text


@pytest.mark.asyncio
async def test_empty_article_page_shows_notice(client: AsyncClient):
    art = await create_article(client, "Blank", "")
    resp = await client.get(f"/article/{art['id']}")
    assert "This article is empty" in resp.text


@pytest.mark.asyncio
async def test_index_lists_articles(client: AsyncClient):
    art = await create_article(client, "Coast Redwood", "x")
    resp = await client.get("/")
    assert resp.status_code == 200
    assert f'/article/{art["id"]}/coast-redwood' in resp.text


@pytest.mark.asyncio
async def test_unknown_page_is_404(client: AsyncClient):
    resp = await client.get("/no/such/page")
    assert resp.status_code == 404
