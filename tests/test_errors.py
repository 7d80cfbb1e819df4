import pytest
from httpx import ASGITransport, AsyncClient

from sessionflash.main import create_app


@pytest.mark.anyio
async def test_404_custom_page() -> None:
    app = create_app()
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False), base_url="http://test"
    ) as ac:
        resp = await ac.get("/this-does-not-exist")

    assert resp.status_code == 404
    assert "Page not found" in resp.text


@pytest.mark.anyio
async def test_500_custom_page_non_prod(monkeypatch) -> None:
    monkeypatch.setenv("SF_ENV", "test")
    monkeypatch.setenv("SF_DEBUG", "false")

    app = create_app()
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False), base_url="http://test"
    ) as ac:
        resp = await ac.get("/debug/error")

    assert resp.status_code == 500
    assert "Server error" in resp.text


@pytest.mark.anyio
async def test_500_json_for_ajax(monkeypatch) -> None:
    monkeypatch.setenv("SF_DEBUG", "false")

    app = create_app()
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False), base_url="http://test"
    ) as ac:
        resp = await ac.get("/debug/error", headers={"X-Requested-With": "XMLHttpRequest"})

    assert resp.status_code == 500
    assert resp.json() == {"detail": "Server error", "status_code": 500}


@pytest.mark.anyio
async def test_404_page_shows_queued_flash_once() -> None:
    app = create_app()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        await ac.get("/demo/flash?msg=Before the error")

        resp = await ac.get("/missing-page")
        assert resp.status_code == 404
        assert "Before the error" in resp.text

        home = await ac.get("/")
        assert "Before the error" not in home.text


@pytest.mark.anyio
async def test_422_page_shows_queued_flash() -> None:
    app = create_app()

    @app.get("/items/{item_id}")
    def read_item(item_id: int) -> dict[str, int]:
        return {"item_id": item_id}

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        await ac.get("/demo/flash?msg=Queued earlier&severity=info")

        resp = await ac.get("/items/not-a-number")
        assert resp.status_code == 422
        assert "Queued earlier" in resp.text
        assert "item_id" in resp.text


@pytest.mark.anyio
async def test_json_error_keeps_flash_queue() -> None:
    app = create_app()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        await ac.get("/demo/flash?msg=Still waiting")

        resp = await ac.get("/demo/flash?severity=bogus", headers={"Accept": "application/json"})
        assert resp.status_code == 400
        assert resp.json()["status_code"] == 400

        home = await ac.get("/")
        assert "Still waiting" in home.text
