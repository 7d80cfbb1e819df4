from fastapi import Request

from sessionflash.utils.htmx import hx_redirect, is_ajax, is_htmx, wants_flash_header


def make_request(*headers: tuple[str, str]) -> Request:
    raw = [(name.lower().encode(), value.encode()) for name, value in headers]
    return Request({"type": "http", "method": "GET", "path": "/", "headers": raw})


def test_is_ajax_xhr_and_htmx() -> None:
    assert is_ajax(make_request(("X-Requested-With", "XMLHttpRequest")))
    assert is_ajax(make_request(("HX-Request", "true")))
    assert is_htmx(make_request(("HX-Request", "TRUE")))
    assert not is_ajax(make_request())
    assert not is_ajax(make_request(("X-Requested-With", "fetch")))


def test_wants_flash_header_values() -> None:
    assert wants_flash_header(make_request(("X-Get-Flash", "Yes")))
    assert wants_flash_header(make_request(("X-Get-Flash", "no"), ("X-Get-Flash", "yes")))
    assert wants_flash_header(make_request(("X-Get-Flash", "no, YES")))
    assert not wants_flash_header(make_request(("X-Get-Flash", "true")))
    assert not wants_flash_header(make_request())


def test_hx_redirect() -> None:
    resp = hx_redirect("/")
    assert resp.status_code == 204
    assert resp.headers["HX-Redirect"] == "/"
