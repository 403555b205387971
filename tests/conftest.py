"""Shared fixtures."""

from __future__ import annotations

import json

import pytest

from theme_helper.app import create_app

SCRIPT_OPEN = '<script type="application/ld+json">'
SCRIPT_CLOSE = "</script>"


@pytest.fixture
def app():
    return create_app("testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def request_ctx(app):
    with app.test_request_context("https://www.example.com/products/?page=2&utm_source=x") as ctx:
        yield ctx


def decode_graph(html: str) -> list:
    assert html.startswith(SCRIPT_OPEN)
    assert html.endswith(SCRIPT_CLOSE)
    payload = json.loads(html[len(SCRIPT_OPEN):-len(SCRIPT_CLOSE)])
    assert payload["@context"] == "https://schema.org"
    assert isinstance(payload["@graph"], list)
    return payload["@graph"]


@pytest.fixture
def decode():
    return decode_graph
