"""Breadcrumb renderer tests."""

from __future__ import annotations

from theme_helper.services.breadcrumbs import Breadcrumbs


def test_normalize_items() -> None:
    items = Breadcrumbs().normalize_items([{"name": "Home", "url": "https://e.com/"}, {"name": "Cat", "position": 5}])

    assert items == [
        {"name": "Home", "item": "https://e.com/", "position": 1},
        {"name": "Cat", "item": None, "position": 5},
    ]


def test_render_marks_last_and_url_less_items_active() -> None:
    html = Breadcrumbs().render([
        {"name": "Home", "url": "https://e.com/"},
        {"name": "No link"},
        {"name": "Q&A", "url": "https://e.com/qa"},
    ])

    assert html == (
        '<nav aria-label="breadcrumb"><ol class="breadcrumb">'
        '<li class="breadcrumb-item"><a href="https://e.com/">Home</a></li>'
        '<li class="breadcrumb-item active" aria-current="page">No link</li>'
        '<li class="breadcrumb-item active" aria-current="page">Q&amp;A</li>'
        "</ol></nav>"
    )


def test_normalize_items_keeps_zero_position() -> None:
    items = Breadcrumbs().normalize_items([{"name": "Root", "position": 0}])

    assert items[0]["position"] == 0
