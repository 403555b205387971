"""JSON-LD node builder tests."""

from __future__ import annotations

import pytest

from theme_helper.services.schema import (
    SchemaValidationError,
    ValidationContext,
    as_images,
    as_person_or_org,
    build_node,
    normalize_aggregate_rating,
    normalize_offers,
    validate_node,
)
from theme_helper.services.schema_types import REQUIRED_PROPERTIES, SchemaType

MINIMAL_FIELDS = {
    SchemaType.PRODUCT: {"name": "X", "offers": [{"price": "10", "priceCurrency": "USD"}]},
    SchemaType.ARTICLE: {"headline": "Title"},
    SchemaType.NEWSARTICLE: {"title": "Title"},
    SchemaType.BLOGPOSTING: {"headline": "Title"},
    SchemaType.BREADCRUMB: {"items": [{"name": "Home", "item": "https://e.com/"}]},
    SchemaType.EVENT: {"name": "Fair", "startDate": "2025-05-01T12:00:00+01:00", "location": "Hall"},
    SchemaType.FAQPAGE: {"faqs": [{"question": "Why?", "answer": "Because."}]},
    SchemaType.HOWTO: {"name": "Build a shed", "step": ["Dig", "Build"]},
    SchemaType.LOCALBUSINESS: {"name": "Shop", "address": "Main St 1"},
    SchemaType.VIDEOOBJECT: {"name": "Clip", "thumbnailUrl": "https://e.com/t.jpg", "uploadDate": "2025-01-01"},
    SchemaType.RECIPE: {"name": "Soup", "recipeIngredient": ["water"], "recipeInstructions": ["boil"]},
    SchemaType.SOFTWAREAPPLICATION: {"name": "App", "operatingSystem": "Linux"},
    SchemaType.JOBPOSTING: {"title": "Dev", "hiringOrganization": "ACME", "jobLocation": {"@type": "Place"}},
    SchemaType.ITEMLIST: {"items": [{"url": "https://e.com/1"}]},
    SchemaType.IMAGEOBJECT: {"url": "https://e.com/i.jpg"},
    SchemaType.WEBSITE: {"url": "https://e.com/", "name": "E"},
    SchemaType.WEBPAGE: {"url": "https://e.com/", "title": "E"},
    SchemaType.ORGANIZATION: {"name": "ACME"},
}


@pytest.mark.parametrize("schema_type", list(REQUIRED_PROPERTIES))
def test_minimal_fields_satisfy_required_properties(schema_type) -> None:
    node = build_node(schema_type, MINIMAL_FIELDS[schema_type], on_invalid="error")

    assert node["@type"] == schema_type.value
    for prop in REQUIRED_PROPERTIES[schema_type]:
        assert node[prop]


def test_product_scenario_is_emitted_in_order() -> None:
    node = build_node("Product", {"name": "X", "offers": [{"price": "10", "priceCurrency": "USD"}]},
                      on_invalid="error")

    assert list(node) == ["@type", "name", "offers", "inLanguage"]
    assert node["offers"] == [{"@type": "Offer", "price": "10", "priceCurrency": "USD"}]
    assert node["inLanguage"] == "pl-PL"


def test_blank_values_are_never_emitted() -> None:
    node = build_node("Article", {"headline": "H", "description": "   ", "image": ["", " "], "author": None})

    assert "description" not in node
    assert "image" not in node
    assert "author" not in node


def test_article_headline_falls_back_to_title_and_url_becomes_main_entity() -> None:
    node = build_node("BlogPosting", {"title": "T", "url": "https://e.com/a", "author": "Ann",
                                      "publisher": {"name": "ACME"}})

    assert node["headline"] == "T"
    assert node["mainEntityOfPage"] == "https://e.com/a"
    assert node["author"] == {"@type": "Person", "name": "Ann"}
    assert node["publisher"] == {"@type": "Organization", "name": "ACME"}


def test_person_or_org_reference_rules() -> None:
    assert as_person_or_org("Ann") == {"@type": "Person", "name": "Ann"}
    assert as_person_or_org("ACME", prefer_org=True) == {"@type": "Organization", "name": "ACME"}
    assert as_person_or_org({"@type": "Corporation", "legalName": "A"}) == {"@type": "Corporation", "legalName": "A"}
    assert as_person_or_org({"url": "https://e.com"}) is None
    assert as_person_or_org(42) is None


def test_images_are_normalized_to_a_list() -> None:
    assert as_images("https://e.com/a.jpg") == ["https://e.com/a.jpg"]
    assert as_images({"@type": "ImageObject", "url": "u"}) == [{"@type": "ImageObject", "url": "u"}]
    assert as_images(["a", "", {}, "b"]) == ["a", "b"]
    assert as_images(None) == []


def test_offer_without_price_is_dropped_with_message() -> None:
    context = ValidationContext("skip")

    offers = normalize_offers([{"priceCurrency": "USD"}, {"price": "5", "currency": "PLN"}], context)

    assert offers == [{"@type": "Offer", "price": "5", "priceCurrency": "PLN"}]
    assert context.errors == ["Offer missing price/priceCurrency"]


def test_offer_without_currency_raises_in_error_mode() -> None:
    with pytest.raises(SchemaValidationError, match="Offer missing price/priceCurrency"):
        build_node("Product", {"name": "X", "offers": [{"price": "10"}]}, on_invalid="error")


def test_single_offer_mapping_is_accepted() -> None:
    node = build_node("Product", {"name": "X", "offers": {"price": 10, "priceCurrency": "EUR"}})

    assert node["offers"] == [{"@type": "Offer", "price": 10, "priceCurrency": "EUR"}]


def test_invalid_offer_properties_are_stripped_individually() -> None:
    context = ValidationContext("skip")

    offers = normalize_offers([{
        "price": "10",
        "priceCurrency": "USD",
        "url": "nope",
        "priceValidUntil": "tomorrow",
        "availability": "InStock",
        "itemCondition": "https://schema.org/NewCondition",
    }], context)

    assert offers == [{
        "@type": "Offer",
        "price": "10",
        "priceCurrency": "USD",
        "itemCondition": "https://schema.org/NewCondition",
    }]
    assert context.errors == [
        "Offer.url must be a valid URL",
        "Offer.priceValidUntil must be ISO8601 date/datetime",
        "Offer.availability must be schema.org URL enum or valid URL",
    ]


def test_aggregate_rating_uses_rating_count_fallback() -> None:
    context = ValidationContext("skip")

    rating = normalize_aggregate_rating({"ratingValue": 4.8, "ratingCount": 37}, context)

    assert rating == {"@type": "AggregateRating", "ratingValue": 4.8, "reviewCount": 37}


def test_aggregate_rating_without_value_is_dropped() -> None:
    node = build_node("SoftwareApplication", {"name": "App", "operatingSystem": "iOS",
                                              "aggregateRating": {"reviewCount": 3}})

    assert "aggregateRating" not in node


def test_breadcrumb_positions_default_to_index() -> None:
    node = build_node("BreadcrumbList", {"items": [
        {"name": "Home", "item": "https://e.com/"},
        {"name": "Cat"},
        {"name": "Leaf", "url": "https://e.com/leaf", "position": 7},
    ]})

    assert node["itemListElement"] == [
        {"@type": "ListItem", "position": 1, "name": "Home", "item": "https://e.com/"},
        {"@type": "ListItem", "position": 2, "name": "Cat"},
        {"@type": "ListItem", "position": 7, "name": "Leaf", "item": "https://e.com/leaf"},
    ]


def test_item_list_prefers_url() -> None:
    node = build_node("ItemList", {"items": [{"item": "https://e.com/1", "name": "One"}]})

    assert node["itemListElement"] == [
        {"@type": "ListItem", "position": 1, "url": "https://e.com/1", "name": "One"},
    ]


def test_faq_page_builds_questions_and_answers() -> None:
    node = build_node("FAQPage", {"faqs": [{"question": "Q?", "answer": "A."}]})

    assert node["mainEntity"] == [
        {"@type": "Question", "name": "Q?", "acceptedAnswer": {"@type": "Answer", "text": "A."}},
    ]


def test_how_to_steps_become_how_to_step_entries() -> None:
    node = build_node("HowTo", {"name": "N", "step": ["Dig", {"text": "Build"}, {"@type": "HowToSection"}]})

    assert node["step"] == [
        {"@type": "HowToStep", "text": "Dig"},
        {"@type": "HowToStep", "text": "Build"},
        {"@type": "HowToSection"},
    ]


def test_website_search_action() -> None:
    node = build_node("WebSite", {"url": "https://e.com/", "name": "E", "searchUrl": "https://e.com/s?q={q}"})

    assert node["potentialAction"] == [{
        "@type": "SearchAction",
        "target": "https://e.com/s?q={q}",
        "query-input": "required name=query",
    }]


def test_unknown_type_uses_organization_shape() -> None:
    node = build_node("Corporation", {"name": "ACME", "logo": "https://e.com/l.png", "sku": "ignored"})

    assert node == {"@type": "Corporation", "name": "ACME", "logo": "https://e.com/l.png", "inLanguage": "pl-PL"}


def test_missing_required_property_is_reported() -> None:
    context = ValidationContext("skip")

    node = build_node("Event", {"name": "Fair", "location": "Hall"}, context=context)

    assert node["name"] == "Fair"
    assert context.errors == ["Event missing required property: startDate"]


def test_missing_required_property_raises_in_error_mode() -> None:
    with pytest.raises(SchemaValidationError, match="WebSite missing required property: url"):
        build_node("WebSite", {"name": "E"}, on_invalid="error")


def test_invalid_url_is_stripped_in_skip_mode() -> None:
    context = ValidationContext("skip")

    node = build_node("Organization", {"name": "ACME", "url": "not a url"}, context=context)

    assert "url" not in node
    assert context.errors == ["url must be a valid URL"]


def test_invalid_dates_and_duration_are_stripped() -> None:
    context = ValidationContext("skip")

    node = build_node("VideoObject", {
        "name": "Clip",
        "thumbnailUrl": ["https://e.com/t.jpg"],
        "uploadDate": "2025-01-01",
        "duration": "90 minutes",
        "embedUrl": "https://e.com/embed/1",
    }, context=context)

    assert "duration" not in node
    assert node["embedUrl"] == "https://e.com/embed/1"
    assert context.errors == ["duration must be ISO8601 duration"]


def test_language_is_not_attached_when_disabled_or_given() -> None:
    assert "inLanguage" not in build_node("Organization", {"name": "A"}, attach_lang=False)
    assert build_node("Organization", {"name": "A", "inLanguage": "en"})["inLanguage"] == "en"
    assert build_node("Organization", {"name": "A"}, locale="en_GB")["inLanguage"] == "en-GB"


def test_validate_node_leaves_input_untouched() -> None:
    node = {"@type": "WebPage", "url": "bad", "name": "N"}

    checked = validate_node("WebPage", node, ValidationContext("skip"))

    assert node["url"] == "bad"
    assert checked == {"@type": "WebPage", "name": "N"}


def test_unknown_on_invalid_mode_is_rejected() -> None:
    with pytest.raises(ValueError):
        ValidationContext("ignore")


def test_site_name_is_the_default_name(app) -> None:
    with app.app_context():
        node = build_node("Organization", {})

    assert node["name"] == "Example Site"


def test_explicit_zero_position_is_kept() -> None:
    node = build_node("BreadcrumbList", {"items": [{"name": "Root", "position": 0}, {"name": "Cat"}]})

    assert [element["position"] for element in node["itemListElement"]] == [0, 2]
