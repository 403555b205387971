"""
Schema.org JSON-LD node builder.

Maps a loosely shaped mapping of input fields onto a schema.org node for one
of the supported types, then checks required properties and value formats.

Validation failures are handled according to ``on_invalid``:

- ``"skip"`` (default) strips the offending property or sub-entity, records a
  message on the ValidationContext and returns a best-effort node,
- ``"error"`` raises SchemaValidationError on the first failure.
"""
from collections.abc import Mapping

from theme_helper.services.format_validator import is_iso8601_date, is_iso8601_duration, is_url
from theme_helper.services.schema_types import (
    DATE_PROPERTIES,
    OFFER_AVAILABILITY,
    OFFER_ITEM_CONDITION,
    REQUIRED_PROPERTIES,
    URL_PROPERTIES,
    SchemaType,
)
from theme_helper.utils.helpers import get_logger, language_tag, site_name

ON_INVALID_MODES = ('skip', 'error')


class SchemaValidationError(ValueError):
    """Raised when a node fails validation and on_invalid is "error" """


class ValidationContext:
    """Per-call collector of validation messages"""

    def __init__(self, on_invalid='skip'):
        if on_invalid not in ON_INVALID_MODES:
            raise ValueError(f"on_invalid must be one of {ON_INVALID_MODES}, got {on_invalid!r}")
        self.on_invalid = on_invalid
        self.errors = []

    def fail(self, message):
        if self.on_invalid == 'error':
            raise SchemaValidationError(message)
        get_logger().warning(f"Structured data: {message}")
        self.errors.append(message)

    def note(self, message):
        """Record a message that never aborts the build"""
        get_logger().warning(f"Structured data: {message}")
        self.errors.append(message)

    def pull(self):
        errors, self.errors = self.errors, []
        return errors


# ---------------------------------------------------------------------------
# value helpers
# ---------------------------------------------------------------------------

def is_blank(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ''
    if isinstance(value, (list, tuple, Mapping)):
        return len(value) == 0
    return False


def _add(node, prop, value):
    if not is_blank(value):
        node[prop] = value


def _first(fields, *keys):
    """First value among ``keys`` that is not None"""
    for key in keys:
        value = fields.get(key)
        if value is not None:
            return value
    return None


def _compact(entry):
    return {k: v for k, v in entry.items() if v is not None}


def as_list(value) -> list:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def as_images(value) -> list:
    return [item for item in as_list(value) if not is_blank(item)]


def as_person_or_org(value, prefer_org=False):
    default_type = 'Organization' if prefer_org else 'Person'
    if isinstance(value, Mapping):
        if '@type' in value:
            return dict(value)
        if value.get('name') is not None:
            return {'@type': default_type, **value}
        return None
    if isinstance(value, str):
        return {'@type': default_type, 'name': value}
    return None


def _looks_like_offer(value):
    return isinstance(value, Mapping) and any(k in value for k in ('price', 'priceCurrency', 'currency'))


def normalize_offers(offers, context):
    if _looks_like_offer(offers):
        offers = [offers]

    out = []
    for offer in as_list(offers):
        if not isinstance(offer, Mapping):
            continue
        entry = _compact({
            '@type': 'Offer',
            'price': offer.get('price'),
            'priceCurrency': _first(offer, 'priceCurrency', 'currency'),
            'availability': offer.get('availability'),
            'url': offer.get('url'),
            'priceValidUntil': offer.get('priceValidUntil'),
            'itemCondition': offer.get('itemCondition'),
            'seller': offer.get('seller'),
        })

        if is_blank(entry.get('price')) or is_blank(entry.get('priceCurrency')):
            context.fail('Offer missing price/priceCurrency')
            continue
        if not is_blank(entry.get('url')) and not is_url(entry['url']):
            context.fail('Offer.url must be a valid URL')
            del entry['url']
        if not is_blank(entry.get('priceValidUntil')) and not is_iso8601_date(entry['priceValidUntil']):
            context.fail('Offer.priceValidUntil must be ISO8601 date/datetime')
            del entry['priceValidUntil']
        availability = entry.get('availability')
        if not is_blank(availability) and availability not in OFFER_AVAILABILITY and not is_url(availability):
            context.fail('Offer.availability must be schema.org URL enum or valid URL')
            del entry['availability']
        condition = entry.get('itemCondition')
        if not is_blank(condition) and condition not in OFFER_ITEM_CONDITION and not is_url(condition):
            context.fail('Offer.itemCondition must be schema.org URL enum or valid URL')
            del entry['itemCondition']
        out.append(entry)
    return out


def normalize_aggregate_rating(rating, context):
    if not isinstance(rating, Mapping):
        return None
    entry = _compact({
        '@type': 'AggregateRating',
        'ratingValue': rating.get('ratingValue'),
        'reviewCount': _first(rating, 'reviewCount', 'ratingCount'),
        'bestRating': rating.get('bestRating'),
        'worstRating': rating.get('worstRating'),
    })
    if is_blank(entry.get('ratingValue')):
        context.fail('AggregateRating missing ratingValue')
        return None
    return entry


def normalize_list_items(items, link_key='item'):
    """ListItem entries with 1-based positions; ``link_key`` is "item" or "url" """
    alias = 'url' if link_key == 'item' else 'item'
    out = []
    for index, item in enumerate(as_list(items)):
        if not isinstance(item, Mapping):
            item = {'name': item}
        entry = {
            '@type': 'ListItem',
            'position': index + 1 if item.get('position') is None else item['position'],
        }
        if link_key == 'item':
            entry['name'] = item.get('name')
            entry['item'] = _first(item, 'item', alias)
        else:
            entry['url'] = _first(item, 'url', alias)
            entry['name'] = item.get('name')
        out.append(_compact(entry))
    return out


def normalize_steps(steps):
    out = []
    for step in as_list(steps):
        if isinstance(step, str):
            if step.strip():
                out.append({'@type': 'HowToStep', 'text': step})
        elif isinstance(step, Mapping):
            if step:
                out.append(dict(step) if '@type' in step else {'@type': 'HowToStep', **step})
    return out


# ---------------------------------------------------------------------------
# per-type extraction
# ---------------------------------------------------------------------------

def _product(node, d, context):
    _add(node, 'name', _first(d, 'name') or site_name())
    _add(node, 'description', d.get('description'))
    _add(node, 'image', as_images(d.get('image')))
    _add(node, 'sku', d.get('sku'))
    brand = d.get('brand')
    if not is_blank(brand):
        if isinstance(brand, Mapping):
            _add(node, 'brand', {'@type': 'Brand', **brand})
        else:
            _add(node, 'brand', {'@type': 'Brand', 'name': brand})
    if not is_blank(d.get('offers')):
        _add(node, 'offers', normalize_offers(d['offers'], context))
    if not is_blank(d.get('aggregateRating')):
        _add(node, 'aggregateRating', normalize_aggregate_rating(d['aggregateRating'], context))


def _article(node, d, context):
    _add(node, 'headline', _first(d, 'headline', 'title'))
    _add(node, 'description', d.get('description'))
    _add(node, 'image', as_images(d.get('image')))
    _add(node, 'datePublished', d.get('datePublished'))
    _add(node, 'dateModified', d.get('dateModified'))
    if not is_blank(d.get('author')):
        _add(node, 'author', as_person_or_org(d['author']))
    if not is_blank(d.get('publisher')):
        _add(node, 'publisher', as_person_or_org(d['publisher'], prefer_org=True))
    _add(node, 'mainEntityOfPage', _first(d, 'url', 'mainEntityOfPage'))


def _breadcrumb(node, d, context):
    _add(node, 'itemListElement', normalize_list_items(d.get('items'), link_key='item'))


def _event(node, d, context):
    _add(node, 'name', d.get('name'))
    _add(node, 'startDate', d.get('startDate'))
    _add(node, 'endDate', d.get('endDate'))
    _add(node, 'eventStatus', d.get('eventStatus'))
    _add(node, 'eventAttendanceMode', d.get('eventAttendanceMode'))
    _add(node, 'location', d.get('location'))
    _add(node, 'image', as_images(d.get('image')))
    _add(node, 'description', d.get('description'))
    if not is_blank(d.get('offers')):
        _add(node, 'offers', normalize_offers(d['offers'], context))
    if not is_blank(d.get('organizer')):
        _add(node, 'organizer', as_person_or_org(d['organizer'], prefer_org=True))
    if not is_blank(d.get('performer')):
        _add(node, 'performer', as_person_or_org(d['performer']))


def _faq_page(node, d, context):
    questions = []
    for faq in as_list(d.get('faqs')):
        if not isinstance(faq, Mapping):
            continue
        questions.append(_compact({
            '@type': 'Question',
            'name': faq.get('question'),
            'acceptedAnswer': _compact({'@type': 'Answer', 'text': faq.get('answer')}),
        }))
    _add(node, 'mainEntity', questions)


def _how_to(node, d, context):
    _add(node, 'name', d.get('name'))
    _add(node, 'description', d.get('description'))
    _add(node, 'image', as_images(d.get('image')))
    _add(node, 'totalTime', d.get('totalTime'))
    _add(node, 'tool', d.get('tool'))
    _add(node, 'supply', d.get('supply'))
    _add(node, 'step', normalize_steps(d.get('step')))


def _local_business(node, d, context):
    _add(node, 'name', _first(d, 'name') or site_name())
    _add(node, 'image', as_images(d.get('image')))
    _add(node, 'url', d.get('url'))
    _add(node, 'telephone', d.get('telephone'))
    _add(node, 'address', d.get('address'))
    _add(node, 'geo', d.get('geo'))
    _add(node, 'openingHours', d.get('openingHours'))
    _add(node, 'sameAs', d.get('sameAs'))


def _video_object(node, d, context):
    _add(node, 'name', d.get('name'))
    _add(node, 'description', d.get('description'))
    _add(node, 'thumbnailUrl', as_images(d.get('thumbnailUrl')))
    _add(node, 'uploadDate', d.get('uploadDate'))
    _add(node, 'duration', d.get('duration'))
    _add(node, 'contentUrl', d.get('contentUrl'))
    _add(node, 'embedUrl', d.get('embedUrl'))
    if not is_blank(d.get('publisher')):
        _add(node, 'publisher', as_person_or_org(d['publisher'], prefer_org=True))


def _recipe(node, d, context):
    _add(node, 'name', d.get('name'))
    _add(node, 'description', d.get('description'))
    _add(node, 'image', as_images(d.get('image')))
    _add(node, 'recipeIngredient', as_list(d.get('recipeIngredient')))
    _add(node, 'recipeInstructions', as_list(d.get('recipeInstructions')))
    if not is_blank(d.get('aggregateRating')):
        _add(node, 'aggregateRating', normalize_aggregate_rating(d['aggregateRating'], context))
    if not is_blank(d.get('author')):
        _add(node, 'author', as_person_or_org(d['author']))
    _add(node, 'totalTime', d.get('totalTime'))


def _software_application(node, d, context):
    _add(node, 'name', d.get('name'))
    _add(node, 'operatingSystem', d.get('operatingSystem'))
    _add(node, 'applicationCategory', d.get('applicationCategory'))
    if not is_blank(d.get('offers')):
        _add(node, 'offers', normalize_offers(d['offers'], context))
    if not is_blank(d.get('aggregateRating')):
        _add(node, 'aggregateRating', normalize_aggregate_rating(d['aggregateRating'], context))


def _job_posting(node, d, context):
    _add(node, 'title', d.get('title'))
    _add(node, 'description', d.get('description'))
    _add(node, 'datePosted', d.get('datePosted'))
    _add(node, 'validThrough', d.get('validThrough'))
    _add(node, 'employmentType', d.get('employmentType'))
    if not is_blank(d.get('hiringOrganization')):
        _add(node, 'hiringOrganization', as_person_or_org(d['hiringOrganization'], prefer_org=True))
    _add(node, 'jobLocation', d.get('jobLocation'))
    _add(node, 'baseSalary', d.get('baseSalary'))


def _item_list(node, d, context):
    _add(node, 'itemListElement', normalize_list_items(d.get('items'), link_key='url'))


def _image_object(node, d, context):
    _add(node, 'contentUrl', _first(d, 'contentUrl', 'url'))
    _add(node, 'caption', d.get('caption'))
    _add(node, 'width', d.get('width'))
    _add(node, 'height', d.get('height'))


def _website(node, d, context):
    _add(node, 'url', d.get('url'))
    _add(node, 'name', _first(d, 'name') or site_name())
    if not is_blank(d.get('searchUrl')):
        _add(node, 'potentialAction', [{
            '@type': 'SearchAction',
            'target': d['searchUrl'],
            'query-input': 'required name=query',
        }])


def _webpage(node, d, context):
    _add(node, 'url', d.get('url'))
    _add(node, 'name', _first(d, 'name', 'title'))
    _add(node, 'isPartOf', d.get('isPartOf'))
    _add(node, 'breadcrumb', d.get('breadcrumb'))
    _add(node, 'primaryImageOfPage', d.get('primaryImageOfPage'))


def _organization(node, d, context):
    _add(node, 'name', _first(d, 'name') or site_name())
    _add(node, 'url', d.get('url'))
    _add(node, 'logo', d.get('logo'))
    _add(node, 'sameAs', d.get('sameAs'))
    _add(node, 'contactPoint', d.get('contactPoint'))


EXTRACTORS = {
    SchemaType.PRODUCT: _product,
    SchemaType.ARTICLE: _article,
    SchemaType.NEWSARTICLE: _article,
    SchemaType.BLOGPOSTING: _article,
    SchemaType.BREADCRUMB: _breadcrumb,
    SchemaType.EVENT: _event,
    SchemaType.FAQPAGE: _faq_page,
    SchemaType.HOWTO: _how_to,
    SchemaType.LOCALBUSINESS: _local_business,
    SchemaType.VIDEOOBJECT: _video_object,
    SchemaType.RECIPE: _recipe,
    SchemaType.SOFTWAREAPPLICATION: _software_application,
    SchemaType.JOBPOSTING: _job_posting,
    SchemaType.ITEMLIST: _item_list,
    SchemaType.IMAGEOBJECT: _image_object,
    SchemaType.WEBSITE: _website,
    SchemaType.WEBPAGE: _webpage,
    SchemaType.ORGANIZATION: _organization,
}


# ---------------------------------------------------------------------------
# validation
# ---------------------------------------------------------------------------

def _is_present(node, prop):
    if prop not in node:
        return False
    value = node[prop]
    if isinstance(value, (list, tuple, Mapping)):
        return len(value) > 0
    return value is not None and value != ''


def validate_required(schema_type, node, context):
    variant = SchemaType.resolve(schema_type)
    for prop in REQUIRED_PROPERTIES.get(variant, ()):
        if not _is_present(node, prop):
            context.fail(f"{schema_type} missing required property: {prop}")


def validate_formats(schema_type, node, context):
    for prop in URL_PROPERTIES:
        if node.get(prop) is not None and not is_url(node[prop]):
            context.fail(f"{prop} must be a valid URL")
            del node[prop]

    for prop in DATE_PROPERTIES:
        if node.get(prop) is not None and not is_iso8601_date(node[prop]):
            context.fail(f"{prop} must be ISO8601 date/datetime")
            del node[prop]

    if SchemaType.resolve(schema_type) is SchemaType.VIDEOOBJECT:
        if node.get('duration') is not None and not is_iso8601_duration(node['duration']):
            context.fail('duration must be ISO8601 duration')
            del node['duration']


def validate_node(schema_type, node, context):
    """Required and format checks on an assembled node.

    Returns a copy with invalid properties removed; the input is untouched.
    """
    schema_type = str(schema_type)
    checked = dict(node)
    validate_required(schema_type, checked, context)
    validate_formats(schema_type, checked, context)
    return checked


def validate_sub_entities(node, context):
    """Offer and rating checks on a node assembled outside ``build_node``.

    Returns a copy; entries that fail are dropped the same way the regular
    extraction drops them.
    """
    checked = dict(node)
    if 'offers' in checked:
        offers = normalize_offers(checked['offers'], context)
        if offers:
            checked['offers'] = offers
        else:
            del checked['offers']
    if 'aggregateRating' in checked:
        rating = normalize_aggregate_rating(checked['aggregateRating'], context)
        if rating:
            checked['aggregateRating'] = rating
        else:
            del checked['aggregateRating']
    return checked


def attach_language(node, locale=None):
    if 'inLanguage' not in node:
        node['inLanguage'] = language_tag(locale)
    return node


def build_node(schema_type, fields, on_invalid='skip', attach_lang=True, context=None, locale=None):
    """Build a validated JSON-LD node of ``schema_type`` from ``fields``.

    Unknown type names keep their ``@type`` but use the Organization shape.
    """
    context = context or ValidationContext(on_invalid)
    schema_type = str(schema_type)
    fields = fields or {}

    node = {'@type': schema_type}
    _add(node, '@id', fields.get('@id'))
    extract = EXTRACTORS.get(SchemaType.resolve(schema_type), _organization)
    extract(node, fields, context)
    _add(node, 'inLanguage', fields.get('inLanguage'))

    if attach_lang:
        attach_language(node, locale)

    return validate_node(schema_type, node, context)
