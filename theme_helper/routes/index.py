from flask import Blueprint, abort, current_app as app, g, render_template_string

from theme_helper.services.schema_types import SchemaType
from theme_helper.services.theme import current_theme
from theme_helper.utils.helpers import canonical_url

bp = Blueprint('index', __name__)

PAGE = """<!doctype html>
<html lang="{{ lang }}">
<head>
{{ head|safe }}
{{ json_ld|safe }}
</head>
<body>
{{ breadcrumbs|safe }}
<h1>{{ title }}</h1>
<footer>{{ seo.site_name }}</footer>
{{ body_end|safe }}
</body>
</html>"""


@bp.url_value_preprocessor
def pull_lang_code(endpoint, values):
    if values and 'lang_code' in values:
        g.locale = values.pop('lang_code')


@bp.url_defaults
def add_lang_code(endpoint, values):
    if 'lang_code' in values or not getattr(g, 'locale', None):
        return
    if app.url_map.is_endpoint_expecting(endpoint, 'lang_code'):
        values['lang_code'] = g.locale


@bp.route('/')
@bp.route('/<lang_code>/')
def home():
    """Demo page assembling every head/body fragment"""
    if getattr(g, 'locale', None) and g.locale not in app.config['THEME_SUPPORTED_LOCALES']:
        abort(404)

    site = app.config['THEME_SITE_NAME']
    theme = current_theme()
    theme.meta.set_title('Home', site).set_description(f'{site} home page') \
        .set_canonical(canonical_url())
    theme.assets.preload('/static/css/app.css', 'style').add_stylesheet('/static/css/app.css') \
        .add_script('/static/js/app.js')
    theme.hreflang.auto()

    crumbs = [{'name': 'Home', 'url': canonical_url()}]
    json_ld = theme.structured({'schemas': [
        {'@type': SchemaType.WEBSITE.value, 'url': canonical_url(), 'name': site},
        {'@type': SchemaType.ORGANIZATION.value, 'name': site},
    ]})
    for message in theme.structured_errors():
        app.logger.warning(f"JSON-LD on home page: {message}")

    return render_template_string(
        PAGE,
        lang=theme.meta.build_og()['locale'],
        title='Home',
        head=theme.render_head(),
        json_ld=json_ld,
        breadcrumbs=theme.breadcrumbs.render(crumbs),
        body_end=theme.render_body_end(),
    )
