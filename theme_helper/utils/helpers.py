import logging
from urllib.parse import parse_qsl, urlencode, urlsplit

from flask import current_app as app, g, has_app_context, has_request_context, request
from markupsafe import escape

DEFAULT_LOCALE = 'pl_PL'

_fallback_logger = logging.getLogger('theme_helper')


def get_logger():
    """Flask app logger inside an app context, package logger otherwise"""
    if has_app_context():
        return app.logger
    return _fallback_logger


def config_value(key, default=None):
    if has_app_context():
        return app.config.get(key, default)
    return default


def get_locale():
    """Active locale in "xx_YY" form.

    A locale selected for the current request (``g.locale``) wins over the
    configured application locale.
    """
    if has_request_context():
        locale = getattr(g, 'locale', None)
        if locale:
            return locale
    return config_value('THEME_LOCALE')


def language_tag(locale=None):
    """BCP 47 style tag ("pl-PL") for ``locale`` or the active locale"""
    locale = locale or get_locale() or DEFAULT_LOCALE
    return str(locale).replace('_', '-')


def site_name():
    return config_value('THEME_SITE_NAME')


def e(value) -> str:
    """Escape for use inside HTML text and attribute values"""
    if value is None:
        return ''
    return str(escape(value))


def asset(path: str) -> str:
    """Absolute URL for a public path, left untouched when already absolute"""
    if not path or urlsplit(path).scheme:
        return path
    if not has_request_context():
        return path
    base_url = request.host_url.rstrip('/')
    return f"{base_url}/{path.lstrip('/')}"


def current_url(full=True):
    if not has_request_context():
        return None
    return request.url if full else request.base_url


def canonical_url(current=None, preserve_query_params=None):
    """Canonical form of ``current`` (defaults to the request URL).

    Drops the fragment, a leading ``www.`` on the host and every query
    parameter not listed in ``preserve_query_params``.
    """
    current = current or current_url()
    if not current:
        return None
    if preserve_query_params is None:
        preserve_query_params = config_value('THEME_CANONICAL_QUERY_PARAMS', [])

    parts = urlsplit(current)
    scheme = parts.scheme or 'https'
    host = (parts.netloc or '').replace('www.', '', 1)
    query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True)
             if k in preserve_query_params]

    url = f"{scheme}://{host}{parts.path}"
    query_string = urlencode(query)
    return f"{url}?{query_string}" if query_string else url
