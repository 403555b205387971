from flask import has_request_context, request, url_for

from theme_helper.utils.helpers import config_value, e, language_tag

LOCALE_ARG = 'lang_code'


class Hreflang:
    """<link rel="alternate" hreflang="..."> entries for the current page"""

    def __init__(self):
        self.alternates = []

    def clear(self):
        self.alternates = []
        return self

    def auto(self, locales=None, fallback_locale=None):
        """Alternates for every supported locale of the current endpoint.

        URLs are built with ``url_for`` passing the locale as ``lang_code``:
        a route declaring ``<lang_code>`` gets it in the path, any other route
        in the query string. Adds ``x-default`` for the fallback locale.
        """
        self.clear()
        if not has_request_context() or not request.endpoint:
            return self

        if locales is None:
            locales = config_value('THEME_SUPPORTED_LOCALES', [])
        if fallback_locale is None:
            fallback_locale = config_value('THEME_FALLBACK_LOCALE')

        for locale in locales:
            self.alternates.append({'href': self.localized_url(locale), 'lang': language_tag(locale)})

        if fallback_locale:
            self.alternates.append({'href': self.localized_url(fallback_locale), 'lang': 'x-default'})
        return self

    def localized_url(self, locale):
        args = dict(request.view_args or {})
        args[LOCALE_ARG] = locale
        return url_for(request.endpoint, _external=True, **args)

    def add_alternate(self, href, lang):
        self.alternates.append({'href': href, 'lang': lang})
        return self

    def render_alternates(self) -> str:
        return "\n".join(
            f'<link rel="alternate" hreflang="{e(alt["lang"])}" href="{e(alt["href"])}">'
            for alt in self.alternates
        )
