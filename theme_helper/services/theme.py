from flask import current_app as app, g

from theme_helper.services.alternate import AlternateBuilder
from theme_helper.services.assets import AssetManager, css, responsive_image, responsive_video
from theme_helper.services.breadcrumbs import Breadcrumbs
from theme_helper.services.hreflang import Hreflang
from theme_helper.services.schema_types import SchemaType
from theme_helper.services.seo import MetaManager, seo_context
from theme_helper.services.structured_data import StructuredData


class ThemeManager:
    """Composes the head/body renderers and the structured data generator"""

    def __init__(self, structured, meta, assets, breadcrumbs, hreflang):
        self._structured = structured
        self.meta = meta
        self.assets = assets
        self.breadcrumbs = breadcrumbs
        self.hreflang = hreflang

    # ---- structured data ----

    def structured(self, data, options=None, **kwargs) -> str:
        return self._structured.generate(data, options, **kwargs)

    def structured_errors(self):
        return self._structured.pull_errors()

    def breadcrumb_json_ld(self, items, options=None, **kwargs) -> str:
        return self.structured({
            'type': SchemaType.BREADCRUMB,
            'items': self.breadcrumbs.normalize_items(items),
        }, options, **kwargs)

    # ---- ready made fragments ----

    def render_head(self) -> str:
        parts = [
            self.meta.render_standard(),
            self.assets.render_head_links(),
            self.hreflang.render_alternates(),
        ]
        return "\n".join(part for part in parts if part)

    def render_body_end(self) -> str:
        return self.assets.render_body_scripts()


class Theme:
    """Flask extension wiring a per-request ThemeManager"""

    def __init__(self, app=None):
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        app.config.setdefault('THEME_SITE_NAME', app.name)
        app.config.setdefault('THEME_LOCALE', 'pl_PL')
        app.config.setdefault('THEME_SUPPORTED_LOCALES', [])
        app.config.setdefault('THEME_FALLBACK_LOCALE', None)
        app.config.setdefault('THEME_SCHEMA_USE_ALTERNATE', True)
        app.config.setdefault('THEME_SCHEMA_ON_INVALID', 'skip')
        app.config.setdefault('THEME_SCHEMA_ATTACH_LANGUAGE', True)

        app.extensions['theme'] = self
        app.jinja_env.globals.update(
            theme=current_theme,
            theme_structured_data=theme_structured_data,
            theme_css=css,
            responsive_image=responsive_image,
            responsive_video=responsive_video,
        )
        app.context_processor(seo_context)

    def create_manager(self, config) -> ThemeManager:
        alternate = AlternateBuilder() if config.get('THEME_SCHEMA_USE_ALTERNATE') else None
        structured = StructuredData(alternate=alternate, defaults={
            'use_alternate': config.get('THEME_SCHEMA_USE_ALTERNATE', True),
            'on_invalid': config.get('THEME_SCHEMA_ON_INVALID', 'skip'),
            'attach_language': config.get('THEME_SCHEMA_ATTACH_LANGUAGE', True),
        })
        return ThemeManager(structured, MetaManager(), AssetManager(), Breadcrumbs(), Hreflang())


def current_theme() -> ThemeManager:
    """ThemeManager of the current app context, created on first use"""
    if 'theme_manager' not in g:
        extension = app.extensions.get('theme') or Theme()
        g.theme_manager = extension.create_manager(app.config)
    return g.theme_manager


def theme_structured_data(data, options=None, **kwargs) -> str:
    """Shortcut for ``current_theme().structured(...)``"""
    return current_theme().structured(data, options, **kwargs)
