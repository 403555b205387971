from theme_helper.utils.helpers import asset, config_value, current_url, e, language_tag, site_name

DEFAULTS = {
    "og": {
        "type": "website",
        "title": None,
        "site_name": None,
        "url": None,
        "image": None,
        "description": None,
        "locale": None,
    },
    "twitter": {
        "card": "summary_large_image",
        "site": None,
        "creator": None,
        "title": None,
        "description": None,
        "image": None,
    },
    "icons": {
        "favicon": None,
        "apple_touch": [],
        "icon": [],
        "manifest": None,
        "mask_icon": None,
        "mask_color": "#000000",
        "theme_color": None,
        "ms_tile_color": None,
        "ms_tile_image": None,
    },
}


def build_seo(
    *,
    title: str,
    description: str,
    image: str | None = None,
    schema: str | None = None,
    canonical: str | None = None,
    noindex: bool = False,
):
    """
    Central SEO builder.
    Returns a dict passed directly to templates.
    """
    return {
        "title": title.strip(),
        "description": description.strip(),
        "image": asset(image or config_value("THEME_DEFAULT_IMAGE")),
        "canonical": canonical or current_url(),
        "schema": schema,
        "noindex": noindex,
        "site_name": site_name(),
        "twitter_handle": config_value("THEME_TWITTER_HANDLE"),
    }


def seo_context():
    """Template context: site-wide ``seo`` defaults and the ``build_seo`` builder"""
    return {
        "seo": build_seo(title=site_name(), description=config_value("THEME_DESCRIPTION") or ""),
        "build_seo": build_seo,
    }


class MetaManager:
    """Collects <head> metadata and renders it as HTML tags"""

    def __init__(self):
        self.title = None
        self.site_name = None
        self.description = None
        self.keywords = None
        self.canonical = None
        self.prev = None
        self.next = None
        self.robots = None
        self.og = dict(DEFAULTS["og"])
        self.twitter = dict(DEFAULTS["twitter"])
        self.icons = {k: (list(v) if isinstance(v, list) else v) for k, v in DEFAULTS["icons"].items()}

    # ---- setters ----

    def set_title(self, title, site=None):
        self.title = title
        self.site_name = site or self.site_name or site_name()
        return self

    def set_description(self, description):
        self.description = description
        return self

    def set_keywords(self, keywords):
        self.keywords = keywords
        return self

    def set_robots(self, robots):
        self.robots = robots
        return self

    def set_canonical(self, canonical):
        self.canonical = canonical
        return self

    def set_prev(self, prev):
        self.prev = prev
        return self

    def set_next(self, next_url):
        self.next = next_url
        return self

    def set_og(self, **props):
        self.og.update(props)
        return self

    def set_twitter(self, **props):
        self.twitter.update(props)
        return self

    def set_icons(self, **props):
        self.icons.update(props)
        return self

    # ---- render ----

    def render_standard(self) -> str:
        out = []

        title = self.title or site_name()
        if title:
            if self.site_name and self.site_name != title:
                out.append(f"<title>{e(f'{title} | {self.site_name}'.strip())}</title>")
            else:
                out.append(f"<title>{e(title)}</title>")

        if self.description:
            out.append(f'<meta name="description" content="{e(self.description)}">')
        if self.keywords:
            out.append(f'<meta name="keywords" content="{e(self.keywords)}">')
        if self.robots:
            out.append(f'<meta name="robots" content="{e(self.robots)}">')

        if self.canonical:
            out.append(f'<link rel="canonical" href="{e(self.canonical)}">')
        if self.prev:
            out.append(f'<link rel="prev" href="{e(self.prev)}">')
        if self.next:
            out.append(f'<link rel="next" href="{e(self.next)}">')

        for prop, value in self.build_og().items():
            if value is not None and value != "":
                out.append(f'<meta property="og:{prop}" content="{e(value)}">')

        for prop, value in self.build_twitter().items():
            if value is not None and value != "":
                out.append(f'<meta name="twitter:{prop}" content="{e(value)}">')

        out.extend(self.render_icons())
        return "\n".join(out)

    def build_og(self) -> dict:
        og = dict(self.og)
        if og["title"] is None:
            og["title"] = self.title
        if og["site_name"] is None:
            og["site_name"] = self.site_name or site_name()
        if og["description"] is None:
            og["description"] = self.description
        if og["url"] is None:
            og["url"] = self.canonical or current_url(full=False)
        if og["locale"] is None:
            og["locale"] = language_tag()
        return og

    def build_twitter(self) -> dict:
        tw = dict(self.twitter)
        if tw["site"] is None:
            tw["site"] = config_value("THEME_TWITTER_HANDLE")
        if tw["title"] is None:
            tw["title"] = self.title or self.site_name or site_name()
        if tw["description"] is None:
            tw["description"] = self.description
        if tw["image"] is None:
            tw["image"] = self.og.get("image")
        return tw

    def render_icons(self) -> list:
        out = []

        def push(html):
            if html not in out:
                out.append(html)

        icons = self.icons
        if icons.get("favicon") and isinstance(icons["favicon"], str):
            push(f'<link rel="icon" href="{e(icons["favicon"])}">')

        # strings or {"href": ..., "sizes": ...}
        for icon in icons.get("apple_touch") or []:
            if isinstance(icon, str):
                push(f'<link rel="apple-touch-icon" href="{e(icon)}">')
            elif isinstance(icon, dict) and icon.get("href"):
                attrs = ['rel="apple-touch-icon"', f'href="{e(icon["href"])}"']
                if icon.get("sizes"):
                    attrs.append(f'sizes="{e(icon["sizes"])}"')
                push(f"<link {' '.join(attrs)}>")

        # strings or {"href": ..., "type": ..., "sizes": ...}
        for icon in icons.get("icon") or []:
            if isinstance(icon, str):
                push(f'<link rel="icon" href="{e(icon)}">')
            elif isinstance(icon, dict) and icon.get("href"):
                attrs = ['rel="icon"', f'href="{e(icon["href"])}"']
                if icon.get("type"):
                    attrs.append(f'type="{e(icon["type"])}"')
                if icon.get("sizes"):
                    attrs.append(f'sizes="{e(icon["sizes"])}"')
                push(f"<link {' '.join(attrs)}>")

        if icons.get("manifest") and isinstance(icons["manifest"], str):
            push(f'<link rel="manifest" href="{e(icons["manifest"])}">')

        if icons.get("theme_color") and isinstance(icons["theme_color"], str):
            push(f'<meta name="theme-color" content="{e(icons["theme_color"])}">')
        if icons.get("ms_tile_color") and isinstance(icons["ms_tile_color"], str):
            push(f'<meta name="msapplication-TileColor" content="{e(icons["ms_tile_color"])}">')
        if icons.get("ms_tile_image") and isinstance(icons["ms_tile_image"], str):
            push(f'<meta name="msapplication-TileImage" content="{e(icons["ms_tile_image"])}">')

        if icons.get("mask_icon") and isinstance(icons["mask_icon"], str):
            color = icons.get("mask_color") or "#000000"
            push(f'<link rel="mask-icon" href="{e(icons["mask_icon"])}" color="{e(color)}">')

        return out
