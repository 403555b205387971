from theme_helper.utils.helpers import asset, e


class AssetManager:
    """Head links (stylesheets and resource hints) and body scripts"""

    def __init__(self):
        self.head_links = []
        self.scripts = []
        self.inline_styles = []
        self.inline_scripts = []

    # ---- register ----

    def add_stylesheet(self, href, media=None):
        item = {'href': href, 'rel': 'stylesheet'}
        if media:
            item['media'] = media
        self.head_links.append(item)
        return self

    def preload(self, href, as_, crossorigin=None):
        item = {'href': href, 'rel': 'preload', 'as': as_}
        if crossorigin:
            item['crossorigin'] = crossorigin
        self.head_links.append(item)
        return self

    def prefetch(self, href):
        self.head_links.append({'href': href, 'rel': 'prefetch'})
        return self

    def dns_prefetch(self, host):
        self.head_links.append({'href': host, 'rel': 'dns-prefetch'})
        return self

    def add_script(self, src, defer=True, async_=False, attrs=None):
        self.scripts.append({'href': src, 'defer': defer, 'async': async_, 'attrs': attrs or {}})
        return self

    def inline_css(self, css):
        self.inline_styles.append(css.strip())
        return self

    def inline_js(self, js):
        self.inline_scripts.append(js.strip())
        return self

    # ---- render ----

    def render_head_links(self) -> str:
        out = []
        for link in self.head_links:
            attrs = [f'rel="{e(link["rel"])}"', f'href="{e(link["href"])}"']
            for key in ('as', 'crossorigin', 'media'):
                if link.get(key):
                    attrs.append(f'{key}="{e(link[key])}"')
            out.append(f"<link {' '.join(attrs)}>")
        if self.inline_styles:
            out.append("<style>\n" + "\n".join(self.inline_styles) + "\n</style>")
        return "\n".join(out)

    def render_body_scripts(self) -> str:
        out = []
        for script in self.scripts:
            attrs = [f'src="{e(script["href"])}"']
            if script.get('defer'):
                attrs.append('defer')
            if script.get('async'):
                attrs.append('async')
            for key, value in script.get('attrs', {}).items():
                attrs.append(f'{e(key)}="{e(value)}"')
            out.append(f"<script {' '.join(attrs)}></script>")
        if self.inline_scripts:
            out.append("<script>\n" + "\n".join(self.inline_scripts) + "\n</script>")
        return "\n".join(out)


def css(href, lazy=False) -> str:
    """Stylesheet markup; lazy sheets load with media="none" and swap on load"""
    href = e(asset(href))
    if lazy:
        return "\n".join([
            f'<link rel="stylesheet" href="{href}" type="text/css" media="none" '
            f'onload="if(media!=\'all\')media=\'all\'">',
            f'<link rel="preload" href="{href}" as="style">',
            f'<noscript><link rel="stylesheet" href="{href}"></noscript>',
        ])
    return "\n".join([
        f'<link rel="preload" href="{href}" as="style">',
        f'<link rel="stylesheet" href="{href}">',
    ])


def responsive_image(path_base, sizes=(480, 768, 1024, 1600), alt='') -> str:
    srcset = ", ".join(f"{asset(f'images/{path_base}-{size}.jpg')} {size}w" for size in sizes)
    fallback = asset(f"images/{path_base}-1024.jpg")
    return (
        "<picture>\n"
        f'  <img src="{e(fallback)}" srcset="{e(srcset)}" sizes="(max-width: 768px) 100vw, 768px" '
        f'alt="{e(alt)}" loading="lazy">\n'
        "</picture>"
    )


def responsive_video(base_name, formats=('mp4', 'webm'), poster=None,
                     fallback_text='Your browser does not support the video tag.') -> str:
    sources = "\n".join(
        f'  <source src="{e(asset(f"videos/{base_name}.{fmt}"))}" type="video/{e(fmt)}">'
        for fmt in formats
    )
    poster_attr = f' poster="{e(poster)}"' if poster else ''
    return (
        f'<video controls preload="metadata"{poster_attr}>\n'
        f"{sources}\n"
        f"  {e(fallback_text)}\n"
        "</video>"
    )
