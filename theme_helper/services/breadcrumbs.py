from theme_helper.utils.helpers import e


class Breadcrumbs:

    def normalize_items(self, items):
        """Items shaped for a BreadcrumbList (name, item, 1-based position)"""
        out = []
        for index, item in enumerate(items or []):
            out.append({
                'name': item.get('name'),
                'item': item.get('item') if item.get('item') is not None else item.get('url'),
                'position': index + 1 if item.get('position') is None else item['position'],
            })
        return out

    def render(self, items) -> str:
        """Bootstrap-style <nav aria-label="breadcrumb"> markup.

        The last item and items without a URL are rendered as the active page.
        """
        items = list(items or [])
        last = len(items) - 1
        li = []
        for index, item in enumerate(items):
            name = e(item.get('name') or '')
            url = item.get('url')
            if index == last or not url:
                li.append(f'<li class="breadcrumb-item active" aria-current="page">{name}</li>')
            else:
                li.append(f'<li class="breadcrumb-item"><a href="{e(url)}">{name}</a></li>')
        return f'<nav aria-label="breadcrumb"><ol class="breadcrumb">{"".join(li)}</ol></nav>'
