import re
from urllib.parse import urlsplit

ISO8601_DATE = re.compile(r'^\d{4}-\d{2}-\d{2}([T ]\d{2}:\d{2}(:\d{2})?(Z|[+\-]\d{2}:\d{2})?)?$')
ISO8601_DURATION = re.compile(r'^P(?!$)(\d+Y)?(\d+M)?(\d+D)?(T(?=\d)(\d+H)?(\d+M)?(\d+S)?)?$')

_SCHEME = re.compile(r'^[a-zA-Z][a-zA-Z0-9+.\-]*$')
_HOSTLESS_SCHEMES = ('mailto', 'tel', 'urn')


def is_url(value) -> bool:
    """True for a non-empty, well-formed absolute URL"""
    if not isinstance(value, str) or value == '' or any(ch.isspace() for ch in value):
        return False
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    if not parts.scheme or not _SCHEME.match(parts.scheme):
        return False
    if parts.scheme.lower() in _HOSTLESS_SCHEMES:
        return bool(parts.path)
    return bool(parts.netloc) and parts.hostname is not None


def is_iso8601_date(value) -> bool:
    """YYYY-MM-DD with an optional time part and UTC offset"""
    return isinstance(value, str) and value != '' and ISO8601_DATE.fullmatch(value) is not None


def is_iso8601_duration(value) -> bool:
    """PnYnMnDTnHnMnS with at least one component"""
    return isinstance(value, str) and value != '' and ISO8601_DURATION.fullmatch(value) is not None
