import re
import unicodedata
from urllib.parse import urlparse

__all__ = ('capitalize', 'is_url', 'lower_first', 'sanitize_identifier', 'to_camel')


def capitalize(input_string):
    if not input_string:
        return ''
    return input_string[0].upper() + input_string[1:]


def lower_first(input_string):
    if not input_string:
        return ''
    return input_string[0].lower() + input_string[1:]


def is_url(text):
    try:
        result = urlparse(text)
        return result.scheme in ('http', 'https') and bool(result.netloc)
    except (TypeError, ValueError, AttributeError):
        return False


def remove_accents(input_str):
    nfkd_form = unicodedata.normalize('NFKD', input_str)
    return ''.join(c for c in nfkd_form if not unicodedata.combining(c))


def to_camel(name: str) -> str:
    """Join `_`-separated parts, capitalising every part after the first.

    The first part is kept as is; later parts get an upper-case first letter
    and a lower-cased remainder, e.g. ``List_all_TEAMS`` -> ``ListAllTeams``.
    """
    parts = name.split('_')
    for i, part in enumerate(parts):
        if i == 0 or not part:
            continue
        parts[i] = part[:1].upper() + part[1:].lower()
    return ''.join(parts)


def sanitize_identifier(name: str) -> str:
    """Convert a string into a valid TypeScript identifier in camelCase.

    Used for namespace aliases of module names, which come from free-form tags.
    """
    parts = [p for p in re.split(r'[^A-Za-z0-9]+', remove_accents(name or '')) if p]
    if not parts:
        return 'unnamed'

    sanitized = parts[0] + ''.join(capitalize(part) for part in parts[1:])
    sanitized = lower_first(sanitized)

    if sanitized[0].isdigit():
        sanitized = '_' + sanitized
    return sanitized
