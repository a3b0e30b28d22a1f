"""Slash separated path helpers.

Paths handled here are server side or URL paths, so they always use
``/`` whatever the local operating system is. ``os.path`` must not be
used for them.
"""
import posixpath


def clean_path(path: str) -> str:
    """
    Returns the shortest path name equivalent to ``path``.

    Repeated separators collapse, ``.`` and ``..`` elements are resolved
    lexically and the trailing slash is dropped except for the root.

    Examples:
        >>> clean_path('/data/')
        '/data'
        >>> clean_path('a//b/./c/..')
        'a/b'
        >>> clean_path('')
        '.'
    """
    if not path:
        return '.'
    cleaned = posixpath.normpath(path)
    # normpath keeps exactly two leading slashes
    if cleaned.startswith('//'):
        cleaned = '/' + cleaned.lstrip('/')
    return cleaned


def join_path(*parts: str) -> str:
    """Joins non-empty parts with ``/`` and cleans the result."""
    joined = '/'.join(p for p in parts if p)
    if not joined:
        return ''
    return clean_path(joined)
