"""Return-target validation for the login redirect.

The guard carries the originally requested path to the login view in a
query parameter. Anything that reads it back must only forward the user
to a relative path on the same origin.
"""


def is_safe_url(url: str) -> bool:
    """Check whether *url* is safe to use as a post-login return target.

    - Must be a non-empty string starting with ``/``
    - Must **not** start with ``//`` or ``/\\`` (protocol-relative)
    - Must **not** contain ``://`` (absolute URL with scheme)
    - Must **not** contain control characters

    Examples::

        >>> is_safe_url("/admin/issues")
        True
        >>> is_safe_url("/articles/42?ref=home#c2")
        True
        >>> is_safe_url("//evil.com")
        False
        >>> is_safe_url("https://evil.com")
        False
    """
    if not url or not isinstance(url, str):
        return False
    if not url.startswith("/"):
        return False
    if url.startswith(("//", "/\\")):
        return False
    if any(ord(ch) < 0x20 for ch in url):
        return False
    return "://" not in url
