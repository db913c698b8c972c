import re

_TAG_RE = re.compile(r"<[^>]*>")


def sanitize_string(v):
    """Strip HTML tags and surrounding whitespace. Non-strings pass through untouched
    so the schema's own type check can reject them."""
    if not isinstance(v, str):
        return v
    return _TAG_RE.sub("", v).strip()


def sanitize_optional(v):
    """Like ``sanitize_string``, but a value that is empty once cleaned becomes None."""
    v = sanitize_string(v)
    if v == "":
        return None
    return v


def normalize_email(v):
    """Emails are compared case-insensitively, so they are stored lower-cased."""
    v = sanitize_string(v)
    if isinstance(v, str):
        return v.lower()
    return v
