import re

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")

_DISALLOWED = re.compile(r"[^a-z0-9\s_-]")
_SEPARATORS = re.compile(r"[\s_-]+")


def generate_slug(text: str) -> str:
    slug = _DISALLOWED.sub("", (text or "").lower().strip())
    slug = _SEPARATORS.sub("-", slug)
    return slug.strip("-")


def is_valid_slug(value: str) -> bool:
    return bool(SLUG_PATTERN.fullmatch(value))
