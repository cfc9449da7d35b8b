"""Display formatting for PokeAPI identifiers and flavor text."""
import re

_NAME_DELIMITERS = re.compile(r"[-_]+")
_WHITESPACE = re.compile(r"\s+")
# Soft hyphens only mark where a word may break, with or without the line break after them
_SOFT_HYPHEN = re.compile(r"\u00ad[\n\f\r]?")
_CONTROL_CHARS = re.compile(r"[\n\f\r\v\t]")


def format_name(raw: str) -> str:
    """Turns an identifier like 'water-gun' into 'Water Gun'. Underscores split too."""
    segments = [segment for segment in _NAME_DELIMITERS.split(raw) if segment]
    return " ".join(segment[:1].upper() + segment[1:] for segment in segments)


def format_flavor_text(raw: str) -> str:
    """Replaces line-break and form-feed artifacts with single spaces."""
    text = _SOFT_HYPHEN.sub("", raw)
    text = _CONTROL_CHARS.sub(" ", text)
    return _WHITESPACE.sub(" ", text).strip()


def normalize_slug(raw: str) -> str:
    """Lowercases a name and joins whitespace runs with hyphens ('Mr Mime' -> 'mr-mime')."""
    return _WHITESPACE.sub("-", raw.strip().lower())
