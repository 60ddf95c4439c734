"""URL-safe slugs for program names, with Russian transliteration."""
import re
import unicodedata

CYRILLIC_TO_LATIN = {
    "а": "a",
    "б": "b",
    "в": "v",
    "г": "g",
    "д": "d",
    "е": "e",
    "ё": "yo",
    "ж": "zh",
    "з": "z",
    "и": "i",
    "й": "y",
    "к": "k",
    "л": "l",
    "м": "m",
    "н": "n",
    "о": "o",
    "п": "p",
    "р": "r",
    "с": "s",
    "т": "t",
    "у": "u",
    "ф": "f",
    "х": "h",
    "ц": "ts",
    "ч": "ch",
    "ш": "sh",
    "щ": "sch",
    "ы": "y",
    "э": "e",
    "ю": "yu",
    "я": "ya",
    "ь": "",
    "ъ": "",
}

DEFAULT_SLUG_LENGTH = 32

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_COMBINING_MARKS = re.compile(r"[\u0300-\u036f]")


def generate_slug(name: str, max_length: int = DEFAULT_SLUG_LENGTH) -> str:
    """Derive a lowercase Latin slug from ``name``.

    "Утренний Кофе" -> "utrenniy-kofe". Deterministic, and applying it to
    its own output returns the same string.
    """
    slug = "".join(CYRILLIC_TO_LATIN.get(ch, ch) for ch in name.lower())
    slug = unicodedata.normalize("NFD", slug)
    slug = _COMBINING_MARKS.sub("", slug)
    slug = _NON_ALNUM.sub("-", slug).strip("-")
    return slug[:max_length].rstrip("-")
