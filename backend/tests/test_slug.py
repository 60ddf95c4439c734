import pytest

from radiolib.core.slug import generate_slug


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Утренний Кофе", "utrenniy-kofe"),
        ("Jazz Hour", "jazz-hour"),
        ("Щука и Ёж", "schuka-i-yozh"),
        ("Подъезд", "podezd"),
        ("Café del Mar", "cafe-del-mar"),
        ("  --Hello,   World!--  ", "hello-world"),
        ("!!!", ""),
    ],
)
def test_generate_slug(name, expected):
    assert generate_slug(name) == expected


def test_slug_is_truncated_without_trailing_hyphen():
    slug = generate_slug("a" * 31 + " b")
    assert slug == "a" * 31
    assert len(generate_slug("word " * 20)) <= 32


def test_custom_length():
    assert generate_slug("Jazz Hour Tonight", max_length=9) == "jazz-hour"


def test_slug_is_idempotent():
    for name in ["Утренний Кофе", "Café del Mar", "x" * 50]:
        slug = generate_slug(name)
        assert generate_slug(slug) == slug
