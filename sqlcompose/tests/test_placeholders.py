import pytest
from sqlcompose.compiler.placeholders import PlaceholderScheme


def test_parse_static_token() -> None:
    scheme = PlaceholderScheme.parse("?")
    assert scheme.positional is False
    assert scheme.token_for(1) == "?"
    assert scheme.token_for(42) == "?"


def test_parse_pyformat_token_is_static() -> None:
    scheme = PlaceholderScheme.parse("%s")
    assert scheme.positional is False
    assert scheme.token_for(3) == "%s"


@pytest.mark.parametrize("token, expected", [
    ("$%d", ["$1", "$2", "$10"]),
    ("@p%d", ["@p1", "@p2", "@p10"]),
    (":%d", [":1", ":2", ":10"]),
])
def test_parse_positional_token(token: str, expected: list[str]) -> None:
    scheme = PlaceholderScheme.parse(token)
    assert scheme.positional is True
    assert [scheme.token_for(position) for position in (1, 2, 10)] == expected


def test_parse_rejects_empty_token() -> None:
    with pytest.raises(ValueError, match="must not be empty"):
        PlaceholderScheme.parse("")


def test_parse_rejects_multiple_slots() -> None:
    with pytest.raises(ValueError, match="at most one '%d' slot, found 2"):
        PlaceholderScheme.parse("$%d_%d")


def test_escaped_marker_depends_on_token() -> None:
    assert PlaceholderScheme.parse("?").escaped_marker == "??"
    assert PlaceholderScheme.parse("%s").escaped_marker == "?"
    assert PlaceholderScheme.parse("$%d").escaped_marker == "?"


@pytest.mark.parametrize("token, positional, expected", [
    ("%%", False, ["%", "%"]),
    ("a%%d", False, ["a%d", "a%d"]),
    ("%%%d", True, ["%1", "%2"]),
    ("$%d%%", True, ["$1%", "$2%"]),
    ("%%s", False, ["%s", "%s"]),
])
def test_parse_literal_percent(token: str, positional: bool, expected: list[str]) -> None:
    scheme = PlaceholderScheme.parse(token)
    assert scheme.positional is positional
    assert [scheme.token_for(1), scheme.token_for(2)] == expected


@pytest.mark.parametrize("token", ["%x", "$%i", "@p%5d", "?%"])
def test_parse_rejects_unsupported_directive(token: str) -> None:
    with pytest.raises(ValueError, match="Unsupported directive"):
        PlaceholderScheme.parse(token)


def test_direct_construction_derives_positional() -> None:
    scheme = PlaceholderScheme(token="$%d")
    assert scheme.positional is True
    assert scheme.token_for(2) == "$2"
    assert scheme == PlaceholderScheme.parse("$%d")


def test_direct_construction_validates_token() -> None:
    with pytest.raises(ValueError, match="must not be empty"):
        PlaceholderScheme(token="")
