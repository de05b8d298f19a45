from __future__ import annotations

import pytest

from fontsmith.exceptions import (
    InvalidSrcError,
    InvalidSrcURLError,
    MissingPropertyError,
    StylesheetSyntaxError,
    SubsetMismatchError,
    UnknownPropertyError,
    UnresolvedFormatError,
)
from fontsmith.stylesheet import (
    FontFace,
    find_subsets,
    pair_subsets,
    parse_stylesheet,
    resolve_src_and_format,
)


def _rule(*declarations: str) -> str:
    body = "\n".join(f"  {declaration};" for declaration in declarations)
    return f"@font-face {{\n{body}\n}}\n"


def test_parse_stylesheet_pairs_subsets_in_order(roboto_css: str) -> None:
    faces = parse_stylesheet(roboto_css)

    assert [face.subset for face in faces] == ["latin-ext", "latin"]
    first = faces[0]
    assert first.family == "Roboto"
    assert first.style == "normal"
    assert first.weight == "400"
    assert first.display == "swap"
    assert first.format == "woff2"
    assert first.src == "https://fonts.gstatic.com/s/roboto/v30/KFOmCnqEu92Fr1Mu7GxKOzY.woff2"


def test_unicode_range_is_kept_verbatim(roboto_css: str) -> None:
    faces = parse_stylesheet(roboto_css)

    assert faces[0].unicode_range == (
        "U+0100-02AF",
        "U+0304",
        "U+0308",
        "U+1E00-1E9F",
        "U+A720-A7FF",
    )
    assert faces[1].unicode_range[0] == "U+0000-00FF"
    assert faces[1].unicode_range[-1] == "U+FFFD"


def test_comments_inside_unicode_range_are_dropped() -> None:
    css = _rule(
        "font-family: 'Lato'",
        "src: url(https://example.com/a.woff2)",
        "unicode-range: U+0000-00FF /* basic; } */, U+0131",
    )

    (face,) = parse_stylesheet(css)

    assert face.unicode_range == ("U+0000-00FF", "U+0131")


def test_leading_byte_order_mark_is_ignored(roboto_css: str) -> None:
    faces = parse_stylesheet("\ufeff" + roboto_css)

    assert faces == parse_stylesheet(roboto_css)
    assert [face.subset for face in faces] == ["latin-ext", "latin"]


def test_windows_newlines_are_accepted(roboto_css: str) -> None:
    assert parse_stylesheet(roboto_css.replace("\n", "\r\n")) == parse_stylesheet(roboto_css)


def test_stylesheet_without_markers_leaves_subset_empty() -> None:
    css = _rule("font-family: 'Lato'", "src: url(https://example.com/lato.ttf)")

    (face,) = parse_stylesheet(css)

    assert face.subset is None
    assert face.format == "ttf"


def test_missing_style_and_weight_fall_back_to_defaults() -> None:
    css = _rule("font-family: \"Roboto Slab\"", "src: url('https://example.com/slab.woff')")

    (face,) = parse_stylesheet(css)

    assert face.family == "Roboto Slab"
    assert face.style == "normal"
    assert face.weight == "400"
    assert face.src == "https://example.com/slab.woff"


def test_unquoted_family_names_are_joined() -> None:
    css = _rule("font-family: Open Sans", "src: url(https://example.com/a.woff2)")

    (face,) = parse_stylesheet(css)

    assert face.family == "Open Sans"


def test_format_hint_is_used_without_extension() -> None:
    css = _rule(
        "font-family: 'Lato'",
        "src: url(https://fonts.gstatic.com/l/font?kit=abc) format('truetype')",
    )

    (face,) = parse_stylesheet(css)

    assert face.format == "truetype"


def test_extension_takes_precedence_over_hint() -> None:
    url, file_format = resolve_src_and_format("url(https://example.com/a.WOFF) format('woff2')")

    assert url == "https://example.com/a.WOFF"
    assert file_format == "woff"


def test_relative_src_resolved_against_base_url() -> None:
    css = _rule("font-family: 'Lato'", "src: url(fonts/lato.woff2)")

    (face,) = parse_stylesheet(css, base_url="https://example.com/css/site.css")

    assert face.src == "https://example.com/css/fonts/lato.woff2"


def test_unknown_property_is_rejected() -> None:
    css = _rule("font-family: 'Lato'", "color: red", "src: url(https://example.com/a.woff2)")

    with pytest.raises(UnknownPropertyError) as excinfo:
        parse_stylesheet(css)

    assert excinfo.value.property == "color"


@pytest.mark.parametrize(
    ("declarations", "missing"),
    [
        (("src: url(https://example.com/a.woff2)",), "font-family"),
        (("font-family: 'Lato'",), "src"),
    ],
)
def test_missing_mandatory_property(declarations: tuple[str, ...], missing: str) -> None:
    with pytest.raises(MissingPropertyError) as excinfo:
        parse_stylesheet(_rule(*declarations))

    assert excinfo.value.property == missing


@pytest.mark.parametrize(
    "src",
    [
        "local('Lato')",
        "url(a) url(b)",
        "nonsense",
        "url(https://example.com/a.woff2) format('woff2'), url(https://example.com/a.woff) format('woff')",
    ],
)
def test_src_must_hold_a_single_url(src: str) -> None:
    with pytest.raises(InvalidSrcError):
        parse_stylesheet(_rule("font-family: 'Lato'", f"src: {src}"))


def test_src_url_must_parse() -> None:
    with pytest.raises(InvalidSrcURLError):
        resolve_src_and_format("url(http://[::1/font.woff2)")


def test_unresolved_format_is_an_error() -> None:
    with pytest.raises(UnresolvedFormatError):
        parse_stylesheet(_rule("font-family: 'Lato'", "src: url(https://example.com/font)"))


def test_malformed_declaration_fails_the_parse() -> None:
    css = "@font-face {\n  font-family 'Lato';\n  src: url(https://example.com/a.woff2);\n}\n"

    with pytest.raises(StylesheetSyntaxError):
        parse_stylesheet(css)


def test_unterminated_rule_fails_the_parse() -> None:
    css = _rule("font-family: 'Lato'", "src: url(https://example.com/a.woff2)") + "broken"

    with pytest.raises(StylesheetSyntaxError):
        parse_stylesheet(css)


def test_subset_mismatch_is_strict_by_default(roboto_css: str) -> None:
    css = roboto_css.replace("/* latin */\n", "")

    with pytest.raises(SubsetMismatchError) as excinfo:
        parse_stylesheet(css)

    assert (excinfo.value.markers, excinfo.value.faces) == (1, 2)


def test_lenient_subsets_pair_by_position(roboto_css: str) -> None:
    css = roboto_css.replace("/* latin */\n", "")

    faces = parse_stylesheet(css, strict_subsets=False)

    assert [face.subset for face in faces] == ["latin-ext", None]


def test_find_subsets_ignores_other_comments() -> None:
    css = "/* Roboto regular */\n/* cyrillic-ext */\n/*latin*/\n/* greek */\n"

    assert find_subsets(css) == ["cyrillic-ext", "greek"]


def test_pair_subsets_without_markers_returns_faces() -> None:
    face = FontFace(family="A", style="normal", weight="400", src="a.woff2", format="woff2")

    assert pair_subsets([face], []) == [face]


def test_to_dict_omits_empty_values(roboto_css: str) -> None:
    payload = parse_stylesheet(roboto_css)[1].to_dict()

    assert payload["subset"] == "latin"
    assert payload["font-family"] == "Roboto"
    assert payload["font-display"] == "swap"
    assert "font-stretch" not in payload
    assert payload["unicode-range"][0] == "U+0000-00FF"
