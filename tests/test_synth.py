from __future__ import annotations

from streettype.assets.synth import (
    DIGIT_PALETTE,
    SVG_DATA_PREFIX,
    SYMBOL_PALETTE,
    GlyphSynthesizer,
    decode_glyph_url,
    font_family,
    is_synthetic_url,
    render_glyph_svg,
    synthesize_glyph,
)


def test_synthesized_glyph_is_data_url() -> None:
    url = synthesize_glyph("A", "sans-upper")

    assert url.startswith(SVG_DATA_PREFIX)
    assert is_synthetic_url(url)
    assert not is_synthetic_url("assets/A/sans-upper/01.jpg")


def test_synthesized_glyph_is_deterministic() -> None:
    assert synthesize_glyph("Q", "serif-upper") == synthesize_glyph("Q", "serif-upper")
    assert synthesize_glyph("Q", "serif-upper") != synthesize_glyph("Q", "sans-upper")


def test_markup_round_trips_through_data_url() -> None:
    markup = decode_glyph_url(synthesize_glyph("<", "sans"))

    assert markup == render_glyph_svg("<", "sans")
    assert markup.startswith("<svg")
    assert "&lt;</text>" in markup
    assert 'width="40"' in markup and 'height="60"' in markup


def test_palette_depends_on_character_class() -> None:
    assert DIGIT_PALETTE.fill in render_glyph_svg("7", "serif")
    assert SYMBOL_PALETTE.fill in render_glyph_svg("!", "serif")
    assert "#d63030" in render_glyph_svg("a", "serif-lower")
    assert "#333" in render_glyph_svg("a", "unknown-lower")


def test_font_family_ignores_case_suffix() -> None:
    assert "Courier" in font_family("mono-upper")
    assert font_family("mono") == font_family("mono-lower")
    assert font_family("gothic") == "sans-serif"


def test_filter_id_is_derived_from_character() -> None:
    markup = render_glyph_svg("A", "sans")

    assert 'filter id="shadow_41"' in markup
    assert 'filter="url(#shadow_41)"' in markup


def test_synthesizer_caches_by_key() -> None:
    synthesizer = GlyphSynthesizer()

    first = synthesizer.generate("A", "sans-upper")
    second = synthesizer.generate("A", "sans-upper")
    synthesizer.generate("A", "sans-upper", city="LA")

    assert first is second
    assert synthesizer.stats() == {"generated": 2, "cached": 1, "cache_size": 2}
