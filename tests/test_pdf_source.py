import pytest

from fapiao_lines.pdf_source import FragmentSourceError, fragments_from_chars, load_pages


def test_fragments_from_chars_uses_pdf_space_coordinates():
    chars = [
        {"text": "项", "x0": 20.0, "x1": 29.0, "y0": 700.5, "y1": 709.5, "height": 9.0, "top": 82.5},
        {"text": " ", "x0": 29.0, "x1": 33.5, "y0": 700.5, "y1": 709.5, "height": 9.0},
    ]

    fragments = fragments_from_chars(chars)

    assert [f.text for f in fragments] == ["项", " "]
    first = fragments[0]
    assert (first.x_start, first.width, first.y_baseline, first.height) == (20.0, 9.0, 700.5, 9.0)
    assert fragments[1].width == pytest.approx(4.5)


def test_fragments_from_chars_prefers_text_baseline_over_glyph_box():
    # Same baseline, different descents: both glyphs sit on y=702.
    chars = [
        {"text": "g", "x0": 0, "x1": 5, "y0": 699.8, "y1": 709.0, "height": 9.2, "matrix": (9, 0, 0, 9, 0, 702.0)},
        {"text": "数", "x0": 5, "x1": 14, "y0": 701.0, "y1": 710.0, "height": 9.0, "matrix": (9, 0, 0, 9, 5, 702.0)},
    ]

    fragments = fragments_from_chars(chars)

    assert [f.y_baseline for f in fragments] == [702.0, 702.0]
    assert fragments[0].height == pytest.approx(9.2)


def test_fragments_from_chars_derives_missing_height():
    fragments = fragments_from_chars([{"text": "a", "x0": 1, "x1": 2, "y0": 10, "y1": 16}])

    assert fragments[0].height == 6.0


def test_fragments_from_chars_skips_textless_entries():
    assert fragments_from_chars([{"x0": 0, "x1": 1, "y0": 0, "y1": 1}]) == []


def test_load_pages_rejects_non_pdf_bytes():
    with pytest.raises(FragmentSourceError):
        load_pages(b"definitely not a pdf")


def test_load_pages_missing_file(tmp_path):
    with pytest.raises(FragmentSourceError):
        load_pages(tmp_path / "missing.pdf")
