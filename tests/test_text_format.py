from dataclasses import replace

from procyon_notes.text_format import CharFormat, FormatRange, TextFormat, hyperlink_at


def test_default_format_is_plain():
    assert TextFormat().get() == CharFormat()


def test_color_and_bold():
    fmt = TextFormat("red").bold().get()
    assert fmt.foreground == "red"
    assert fmt.bold is True
    assert fmt.italic is False


def test_chaining_sets_all_flags():
    fmt = (TextFormat("blue").family("Courier").italic().underline()
           .strike_out().anchor().background("yellow").get())
    assert fmt.font_family == "Courier"
    assert fmt.italic and fmt.underline and fmt.strike_out and fmt.anchor
    assert fmt.background == "yellow"


def test_spell_error_uses_red_spellcheck_underline():
    fmt = TextFormat().spell_error().get()
    assert fmt.underline_color == "red"
    assert fmt.spell_check_underline is True


def _link(start, length, href):
    return FormatRange(start, length, replace(TextFormat().anchor().get(), anchor_href=href))


def test_hyperlink_found_inside_range():
    formats = [FormatRange(0, 3, TextFormat().bold().get()), _link(4, 5, "docs/page")]
    assert hyperlink_at(formats, 4) == "docs/page"
    assert hyperlink_at(formats, 8) == "docs/page"


def test_hyperlink_outside_range_is_empty():
    formats = [_link(4, 5, "docs/page")]
    assert hyperlink_at(formats, 9) == ""
    assert hyperlink_at(formats, 3) == ""


def test_anchor_without_href_is_skipped():
    formats = [_link(0, 10, ""), _link(2, 3, "second")]
    assert hyperlink_at(formats, 3) == "second"


def test_non_anchor_range_ignored():
    fmt = replace(TextFormat().get(), anchor_href="hidden")
    assert hyperlink_at([FormatRange(0, 5, fmt)], 1) == ""