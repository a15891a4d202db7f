"""Tests for the renderable line types."""

import pytest

from linemark.enums import TextJustify
from linemark.errors import (
    EmptyCollectionError,
    IndexOutOfRangeError,
    NilArgumentError,
    ValidationError,
)
from linemark.fields import AdHocField, FillerField, LabelField, SpacerField
from linemark.line_length import LineLengthPolicy
from linemark.lines import BlankLines, PlainTextLine, SolidLine, StandardLine


def test_blank_lines():
    assert BlankLines(2).render() == "\n\n"
    assert BlankLines(3, "\r\n").render() == "\r\n\r\n\r\n"


def test_blank_lines_count_range():
    for count in (0, 1_000_001):
        with pytest.raises(ValidationError):
            BlankLines(count).render()


def test_standard_line_repeats_body():
    """The body repeats and the terminator appears once."""
    assert StandardLine([LabelField("X", 1)], 3).render() == "XXX\n"


def test_standard_line_replication_law():
    line = StandardLine([LabelField("ab", 4), FillerField("-", 2)], 5)
    body = "".join(line.render_body())
    assert body == "ab  --"
    assert line.render() == body * 5 + "\n"


def test_standard_line_fields_in_order():
    line = StandardLine([
        LabelField("Name", 6, TextJustify.LEFT, right_margin=":"),
        SpacerField(1),
        AdHocField("value"),
    ])
    assert line.render() == "Name  : value\n"


def test_standard_line_terminator_options():
    fields = [AdHocField("x")]
    assert StandardLine(fields, terminator="").render() == "x\n"
    assert StandardLine(fields, terminator=";").render() == "x;"
    assert StandardLine(fields, suppress_terminator=True).render() == "x"


def test_standard_line_requires_fields():
    with pytest.raises(ValidationError):
        StandardLine().render()


@pytest.mark.parametrize("repeat_count", [0, 1_000_001])
def test_standard_line_repeat_range(repeat_count):
    with pytest.raises(ValidationError):
        StandardLine([AdHocField("x")], repeat_count).render()


def test_invalid_field_reports_its_position():
    line = StandardLine([AdHocField("ok"), FillerField("", 2)])
    with pytest.raises(ValidationError) as excinfo:
        line.render()
    assert "fields[1]" in excinfo.value.context.links


def test_none_field_is_invalid():
    line = StandardLine([AdHocField("ok"), None])
    assert not line.is_valid()


def test_constructor_copies_fields():
    label = LabelField("before", 6)
    line = StandardLine([label])
    label.content = "after!"
    assert line.render() == "before\n"


def test_add_field_checks_argument():
    line = StandardLine()
    with pytest.raises(NilArgumentError):
        line.add_field(None)
    with pytest.raises(ValidationError):
        line.add_field("text")
    line.add_field(AdHocField("a"))
    assert line.field_count() == 1


def test_insert_field():
    line = StandardLine([AdHocField("b")])
    line.insert_field(0, AdHocField("a"))
    assert line.render() == "ab\n"
    with pytest.raises(IndexOutOfRangeError):
        line.insert_field(2, AdHocField("c"))


def test_insert_into_empty_line_is_out_of_range():
    with pytest.raises(IndexOutOfRangeError):
        StandardLine().insert_field(0, AdHocField("a"))


def test_peek_and_pop_field():
    line = StandardLine([AdHocField("a"), AdHocField("b")])
    peeked = line.peek_field(1)
    peeked.text = "changed"
    assert line.render() == "ab\n"
    assert line.pop_field(0) == AdHocField("a")
    assert line.render() == "b\n"


def test_peek_field_on_empty_line():
    with pytest.raises(EmptyCollectionError):
        StandardLine().peek_field(0)


def test_set_fields():
    line = StandardLine([AdHocField("old")])
    line.set_fields([AdHocField("n"), AdHocField("ew")])
    assert line.render() == "new\n"
    with pytest.raises(NilArgumentError):
        line.set_fields(None)


def test_copy_in_leaves_target_unchanged_on_error():
    target = StandardLine([LabelField("A")])
    with pytest.raises(ValidationError):
        target.copy_in(StandardLine())
    assert target.render() == "A\n"


def test_copy_in_and_copy_out():
    source = StandardLine([LabelField("A", 3)], 2, suppress_terminator=True)
    target = StandardLine()
    target.copy_in(source)
    assert target == source
    out = target.copy_out()
    out.repeat_count = 9
    assert target.repeat_count == 2
    assert out.render() == "A  " * 9


def test_copy_in_none():
    with pytest.raises(NilArgumentError):
        StandardLine().copy_in(None)


def test_equality():
    first = StandardLine([AdHocField("a"), AdHocField("b")])
    assert first.equal(StandardLine([AdHocField("a"), AdHocField("b")]))
    assert not first.equal(StandardLine([AdHocField("b"), AdHocField("a")]))
    assert not first.equal(StandardLine([AdHocField("a"), AdHocField("b")], 2))
    assert not BlankLines(1).equal(SolidLine("=", 1))


def test_equality_ignores_how_justify_was_given():
    """A name, an integer code and the enum member describe the same field."""
    by_enum = StandardLine([LabelField("x", 3, TextJustify.LEFT)])
    for spelling in ("Left", "left", 1):
        line = StandardLine([LabelField("x", 3, spelling)])
        assert line.render() == by_enum.render() == "x  \n"
        assert line.equal(by_enum)
    assert not by_enum.equal(StandardLine([LabelField("x", 3, "Right")]))


def test_unknown_justify_is_kept_for_validation():
    label = LabelField("x", 3, "Sideways")
    assert label.justify == "Sideways"
    assert not label.is_valid()


def test_empty_terminator_equals_newline():
    assert StandardLine([AdHocField("a")], terminator="").equal(
        StandardLine([AdHocField("a")]))
    assert BlankLines(2, "").equal(BlankLines(2))
    assert not PlainTextLine("a", terminator="").equal(PlainTextLine("a", terminator="\r\n"))


def test_render_wrapped():
    line = StandardLine([AdHocField("aaa "), AdHocField("bbb "), AdHocField("ccc")])
    assert line.render_wrapped(LineLengthPolicy(8, True)) == "aaa bbb \nccc\n"
    assert line.render_wrapped(LineLengthPolicy()) == "aaa bbb ccc\n"


def test_reset_standard_line():
    line = StandardLine([AdHocField("a")], 4, ";", True)
    line.reset()
    assert line == StandardLine()
    assert not line.is_valid()


def test_solid_line():
    assert SolidLine("=", 5, "[", "]").render() == "[=====]\n"
    assert SolidLine("-", 3, suppress_terminator=True).render() == "---"


def test_solid_line_length_law():
    body = SolidLine("-*", 4, suppress_terminator=True).render()
    assert body == "-*-*-*-*"
    assert len(body) == 2 * 4


def test_solid_line_requires_unit():
    with pytest.raises(ValidationError):
        SolidLine("", 5).render()


def test_plain_text_line():
    assert PlainTextLine("hello", "> ").render() == "> hello\n"
    assert PlainTextLine("x", terminator="|").render() == "x|"


def test_plain_text_requires_text():
    with pytest.raises(ValidationError):
        PlainTextLine("").render()


def test_line_deep_copy():
    line = PlainTextLine("keep")
    duplicate = line.deep_copy()
    duplicate.text = "other"
    assert line.text == "keep"
