"""Tests for field rendering and justification."""

from datetime import datetime, timezone, timedelta

import pytest

from linemark.enums import TextJustify
from linemark.errors import NilArgumentError, ValidationError
from linemark.fields import (
    AdHocField,
    DateTimeField,
    FieldContent,
    FillerField,
    LabelField,
    NestedContent,
    NumberContent,
    SpacerField,
    TextContent,
    TimestampContent,
    justify_text,
    render_field,
)


STAMP = datetime(2021, 8, 13, 3, 19, 32, 462108, tzinfo=timezone.utc)


def test_centered_label_with_margins():
    """Label 'Hi' centered in 6 columns between brackets."""
    field = LabelField("Hi", 6, TextJustify.CENTER, left_margin="[", right_margin="]")
    assert field.render() == "[  Hi  ]"


def test_filler_repeats_unit():
    assert FillerField("-*", 3).render() == "-*-*-*"


def test_spacer_width():
    assert SpacerField(4).render() == "    "


def test_left_and_right_justification():
    assert LabelField("ab", 5, TextJustify.LEFT).render() == "ab   "
    assert LabelField("ab", 5, TextJustify.RIGHT).render() == "   ab"


def test_center_puts_odd_space_on_right():
    """Center splits padding floor(k/2) left, ceil(k/2) right."""
    assert justify_text("ab", 7, TextJustify.CENTER) == "  ab   "
    assert justify_text("abc", 4, TextJustify.CENTER) == "abc "


def test_width_invariant():
    """Rendered body is max(field_length, len(content)) wide."""
    for field_length in range(0, 12):
        for justify in (TextJustify.LEFT, TextJustify.RIGHT, TextJustify.CENTER):
            text = LabelField("hello", field_length, justify).render()
            assert len(text) == max(field_length, 5)
            assert text.strip() == "hello"


def test_short_field_length_expands_to_content():
    assert LabelField("Hello", 2).render() == "Hello"


def test_auto_size_field_length():
    assert LabelField("Hello", -1, TextJustify.RIGHT).render() == "Hello"


def test_justify_none_without_padding_is_allowed():
    assert LabelField("Hi", 2, TextJustify.NONE).render() == "Hi"
    assert LabelField("Hi", -1, "None").render() == "Hi"


def test_justify_none_with_padding_is_an_error():
    with pytest.raises(ValidationError):
        LabelField("Hi", 5, TextJustify.NONE).render()


def test_justify_accepts_names_and_codes():
    assert LabelField("Hi", 4, "centered").render() == " Hi "
    assert LabelField("Hi", 4, 2).render() == "  Hi"


def test_unparseable_justification():
    with pytest.raises(ValidationError):
        LabelField("Hi", 4, "sideways").render()


@pytest.mark.parametrize("field_length", [-2, 1_000_001])
def test_field_length_out_of_range(field_length):
    with pytest.raises(ValidationError):
        LabelField("x", field_length).render()


def test_field_length_upper_bound_is_accepted():
    field = SpacerField(1_000_000)
    assert len(field.render()) == 1_000_000


def test_empty_label_content_is_an_error():
    with pytest.raises(ValidationError):
        LabelField("").render()


@pytest.mark.parametrize("unit,count", [("", 3), ("-", 0), ("-", 1_000_001)])
def test_invalid_filler(unit, count):
    with pytest.raises(ValidationError):
        FillerField(unit, count).render()


def test_filler_length_law():
    for count in (1, 2, 17):
        assert len(FillerField("abc", count).render()) == 3 * count


def test_spacer_must_be_positive():
    with pytest.raises(ValidationError):
        SpacerField(0).render()


def test_datetime_default_format():
    """Default layout has a nanosecond-width fraction, offset and zone name."""
    assert DateTimeField(STAMP).render() == "2021-08-13 03:19:32.462108000 +0000 UTC"


def test_naive_datetime_is_treated_as_utc():
    naive = STAMP.replace(tzinfo=None)
    assert DateTimeField(naive).render() == "2021-08-13 03:19:32.462108000 +0000 UTC"


def test_datetime_custom_format_and_justification():
    field = DateTimeField(STAMP, "%Y", 6, TextJustify.RIGHT, right_margin="|")
    assert field.render() == "  2021|"


def test_datetime_keeps_its_zone():
    eastern = timezone(timedelta(hours=-5))
    field = DateTimeField(datetime(2022, 1, 2, 3, 4, 5, tzinfo=eastern), "%H:%M %z")
    assert field.render() == "03:04 -0500"


def test_datetime_requires_timestamp():
    with pytest.raises(ValidationError):
        DateTimeField().render()


def test_ad_hoc_text_is_verbatim():
    assert AdHocField("  as is ", left_margin="<", right_margin=">").render() == "<  as is >"


def test_render_field_none():
    with pytest.raises(NilArgumentError):
        render_field(None)


def test_render_field_rejects_other_objects():
    with pytest.raises(ValidationError):
        render_field("not a field")


def test_error_context_is_prefixed():
    with pytest.raises(ValidationError) as excinfo:
        LabelField("").render("caller()")
    assert excinfo.value.context.links == ("caller()", "LabelField.render()")
    assert str(excinfo.value).startswith("caller() - LabelField.render()\n")


def test_rendering_is_idempotent():
    field = LabelField("same", 9, TextJustify.CENTER, left_margin="(")
    assert field.render() == field.render()


def test_deep_copy_is_independent():
    original = LabelField("one", 5)
    duplicate = original.deep_copy()
    assert duplicate == original
    duplicate.content = "two"
    assert original.content == "one"


def test_reset_restores_defaults():
    field = LabelField("x", 5, TextJustify.RIGHT, left_margin="[")
    field.reset()
    assert field == LabelField()
    assert not field.is_valid()


def test_is_valid():
    assert FillerField("=", 2).is_valid()
    assert not FillerField("", 2).is_valid()


def test_field_content_variants():
    """FieldContent.of picks the variant from the value type."""
    assert FieldContent.of("x") == TextContent("x")
    assert FieldContent.of(STAMP) == TimestampContent(STAMP)
    assert FieldContent.of(5) == NumberContent(5)
    assert FieldContent.of(True) == TextContent("True")
    assert isinstance(FieldContent.of(LabelField("n")), NestedContent)
    content = TextContent("kept")
    assert FieldContent.of(content) is content


def test_field_content_none():
    with pytest.raises(NilArgumentError):
        FieldContent.of(None)


def test_number_content_format_spec():
    assert NumberContent(1234.5, ",.2f").to_text() == "1,234.50"
    assert NumberContent(42).to_text() == "42"
