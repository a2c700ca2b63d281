"""Tests for canonical JSON rendering."""

import pytest

from openapi_sign import (
    SerializationError,
    canonicalize,
    canonicalize_body,
    canonicalize_bytes,
    escape_string,
    format_number,
    JsonArray,
    JsonBool,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
)


class TestFormatNumber:
    """Float64 numbers rendered like Go's %g."""

    @pytest.mark.parametrize("value,expected", [
        (0.0, "0"),
        (-0.0, "-0"),
        (1.0, "1"),
        (-2.5, "-2.5"),
        (0.5, "0.5"),
        (3.14, "3.14"),
        (100.0, "100"),
        (123456.0, "123456"),
        (999999.0, "999999"),
        (1000000.0, "1e+06"),
        (1234567.0, "1.234567e+06"),
        (0.0001, "0.0001"),
        (0.0015, "0.0015"),
        (0.00001, "1e-05"),
        (-1.5e-7, "-1.5e-07"),
        (1e21, "1e+21"),
        (1e100, "1e+100"),
        (5e-324, "5e-324"),
        (0.1 + 0.2, "0.30000000000000004"),
        (292221003212.0, "2.92221003212e+11"),
    ])
    def test_go_general_format(self, value, expected):
        """Test shortest digits and the exponent switch points."""
        assert format_number(value) == expected

    def test_large_integer_loses_precision(self):
        """Test that 64-bit IDs are rounded through float64."""
        assert format_number(float(12345678901234567890)) == "1.2345678901234567e+19"
        assert format_number(float(2**53 + 1)) == "9.007199254740992e+15"

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_rejected(self, value):
        """Test that NaN and infinities have no canonical form."""
        with pytest.raises(SerializationError):
            format_number(value)


class TestEscapeString:
    """JSON string literals."""

    def test_plain(self):
        assert escape_string("abc") == '"abc"'

    def test_quote_and_backslash(self):
        assert escape_string('a"b\\c') == '"a\\"b\\\\c"'

    def test_short_escapes(self):
        assert escape_string("\n\r\t") == '"\\n\\r\\t"'

    def test_backspace_and_form_feed_use_unicode_escapes(self):
        assert escape_string("\b\f") == '"\\u0008\\u000c"'

    def test_other_control_characters(self):
        assert escape_string("\x00\x1f") == '"\\u0000\\u001f"'

    def test_non_ascii_and_html_kept_raw(self):
        """Test that non-ASCII text and <>& are not escaped."""
        assert escape_string("中文 <a&b> é") == '"中文 <a&b> é"'
        assert escape_string("\x7f") == '"\x7f"'


class TestCanonicalize:
    """Rendering of the value tree."""

    def test_scalars(self):
        assert canonicalize(JsonNull()) == "null"
        assert canonicalize(JsonBool(True)) == "true"
        assert canonicalize(JsonBool(False)) == "false"
        assert canonicalize(JsonNumber(42.0)) == "42"
        assert canonicalize(JsonString("x")) == '"x"'

    def test_empty_collections(self):
        assert canonicalize(JsonArray()) == "[]"
        assert canonicalize(JsonObject()) == "{}"

    def test_object_keys_sorted(self):
        value = JsonObject({
            "b": JsonNumber(2.0),
            "a": JsonNumber(1.0),
            "B": JsonNumber(0.0),
        })
        assert canonicalize(value) == '{"B":0,"a":1,"b":2}'

    def test_array_order_kept(self):
        value = JsonArray((JsonNumber(3.0), JsonNumber(1.0), JsonNumber(2.0)))
        assert canonicalize(value) == "[3,1,2]"

    def test_nested(self):
        value = JsonObject({
            "z": JsonArray((JsonObject({"y": JsonNull(), "x": JsonBool(True)}), JsonArray())),
            "a": JsonObject(),
        })
        assert canonicalize(value) == '{"a":{},"z":[{"x":true,"y":null},[]]}'

    def test_keys_are_escaped(self):
        value = JsonObject({'k"1': JsonString("v")})
        assert canonicalize(value) == '{"k\\"1":"v"}'

    def test_bytes_are_utf8(self):
        assert canonicalize_bytes(JsonString("é")) == b'"\xc3\xa9"'

    def test_deep_tree(self):
        """Test that depth is not bounded by the interpreter recursion limit."""
        value = JsonArray()
        for _ in range(4999):
            value = JsonArray((JsonObject({"k": value}),))
        assert canonicalize(value) == '[{"k":' * 4999 + "[]" + "}]" * 4999

    def test_rejects_native_values(self):
        """Test that only tree nodes are accepted by canonicalize()."""
        with pytest.raises(SerializationError):
            canonicalize({"a": 1})
        with pytest.raises(SerializationError):
            canonicalize("abc")
        with pytest.raises(SerializationError):
            canonicalize(JsonArray(("abc",)))


class TestCanonicalizeBody:
    """Native bodies go through normalize() first."""

    def test_key_order_does_not_matter(self):
        first = {"b": 1, "a": {"d": [1, 2], "c": None}}
        second = {"a": {"c": None, "d": [1, 2]}, "b": 1}
        assert canonicalize_body(first) == canonicalize_body(second)
        assert canonicalize_body(first) == '{"a":{"c":null,"d":[1,2]},"b":1}'

    def test_array_order_matters(self):
        assert canonicalize_body([1, 2]) != canonicalize_body([2, 1])

    def test_ints_and_floats_render_alike(self):
        assert canonicalize_body({"n": 1}) == canonicalize_body({"n": 1.0}) == '{"n":1}'

    def test_scalar_bodies(self):
        assert canonicalize_body("") == '""'
        assert canonicalize_body(0) == "0"
        assert canonicalize_body(False) == "false"

    def test_tuple_is_array(self):
        assert canonicalize_body(("a", 1.5)) == '["a",1.5]'
