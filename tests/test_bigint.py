"""Tests for the BigInt value type: representation, text I/O, operators."""

from __future__ import annotations

import io

import pytest

from bigint import (
    BigInt,
    add,
    compare,
    divide,
    divmod_trunc,
    format_bigint,
    minus,
    multiply,
    parse,
    read_bigint,
    subtract,
    write_bigint,
)
from errors import BigIntError, DivisionByZero, InvalidFormat


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------

class TestScenarios:

    def test_negative_zero_parses_to_zero(self):
        value = parse("-0")
        assert value == parse("0")
        assert str(value) == "0"
        assert not value.negative

    def test_carry_across_limb_boundary(self):
        assert str(parse("1000000000") + parse("1")) == "1000000001"

    def test_multi_limb_multiply_carry(self):
        a = parse("999999999999999999")
        assert str(a * a) == "999999999999999998000000000000000001"

    def test_multi_limb_division(self):
        q = parse("100000000000000000000") / parse("3")
        assert str(q) == "33333333333333333333"

    def test_subtraction_sign_flip(self):
        assert str(parse("5") - parse("7")) == "-2"


# ---------------------------------------------------------------------------
# Representation
# ---------------------------------------------------------------------------

class TestRepresentation:

    @pytest.mark.parametrize("text", ["", "0", "-0", "000", "-000000000000"])
    def test_zero_spellings(self, text):
        value = BigInt(text)
        assert value.limbs == (0,)
        assert not value.negative
        assert value.is_zero()

    def test_limbs_little_endian(self):
        assert BigInt("1000000000").limbs == (0, 1)
        assert BigInt("123456789012345678901").limbs == (
            345678901, 456789012, 123,
        )

    def test_leading_zeros_dropped(self):
        value = BigInt("0000000000000000000042")
        assert value.limbs == (42,)
        assert str(value) == "42"

    def test_inner_limbs_zero_padded(self):
        assert str(BigInt("-1000000000000000001")) == "-1000000000000000001"
        assert format_bigint(BigInt(10**18 + 7)) == "1000000000000000007"

    @pytest.mark.parametrize("native", [
        0, 1, -1, 999_999_999, 10**9, -(10**9), 10**27 + 5, -(2**200),
    ])
    def test_from_native_int(self, native):
        assert int(BigInt(native)) == native
        assert str(BigInt(native)) == str(native)

    def test_copy_is_independent(self):
        original = BigInt("123456789123456789")
        duplicate = BigInt(original)
        duplicate += 1
        assert str(original) == "123456789123456789"
        assert original.copy() == original
        assert original.copy() is not original

    def test_limbs_property_is_a_snapshot(self):
        value = BigInt(10**10)
        limbs = value.limbs
        value *= 10**10
        assert limbs == (0, 10)

    def test_repr(self):
        assert repr(BigInt(-42)) == "BigInt('-42')"

    def test_bool(self):
        assert not BigInt(0)
        assert BigInt(-1)

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(BigInt(1))

    def test_unsupported_source_type(self):
        with pytest.raises(TypeError):
            BigInt(1.5)


# ---------------------------------------------------------------------------
# Parsing errors
# ---------------------------------------------------------------------------

class TestParseErrors:

    @pytest.mark.parametrize("text", [
        "-", "+1", "--5", "5-", " 7", "7 ", "1_000", "12a", "1.0", "١٢",
    ])
    def test_invalid_format(self, text):
        with pytest.raises(InvalidFormat) as excinfo:
            parse(text)
        assert excinfo.value.text == text

    def test_invalid_format_is_value_error(self):
        with pytest.raises(ValueError):
            parse("abc")
        assert issubclass(InvalidFormat, BigIntError)

    def test_read_failure_keeps_value(self):
        value = BigInt(42)
        with pytest.raises(InvalidFormat):
            value.read("4x2")
        assert value == 42

    def test_read_replaces_value(self):
        value = BigInt(-5)
        assert value.read("123456789012") is value
        assert str(value) == "123456789012"


# ---------------------------------------------------------------------------
# Compound vs pure forms
# ---------------------------------------------------------------------------

class TestCallingForms:

    def test_binary_operators_leave_operands_alone(self):
        a, b = BigInt("5"), BigInt("7")
        for result in (a + b, a - b, a * b, a / b, a % b):
            assert result is not a and result is not b
        assert str(a) == "5"
        assert str(b) == "7"

    def test_compound_operators_mutate_receiver(self):
        value = BigInt(10)
        same = value
        value += 5
        value -= 3
        value *= 4
        value /= 5
        value %= 7
        assert value is same
        assert value == ((10 + 5 - 3) * 4 // 5) % 7

    def test_member_methods_return_receiver(self):
        value = BigInt(1)
        assert value.add(2) is value
        assert value.minus(10) is value
        assert value == -7

    def test_self_add_and_self_minus(self):
        value = BigInt("999999999")
        value.add(value)
        assert str(value) == "1999999998"
        value.minus(value)
        assert value.is_zero()
        assert not value.negative

    def test_free_functions(self):
        a, b = BigInt(-12), BigInt(5)
        assert add(a, b) == -7
        assert minus(a, b) == -17
        assert subtract is minus
        assert multiply(a, b) == -60
        assert divide(a, b) == -2
        assert str(a) == "-12"

    def test_mixed_int_operands(self):
        assert BigInt(3) + 4 == 7
        assert 4 + BigInt(3) == 7
        assert 3 - BigInt(5) == -2
        assert 6 * BigInt(-7) == -42
        assert 7 / BigInt(2) == 3
        assert 7 % BigInt(-2) == 1

    def test_float_operand_rejected(self):
        with pytest.raises(TypeError):
            BigInt(1) + 1.5
        with pytest.raises(TypeError):
            BigInt(1).add(1.5)

    def test_unary(self):
        value = BigInt(-9)
        assert -value == 9
        assert +value == -9
        assert abs(value) == 9
        assert not (-BigInt(0)).negative


# ---------------------------------------------------------------------------
# Division semantics
# ---------------------------------------------------------------------------

class TestSignedDivision:

    @pytest.mark.parametrize("a,b,q,r", [
        (7, 2, 3, 1),
        (-7, 2, -3, -1),
        (7, -2, -3, 1),
        (-7, -2, 3, -1),
        (1, 3, 0, 1),
        (-1, 3, 0, -1),
    ])
    def test_truncates_toward_zero(self, a, b, q, r):
        assert BigInt(a) / BigInt(b) == q
        assert BigInt(a) % BigInt(b) == r
        assert divmod_trunc(a, b) == (q, r)

    def test_zero_quotient_not_negative(self):
        q = BigInt(-1) / BigInt(3)
        assert q.is_zero()
        assert not q.negative

    def test_division_by_zero_leaves_dividend(self):
        value = BigInt("123456789012345678901234567890")
        with pytest.raises(DivisionByZero):
            value /= BigInt(0)
        assert str(value) == "123456789012345678901234567890"
        with pytest.raises(DivisionByZero):
            value %= 0
        assert str(value) == "123456789012345678901234567890"

    def test_division_by_zero_is_zero_division_error(self):
        with pytest.raises(ZeroDivisionError, match="division by zero"):
            BigInt(1) / BigInt("-0")

    def test_zero_dividend(self):
        assert (BigInt(0) / BigInt(-5)).limbs == (0,)


# ---------------------------------------------------------------------------
# Comparison
# ---------------------------------------------------------------------------

class TestComparison:

    def test_compare_values(self):
        assert compare(BigInt(-1), BigInt(1)) == -1
        assert compare(BigInt(10**9), BigInt(999_999_999)) == 1
        assert compare(BigInt("-0"), BigInt(0)) == 0

    def test_relations(self):
        small, big = BigInt(-(10**20)), BigInt(10**20)
        assert small < big
        assert small <= big
        assert big > small
        assert big >= small
        assert small != big
        assert big == 10**20

    def test_not_equal_to_unrelated_types(self):
        assert BigInt(1) != "1"
        assert BigInt(1) != 1.0


# ---------------------------------------------------------------------------
# Stream adapters
# ---------------------------------------------------------------------------

class TestStreams:

    def test_read_tokens(self):
        stream = io.StringIO("  -123 \n 1000000000000\t")
        assert read_bigint(stream) == -123
        assert read_bigint(stream) == 10**12
        with pytest.raises(EOFError):
            read_bigint(stream)

    def test_read_invalid_token(self):
        with pytest.raises(InvalidFormat):
            read_bigint(io.StringIO("12x"))

    def test_write(self):
        stream = io.StringIO()
        write_bigint(stream, BigInt("-000123"))
        assert stream.getvalue() == "-123"

    def test_print(self, capsys):
        BigInt(10**18).print()
        assert capsys.readouterr().out == "1000000000000000000"

    def test_print_to_stream(self):
        stream = io.StringIO()
        BigInt("-0").print(stream)
        assert stream.getvalue() == "0"
