from __future__ import annotations

import math

import pytest

from crop_aspect.constraint import NO_CONSTRAINT_NAME, AspectConstraint

PAIRS = [(1, 1), (3, 2), (2, 3), (4, 3), (16, 9), (9, 16), (17, 22), (1000, 1414)]


def test_aspect_ratio_is_numerator_over_denominator() -> None:
    for n, d in PAIRS:
        assert abs(AspectConstraint(n, d).aspect_ratio - n / d) < 1e-12


def test_label_format() -> None:
    # ratio 3/2 -> the label shows 2/3 and "2 x 3"
    assert str(AspectConstraint(3, 2)) == "0.67 | 2 x 3"
    assert AspectConstraint(3, 2).name == "0.67 | 2 x 3"
    assert str(AspectConstraint(1, 1)) == "1.00 | 1 x 1"
    assert str(AspectConstraint(9, 16)) == "1.78 | 16 x 9"


def test_label_with_description() -> None:
    c = AspectConstraint(2, 3, "35mm Film")
    assert str(c) == "1.50 | 3 x 2 (35mm Film)"


def test_from_string_concrete_label() -> None:
    c = AspectConstraint.from_string("0.67 | 2 x 3")
    assert c is not None
    assert c.numerator == 3
    assert c.denominator == 2


def test_label_round_trip() -> None:
    for n, d in PAIRS:
        c = AspectConstraint.from_string(str(AspectConstraint(n, d)))
        assert c is not None
        assert (c.numerator, c.denominator) == (n, d)


def test_round_trip_drops_description() -> None:
    src = AspectConstraint(4, 5, "Large Format")
    c = AspectConstraint.from_string(str(src))
    assert c == src
    assert str(c) == "1.25 | 5 x 4"


def test_from_string_rejects_other_text() -> None:
    assert AspectConstraint.from_string("") is None
    assert AspectConstraint.from_string("16:9") is None
    assert AspectConstraint.from_string("1.50 | x 2") is None
    assert AspectConstraint.from_string("1.50 | 3 by 2") is None


def test_from_string_ignores_leading_ratio_text() -> None:
    # Only the "W x H" part after the bar is read back.
    c = AspectConstraint.from_string("whatever | 7 x 5 trailing")
    assert c == AspectConstraint(5, 7)


def test_no_constraint_sentinel() -> None:
    c = AspectConstraint()
    assert c.is_no_constraint()
    assert c.numerator == 0
    assert c.denominator == 0
    assert str(c) == NO_CONSTRAINT_NAME
    assert AspectConstraint.no_constraint().is_no_constraint()

    for n, d in PAIRS:
        assert not AspectConstraint(n, d).is_no_constraint()


def test_no_constraint_label_round_trip() -> None:
    c = AspectConstraint.from_string(NO_CONSTRAINT_NAME)
    assert c is not None
    assert c.is_no_constraint()


def test_sentinel_ratio_is_nan() -> None:
    assert math.isnan(AspectConstraint().aspect_ratio)


def test_zero_denominator_builds_without_validation() -> None:
    c = AspectConstraint(5, 0)
    assert not c.is_no_constraint()
    assert c.aspect_ratio == math.inf
    assert str(c) == "0.00 | 0 x 5"

    parsed = AspectConstraint.from_string("0.00 | 0 x 5")
    assert parsed is not None
    assert (parsed.numerator, parsed.denominator) == (5, 0)


def test_zero_numerator_builds_without_validation() -> None:
    c = AspectConstraint(0, 3)
    assert not c.is_no_constraint()
    assert c.aspect_ratio == 0.0
    assert str(c) == "Infinity | 3 x 0"

    parsed = AspectConstraint.from_string("Infinity | 3 x 0")
    assert parsed is not None
    assert (parsed.numerator, parsed.denominator) == (0, 3)
    assert parsed.inverse() == AspectConstraint(3, 0)


def test_zero_term_dict_builds_without_validation() -> None:
    assert AspectConstraint.from_dict({"numerator": 5, "denominator": 0}) == AspectConstraint(5, 0)


def test_inverse_swaps_ratio() -> None:
    inv = AspectConstraint(4, 3).inverse()
    assert abs(inv.aspect_ratio - 3 / 4) < 1e-12
    assert (inv.numerator, inv.denominator) == (3, 4)


def test_inverse_drops_description() -> None:
    inv = AspectConstraint(2, 3, "35mm Film").inverse()
    assert str(inv) == "0.67 | 2 x 3"


def test_inverse_and_transpose_of_sentinel_are_fresh_sentinels() -> None:
    c = AspectConstraint()
    for derived in (c.inverse(), c.transpose()):
        assert derived.is_no_constraint()
        assert derived is not c


def test_transpose_matches_inverse_numerically() -> None:
    for n, d in PAIRS:
        c = AspectConstraint(n, d)
        assert c.transpose() == c.inverse()
        assert c.transpose().transpose() == c


def test_equality_ignores_description() -> None:
    assert AspectConstraint(3, 2) == AspectConstraint(3, 2, "Photo")
    assert AspectConstraint(3, 2) != AspectConstraint(2, 3)
    assert len({AspectConstraint(3, 2), AspectConstraint(3, 2, "Photo")}) == 1
    assert repr(AspectConstraint(3, 2)) == "AspectConstraint(3, 2)"
    assert repr(AspectConstraint()) == "AspectConstraint()"


def test_structured_encoding() -> None:
    c = AspectConstraint(3, 2, "Photo")
    assert c.to_dict() == {"numerator": 3, "denominator": 2}
    assert AspectConstraint.from_dict(c.to_dict()) == c
    assert AspectConstraint().to_dict() == {"numerator": 0, "denominator": 0}
    assert AspectConstraint.from_dict({"numerator": 0, "denominator": 0}).is_no_constraint()


def test_from_dict_rejects_malformed() -> None:
    with pytest.raises(ValueError):
        AspectConstraint.from_dict({"numerator": 3})
    with pytest.raises(ValueError):
        AspectConstraint.from_dict({"numerator": "3", "denominator": 2})
    with pytest.raises(ValueError):
        AspectConstraint.from_dict({"numerator": True, "denominator": 2})
    with pytest.raises(ValueError):
        AspectConstraint.from_dict([3, 2])


def test_parse_accepts_both_encodings() -> None:
    assert AspectConstraint.parse({"numerator": 3, "denominator": 2}) == AspectConstraint(3, 2)
    assert AspectConstraint.parse("0.67 | 2 x 3") == AspectConstraint(3, 2)
    assert AspectConstraint.parse("not a label") is None
    with pytest.raises(ValueError):
        AspectConstraint.parse(1.5)


def test_validated() -> None:
    assert AspectConstraint.validated(3, 2) == AspectConstraint(3, 2)
    assert AspectConstraint.validated(0, 0).is_no_constraint()
    assert str(AspectConstraint.validated(1, 1, "Square")) == "1.00 | 1 x 1 (Square)"
    for n, d in [(-3, 2), (3, 0), (0, 2), (1.5, 2), (True, 1)]:
        with pytest.raises(ValueError):
            AspectConstraint.validated(n, d)  # type: ignore[arg-type]
