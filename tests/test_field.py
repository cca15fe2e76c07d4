"""Tests for field helpers and batch inversion."""

import numpy as np
import pytest

from primitives.field import (
    BN254_SCALAR_PRIME,
    FF,
    GL,
    GOLDILOCKS_PRIME,
    batch_inverse,
    nonzero_rows,
    to_field,
)


class TestToField:
    """Tests for int and scalar conversion."""

    def test_small_int(self) -> None:
        """Ints in range convert unchanged."""
        assert int(to_field(FF, 2032)) == 2032

    def test_negative_int_wraps(self) -> None:
        """Negative ints are reduced modulo p."""
        assert int(to_field(FF, -1)) == BN254_SCALAR_PRIME - 1
        assert int(to_field(GL, -1)) == GOLDILOCKS_PRIME - 1

    def test_large_int_wraps(self) -> None:
        """Ints >= p are reduced modulo p."""
        assert int(to_field(GL, GOLDILOCKS_PRIME + 3)) == 3

    def test_field_element_passes_through(self) -> None:
        """Elements of the same field are returned as is."""
        x = FF(12345)
        assert to_field(FF, x) is x

    def test_other_field_rejected(self) -> None:
        """Mixing elements of two fields is an error."""
        with pytest.raises(TypeError):
            to_field(FF, GL(3))


class TestBatchInverse:
    """Tests for Montgomery batch inversion."""

    def test_empty(self) -> None:
        """Empty input returns empty output."""
        assert len(batch_inverse(FF([]))) == 0

    def test_single_element(self) -> None:
        """Single element is inverted correctly."""
        result = batch_inverse(FF([12345]))
        assert result[0] * FF(12345) == FF(1)

    def test_matches_scalar_inversion(self) -> None:
        """Batch inversion matches scalar inversion in both fields."""
        for field in (FF, GL):
            vals = field([i * 7 + 13 for i in range(20)])
            batch = batch_inverse(vals)
            for v, b in zip(vals, batch):
                assert b == v ** -1

    def test_zero_raises(self) -> None:
        """Zero has no inverse."""
        with pytest.raises(ZeroDivisionError):
            batch_inverse(GL([0]))


def test_nonzero_rows() -> None:
    """nonzero_rows returns indices of non-zero entries."""
    values = FF([0, 3, 0, 0, 1])
    assert np.array_equal(nonzero_rows(values), [1, 4])
