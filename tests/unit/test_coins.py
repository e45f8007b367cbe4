"""Unit tests for the coin change calculator."""

import pytest

from src.vm_common.coins import DENOMINATIONS, Change, compute_change


class TestComputeChange:
    def test_one_of_each_coin(self) -> None:
        assert compute_change(185) == Change(1, 1, 1, 1, 1)

    def test_multiple_hundreds(self) -> None:
        assert compute_change(585) == Change(5, 1, 1, 1, 1)

    def test_zero_remainder(self) -> None:
        assert compute_change(0) == Change()

    def test_negative_remainder_yields_no_coins(self) -> None:
        assert compute_change(-50) == Change(0, 0, 0, 0, 0)

    def test_exact_single_coin(self) -> None:
        assert compute_change(20) == Change(twenties=1)

    def test_greedy_prefers_large_coins(self) -> None:
        # 40 = 2 x 20, never 4 x 10
        assert compute_change(40) == Change(twenties=2)

    def test_sub_five_residue_is_dropped(self) -> None:
        change = compute_change(7)
        assert change == Change(fives=1)
        assert change.total == 5

    @pytest.mark.parametrize("remainder", [5, 35, 95, 100, 155, 1000, 2345])
    def test_total_matches_remainder(self, remainder: int) -> None:
        assert compute_change(remainder).total == remainder


class TestChange:
    def test_as_dict_keys_in_denomination_order(self) -> None:
        assert list(Change().as_dict()) == ["hundreds", "fifties", "twenties", "tens", "fives"]

    def test_denominations_descending(self) -> None:
        assert list(DENOMINATIONS) == sorted(DENOMINATIONS, reverse=True)
