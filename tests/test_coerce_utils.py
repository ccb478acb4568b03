"""
Request value coercion.

Core invariants:
    - only ASCII digit strings turn into ints
    - out-of-range or non-positive ids never come back as usable ids
"""

import pytest

from alchemy.core.coerce_utils import coerce_flag, coerce_id, coerce_id_list, optional_id
from alchemy.core.pair_key import MAX_ID


class TestCoerceId:
    @pytest.mark.parametrize("raw, expected", [(7, 7), ("7", 7), (" 12 ", 12)])
    def test_digits_become_ints(self, raw, expected):
        assert coerce_id(raw) == expected

    @pytest.mark.parametrize("raw", ["²", "٣", "３", "1.5", "-2", "", "abc"])
    def test_other_strings_untouched(self, raw):
        assert coerce_id(raw) == raw

    def test_bool_untouched(self):
        assert coerce_id(True) is True


class TestOptionalId:
    @pytest.mark.parametrize("raw", [None, 0, -1, "²", True, MAX_ID + 1, str(MAX_ID + 1), 2.0])
    def test_unusable_is_none(self, raw):
        assert optional_id(raw) is None

    def test_max_id(self):
        assert optional_id(str(MAX_ID)) == MAX_ID


class TestCoerceIdList:
    def test_keeps_only_valid_ids(self):
        assert coerce_id_list([1, "2", "²", 0, 2 ** 70, None, False]) == [1, 2]

    def test_comma_string(self):
        assert coerce_id_list("[1, 2,3]") == [1, 2, 3]

    @pytest.mark.parametrize("raw", [None, 5, {"a": 1}])
    def test_non_list_is_empty(self, raw):
        assert coerce_id_list(raw) == []


class TestCoerceFlag:
    @pytest.mark.parametrize("raw, expected", [
        (None, False), ("yes", True), ("0", False), (1, True), (False, False),
    ])
    def test_flags(self, raw, expected):
        assert coerce_flag(raw) is expected
