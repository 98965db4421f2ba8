"""Tests for status decoding and the snapshot records."""

import pytest

from esd_dao.errors import DaoQueryError, DecodeError
from esd_dao.models import EpochSnapshot, UserSnapshot, UserStatus


class TestStatusDecoding:
    @pytest.mark.parametrize("code, status", [
        (0, UserStatus.FROZEN),
        (1, UserStatus.FLUID),
        (2, UserStatus.LOCKED),
    ])
    def test_known_codes(self, code: int, status: UserStatus) -> None:
        assert UserStatus.from_code(code) is status

    @pytest.mark.parametrize("code", [3, 5, 255, -1])
    def test_out_of_range_code_is_rejected(self, code: int) -> None:
        with pytest.raises(DecodeError) as excinfo:
            UserStatus.from_code(code)
        assert excinfo.value.code == code

    @pytest.mark.parametrize("code", [None, "1", 1.0, True])
    def test_non_integer_code_is_rejected(self, code) -> None:
        with pytest.raises(DecodeError):
            UserStatus.from_code(code)

    def test_decode_error_is_a_query_error(self) -> None:
        with pytest.raises(DaoQueryError, match="Unknown status code: 7"):
            UserStatus.from_code(7)


class TestSnapshots:
    def test_snapshots_are_immutable(self) -> None:
        user = UserSnapshot(staged=1, bonded=2, status=UserStatus.FLUID, fluid_until=3, locked_until=0)
        with pytest.raises(AttributeError):
            user.bonded = 5  # type: ignore[misc]

    def test_value_equality(self) -> None:
        a = EpochSnapshot(outstanding_coupons=1, coupons_expiration=2, expiring_coupons=3, total_bonded=4)
        b = EpochSnapshot(outstanding_coupons=1, coupons_expiration=2, expiring_coupons=3, total_bonded=4)
        assert a == b
