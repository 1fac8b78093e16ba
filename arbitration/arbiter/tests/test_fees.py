"""Tests for the fee schedule."""

import pytest

from arbiter.events import DefaultFeeChanged, OverrideFeeChanged, QuestionFeeChanged
from arbiter.fees import FeeSchedule, get_effective_fee
from shared import Unauthorized

OWNER = "0x00000000000000000000000000000000000000a1"
STRANGER = "0x00000000000000000000000000000000000000b9"
Q1 = bytes(31) + b"\x01"
Q2 = bytes(31) + b"\x02"


class TestFeeSchedule:
    """Test suite for FeeSchedule."""

    def test_default_applies_without_override(self):
        """Test default fee is used when no override exists."""
        schedule = FeeSchedule(default_fee=100)
        assert get_effective_fee(schedule, Q1) == 100

    def test_override_wins(self):
        """Test a nonzero override replaces the default."""
        schedule = FeeSchedule(default_fee=100)
        schedule.set_override_fee(Q1, 500)

        assert get_effective_fee(schedule, Q1) == 500
        assert get_effective_fee(schedule, Q2) == 100

    def test_zero_override_means_no_override(self):
        """Test setting an override to zero falls back to the default."""
        schedule = FeeSchedule(default_fee=100)
        schedule.set_override_fee(Q1, 500)
        schedule.set_override_fee(Q1, 0)

        assert get_effective_fee(schedule, Q1) == 100
        assert Q1 not in schedule.overrides

    def test_zero_default_disables_arbitration(self):
        """Test effective fee is zero with no default and no override."""
        schedule = FeeSchedule()
        assert get_effective_fee(schedule, Q1) == 0

    def test_rejects_out_of_range_fee(self):
        """Test fees must fit uint256."""
        schedule = FeeSchedule()
        with pytest.raises(ValueError):
            schedule.set_default_fee(-1)
        with pytest.raises(ValueError):
            schedule.set_override_fee(Q1, 2**256)


class TestArbitratorFees:
    """Test fee operations on the arbitrator."""

    def test_set_default_fee(self, arbitrator):
        """Test owner can change the default fee."""
        arbitrator.set_default_fee(OWNER, 250)

        assert arbitrator.default_fee == 250
        assert arbitrator.get_effective_fee(Q1) == 250
        assert arbitrator.events[-1] == DefaultFeeChanged(fee=250)

    def test_set_override_fee(self, arbitrator):
        """Test override is reported and used."""
        arbitrator.set_override_fee(OWNER, Q1, 500)

        assert arbitrator.get_effective_fee(Q1) == 500
        assert arbitrator.override_fee(Q1) == 500
        assert arbitrator.events[-1] == OverrideFeeChanged(question=Q1, fee=500)

    def test_hex_question_ids(self, arbitrator):
        """Test questions may be given as 0x hex strings."""
        arbitrator.set_override_fee(OWNER, "0x" + Q1.hex(), 700)
        assert arbitrator.get_effective_fee(Q1) == 700

    def test_set_question_fee_forwards_to_oracle(self, arbitrator, oracle):
        """Test the question fee goes to the oracle."""
        arbitrator.set_question_fee(OWNER, 42)

        assert oracle.question_fee == 42
        assert arbitrator.events[-1] == QuestionFeeChanged(fee=42)

    def test_non_owner_cannot_change_fees(self, arbitrator, oracle):
        """Test fee operations are owner-only and leave no trace."""
        with pytest.raises(Unauthorized):
            arbitrator.set_default_fee(STRANGER, 1)
        with pytest.raises(Unauthorized):
            arbitrator.set_override_fee(STRANGER, Q1, 1)
        with pytest.raises(Unauthorized):
            arbitrator.set_question_fee(STRANGER, 1)

        assert arbitrator.default_fee == 100
        assert arbitrator.override_fee(Q1) == 0
        assert oracle.question_fee is None
        assert arbitrator.events == []

    def test_invalid_fee_leaves_schedule_unchanged(self, arbitrator):
        """Test a rejected fee does not emit or mutate."""
        with pytest.raises(ValueError):
            arbitrator.set_default_fee(OWNER, -5)

        assert arbitrator.default_fee == 100
        assert arbitrator.events == []
