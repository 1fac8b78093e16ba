"""Tests for the oracle adapter."""

import pytest

from arbiter.oracle_client import Oracle, OracleClient
from shared import OracleCallFailed

Q1 = bytes(31) + b"\x01"
ALICE = "0x00000000000000000000000000000000000000b1"


class TestOracleClient:
    """Test suite for OracleClient."""

    def test_fake_satisfies_protocol(self, oracle):
        """Test the fake oracle matches the Oracle protocol."""
        assert isinstance(oracle, Oracle)

    def test_forwards_calls(self, oracle):
        """Test calls reach the wrapped oracle."""
        client = OracleClient(oracle)

        client.set_question_fee(9)
        client.notify_arbitration_requested(Q1, ALICE, 3)

        assert client.address == oracle.address
        assert oracle.question_fee == 9
        assert oracle.notifications == [(Q1, ALICE, 3)]

    def test_is_finalized(self, oracle):
        """Test finalization queries pass through."""
        client = OracleClient(oracle)
        assert client.is_finalized(Q1) is False

        oracle.finalized.add(Q1)
        assert client.is_finalized(Q1) is True

    def test_errors_are_wrapped(self, oracle):
        """Test oracle exceptions become OracleCallFailed with a cause."""
        oracle.notify_error = ValueError("question already finalized")
        client = OracleClient(oracle)

        with pytest.raises(OracleCallFailed) as excinfo:
            client.notify_arbitration_requested(Q1, ALICE, 0)

        assert excinfo.value.operation == "notify_arbitration_requested"
        assert "already finalized" in str(excinfo.value)
        assert isinstance(excinfo.value.__cause__, ValueError)

    def test_withdraw_fees(self, oracle):
        """Test released fees are returned."""
        oracle.fees_owed = 12
        client = OracleClient(oracle)

        assert client.withdraw_fees() == 12
        assert client.withdraw_fees() == 0
