"""Fixtures and fake collaborators for arbitrator tests."""

import pytest

from arbiter import Arbitrator

OWNER = "0x00000000000000000000000000000000000000a1"
ARBITRATOR = "0x00000000000000000000000000000000000000a2"


class FakeOracle:
    """In-memory oracle that records every call it receives."""

    def __init__(self, address: str = "0x00000000000000000000000000000000000000c1"):
        self.address = address
        self.question_fee = None
        self.notifications: list[tuple] = []
        self.answers: list[tuple] = []
        self.finalized: set[bytes] = set()
        self.fees_owed = 0
        self.finalized_queries = 0

        # Set to an exception to make the matching call fail
        self.notify_error: Exception | None = None
        self.submit_error: Exception | None = None

    def set_question_fee(self, fee: int) -> None:
        self.question_fee = fee

    def notify_arbitration_requested(self, question, requester, max_previous_bond) -> None:
        if self.notify_error:
            raise self.notify_error
        self.notifications.append((question, requester, max_previous_bond))

    def submit_arbitrator_answer(self, question, answer, answerer) -> None:
        if self.submit_error:
            raise self.submit_error
        self.answers.append((question, answer, answerer))

    def is_finalized(self, question) -> bool:
        self.finalized_queries += 1
        return question in self.finalized

    def withdraw_fees(self) -> int:
        released, self.fees_owed = self.fees_owed, 0
        return released


class FakeTransport:
    """Native transfers; recipients in `refusing` reject the value."""

    def __init__(self):
        self.sent: list[tuple[str, int]] = []
        self.refusing: set[str] = set()

    def send(self, recipient: str, amount: int) -> bool:
        if recipient in self.refusing:
            return False
        self.sent.append((recipient, amount))
        return True


class FakeAsset:
    """Fungible asset with plain balances."""

    def __init__(self, balances: dict[str, int] | None = None):
        self.balances = dict(balances or {})
        self.fail_transfers = False

    def balance_of(self, holder: str) -> int:
        return self.balances.get(holder, 0)

    def transfer(self, recipient: str, amount: int) -> bool:
        # The arbitrator is always the sender in these tests
        if self.fail_transfers or self.balances.get(ARBITRATOR, 0) < amount:
            return False
        self.balances[ARBITRATOR] -= amount
        self.balances[recipient] = self.balances.get(recipient, 0) + amount
        return True


@pytest.fixture
def oracle() -> FakeOracle:
    return FakeOracle()


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def arbitrator(oracle, transport) -> Arbitrator:
    return Arbitrator(
        owner=OWNER,
        address=ARBITRATOR,
        oracle=oracle,
        transport=transport,
        default_fee=100,
    )


@pytest.fixture
def fake_oracle_factory():
    return FakeOracle


@pytest.fixture
def fake_asset_factory():
    return FakeAsset
