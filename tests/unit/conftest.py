"""Fixtures built on the in-memory fakes."""

import pytest

from fakes import InMemoryApplicantRepository, InMemoryTicketRepository, StubEncoder, TickingClock


@pytest.fixture
def applicant_repo():
    return InMemoryApplicantRepository()


@pytest.fixture
def ticket_repo(applicant_repo):
    return InMemoryTicketRepository(applicant_repo)


@pytest.fixture
def stub_encoder():
    return StubEncoder()


@pytest.fixture
def clock():
    return TickingClock()
