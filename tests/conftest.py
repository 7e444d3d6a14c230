"""Pytest configuration for the statize tests."""

from typing import Optional

import pytest

from statize import Stateful, stateful


def _never(info):
    return False


@pytest.fixture
def target_cls():
    """Host type with the open/closed/kiv/archived workflow."""

    class Target(Stateful):
        machine = stateful(initial_state="open")
        machine.event("close", {"open": "closed"})
        machine.event("kiv", {"open": "kiv", "closed": "kiv"})
        machine.event("reopen", {"kiv": "open"})
        machine.event("archive", {"closed": "archived"}, _never)

        def __init__(self):
            self.state: Optional[str] = None
            self.init_state()

    return Target


@pytest.fixture
def target(target_cls):
    """Fresh instance of the workflow host, at state 'open'."""
    return target_cls()


@pytest.fixture
def two_profile_cls():
    """Host type with two profiles stored in separate attributes."""

    class Burner(Stateful):
        door = stateful(initial_state="open")
        door.event("close", {"open": "closed"})
        door.event("open", {"closed": "open"})

        fuel = stateful(profile="second", initial_state="active", state_attr_name="fuel_state")
        fuel.event("burn", {"active": "burnt"})
        fuel.event("refill", {"burnt": "active"})

        def __init__(self):
            self.state = None
            self.fuel_state = None

    return Burner
