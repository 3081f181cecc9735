"""Shared fixtures for route planner tests."""

import pytest

from hikeplanner.shared.contracts.route_request import PlanRequest, Preferences
from hikeplanner.tests.fakes import HOME, NOON, fixed_clock, make_route


@pytest.fixture
def clock():
    return fixed_clock(NOON)


@pytest.fixture
def transit_prefs():
    return Preferences(transport_modes=["transit", "walking"])


@pytest.fixture
def walking_request():
    return PlanRequest(query="easy hike near Boston", user_location=HOME)


@pytest.fixture
def current_route():
    return make_route("r1")
