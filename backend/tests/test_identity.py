"""
Tests for role capabilities.
"""

import pytest

from venuebook.core.errors import AuthorizationError
from venuebook.core.identity import Capability, Principal, Role, capabilities_for, ensure_capability


def test_consumer_capabilities():
    caps = capabilities_for(Role.CONSUMER)
    assert Capability.BOOK_EVENTS in caps
    assert Capability.SAVE_EVENTS in caps
    assert Capability.MANAGE_OWN_EVENTS not in caps
    assert Capability.PROVISION_HOTELS not in caps


def test_hotel_capabilities():
    caps = capabilities_for(Role.HOTEL)
    assert {Capability.MANAGE_OWN_EVENTS, Capability.REVIEW_BOOKINGS, Capability.VIEW_HOTEL_STATS} <= caps
    assert Capability.BOOK_EVENTS not in caps


def test_admin_capabilities():
    caps = capabilities_for(Role.ADMIN)
    assert Capability.PROVISION_HOTELS in caps
    assert Capability.REVIEW_BOOKINGS not in caps


@pytest.mark.parametrize("role", list(Role))
def test_every_role_can_browse(role):
    assert Capability.BROWSE_EVENTS in capabilities_for(role)


def test_ensure_capability():
    hotel = Principal(id="h-1", role=Role.HOTEL, email="h@example.com")
    assert ensure_capability(hotel, Capability.REVIEW_BOOKINGS) is hotel

    with pytest.raises(AuthorizationError):
        ensure_capability(hotel, Capability.BOOK_EVENTS)
    with pytest.raises(AuthorizationError):
        ensure_capability(None, Capability.BROWSE_EVENTS)
