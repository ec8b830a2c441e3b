"""Shared fixtures for the console tests."""

from unittest.mock import Mock

import pytest

from tab_session import TabSessionManager, TabSessionStore
from ui_nav import SessionRouter


class FixedClock:
    """Returns the same instant until advanced."""

    def __init__(self, now=1_700_000_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds=0.001):
        self.now += seconds


@pytest.fixture
def storage():
    """Stands in for st.session_state."""
    return {}


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def router(storage):
    router = SessionRouter(state=storage)
    router.navigate = Mock(wraps=router.navigate)
    return router


@pytest.fixture
def store(storage):
    store = TabSessionStore(storage)
    store.save = Mock(wraps=store.save)
    return store


@pytest.fixture
def make_manager(store, router, clock):
    """Builds a manager wired to the router the same way get_navigation does."""

    def _make():
        manager = TabSessionManager(store, router, clock=clock)
        router.subscribe(manager.reconcile_navigation)
        return manager

    return _make


@pytest.fixture(autouse=True)
def clear_menu_cache():
    """Each test sees an empty menu cache."""
    from menu_service import _request_user_menus

    _request_user_menus.clear()
    yield
    _request_user_menus.clear()
