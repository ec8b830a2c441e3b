"""
tab_session.py

The open-tab "session" behind the tab strip above every page.

===============================================================================
HOW IT FITS TOGETHER:
===============================================================================
- `TabSessionStore` keeps the list of open tabs as a JSON string under one
  fixed key (`config.TAB_STORAGE_KEY`) in a session-scoped key-value store.
  In the app that store is `st.session_state`; in tests it is a plain dict.

- `TabSessionManager` owns the tabs and the active tab key. It is the ONLY
  thing that mutates them. It listens to the router (every path change calls
  `reconcile_navigation`) and the tab strip calls `activate_tab` /
  `remove_tab` on clicks.

Rules worth knowing before you touch this file:
  1. At most one tab per path.
  2. The home tab ("welcome") is always present and can never be closed.
  3. The active key always points at an existing tab.
  4. Only `tabs` is persisted, never the active key.
-------------------------------------------------------------------------------
"""

import json
import sys
import time
from typing import Callable, Optional

from config import (
    TAB_STORAGE_KEY,
    HOME_TAB,
    HOME_PATH,
    LOGIN_PATH,
    PATH_TITLE_MAP,
    UNTITLED_TAB_LABEL,
)


class Tab:
    """One open, revisitable page on the tab strip."""

    def __init__(self, key: str, label: str, path: str, closable: bool = True, icon: Optional[str] = None):
        self.key = key
        self.label = label
        self.path = path
        self.closable = closable
        self.icon = icon

    @classmethod
    def from_dict(cls, record: dict) -> "Tab":
        """Builds a Tab from a stored record. Raises ValueError if the record is not tab-shaped."""
        if not isinstance(record, dict):
            raise ValueError(f"Tab record must be an object, got {type(record).__name__}")
        for field in ("key", "label", "path"):
            if not isinstance(record.get(field), str) or not record[field]:
                raise ValueError(f"Tab record is missing '{field}'")
        closable = record.get("closable", True)
        if not isinstance(closable, bool):
            raise ValueError("Tab 'closable' must be true or false")
        icon = record.get("icon")
        return cls(
            key=record["key"],
            label=record["label"],
            path=record["path"],
            closable=closable,
            icon=icon if isinstance(icon, str) else None,
        )

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "label": self.label,
            "path": self.path,
            "closable": self.closable,
            "icon": self.icon,
        }

    def __eq__(self, other):
        if not isinstance(other, Tab):
            return NotImplemented
        return (self.key, self.label, self.path, self.closable) == \
            (other.key, other.label, other.path, other.closable)

    def __repr__(self):
        return f"Tab(key={self.key!r}, path={self.path!r}, closable={self.closable})"


def make_home_tab() -> Tab:
    """A fresh copy of the permanent home tab."""
    return Tab.from_dict(HOME_TAB)


def title_for(path: str) -> str:
    """
    Works out the tab title for a route.

    Tries, in order: the whole path, the last segment, then
    "<second-last>-<last>". Falls back to the raw last segment.
    """
    if path in PATH_TITLE_MAP:
        return PATH_TITLE_MAP[path]

    segments = [s for s in path.split("/") if s]
    if not segments:
        return UNTITLED_TAB_LABEL

    last = segments[-1]
    if last in PATH_TITLE_MAP:
        return PATH_TITLE_MAP[last]

    if len(segments) >= 2:
        combined = f"{segments[-2]}-{last}"
        if combined in PATH_TITLE_MAP:
            return PATH_TITLE_MAP[combined]

    return last


class TabSessionStore:
    """Reads and writes the tab list under a single key. No logic beyond (de)serialising."""

    def __init__(self, storage, key: str = TAB_STORAGE_KEY):
        # storage: any mutable mapping of str -> str (st.session_state in the app)
        self.storage = storage
        self.key = key

    def load(self) -> Optional[list]:
        """
        Returns the stored tabs, or None if there is nothing usable.

        Missing key, bad JSON, a non-list, an empty list, a malformed record
        or duplicate keys/paths all count as "nothing usable". Never raises.
        """
        try:
            raw = self.storage.get(self.key)
            if raw is None:
                return None

            parsed = json.loads(raw)
            if not isinstance(parsed, list) or not parsed:
                print(f"WARNING: Ignoring stored tabs under '{self.key}': not a non-empty list", file=sys.stderr)
                return None

            tabs = [Tab.from_dict(record) for record in parsed]

            keys = [tab.key for tab in tabs]
            paths = [tab.path for tab in tabs]
            if len(set(keys)) != len(keys) or len(set(paths)) != len(paths):
                print(f"WARNING: Ignoring stored tabs under '{self.key}': duplicate keys or paths", file=sys.stderr)
                return None

            return tabs
        except Exception as e:
            print(f"WARNING: Failed to parse saved tabs under '{self.key}': {e}", file=sys.stderr)
            return None

    def save(self, tabs: list) -> None:
        """Overwrites the stored list. Last write wins."""
        self.storage[self.key] = json.dumps([tab.to_dict() for tab in tabs], ensure_ascii=False)


class TabSessionManager:
    """
    Owns the open tabs and the active tab, and keeps them in step with
    navigation.

    `router` must provide `current_path()` and `navigate(path)`.
    `clock` returns seconds since the epoch (time.time by default); it only
    feeds new tab keys.
    """

    def __init__(self, store: TabSessionStore, router, clock: Callable[[], float] = time.time):
        self.store = store
        self.router = router
        self.clock = clock
        self._tabs = []
        self._active_key = None
        self._initialize()

    # --- State (read-only views) ---

    @property
    def tabs(self) -> list:
        return list(self._tabs)

    @property
    def active_key(self) -> str:
        return self._active_key

    @property
    def active_tab(self) -> Tab:
        return self._find_by_key(self._active_key)

    # --- Transitions ---

    def _initialize(self):
        """Restores the stored tabs, or starts with just the home tab. Never saves."""
        loaded = self.store.load()

        home_key = HOME_TAB["key"]
        if loaded and any((tab.key == home_key) != (tab.path == HOME_PATH) for tab in loaded):
            print("WARNING: Stored tabs give the home key or path to another tab, starting fresh", file=sys.stderr)
            loaded = None

        if not loaded:
            home = make_home_tab()
            self._tabs = [home]
            self._active_key = home.key
            return

        for tab in loaded:
            if tab.key == home_key:
                tab.closable = False
        if not any(tab.key == home_key for tab in loaded):
            # A stored list without the home tab still gets one, in front
            loaded.insert(0, make_home_tab())

        self._tabs = loaded
        current = self._find_by_path(self.router.current_path())
        self._active_key = current.key if current else self._tabs[0].key

    def reconcile_navigation(self, new_path: str) -> None:
        """Called on every router path change, including the first one."""
        if new_path == LOGIN_PATH:
            return

        existing = self._find_by_path(new_path)
        if existing:
            self._active_key = existing.key
            return

        if new_path == HOME_PATH:
            return

        tab = Tab(
            key=self._new_tab_key(),
            label=title_for(new_path),
            path=new_path,
            closable=True,
        )
        self._tabs.append(tab)
        self._active_key = tab.key
        self.store.save(self._tabs)

    def activate_tab(self, key: str) -> None:
        """Tab click. Unknown keys are ignored."""
        tab = self._find_by_key(key)
        if tab is None:
            return

        self._active_key = key
        if tab.path != self.router.current_path():
            self.router.navigate(tab.path)

    def remove_tab(self, key: str) -> None:
        """
        Tab close. Unknown keys and non-closable tabs are ignored.

        When the active tab is closed the next one to the right takes over,
        unless it was the last tab, in which case the one to its left does.
        """
        index = self._index_of(key)
        if index is None or not self._tabs[index].closable:
            return

        previous_active = self._active_key
        was_last = index == len(self._tabs) - 1
        del self._tabs[index]

        if not self._tabs:
            home = make_home_tab()
            self._tabs.append(home)
            self._active_key = home.key
        elif key == self._active_key:
            successor = self._tabs[-1] if was_last else self._tabs[index]
            self._active_key = successor.key

        self.store.save(self._tabs)

        if self._active_key == previous_active:
            return
        new_active = self.active_tab
        if new_active.path != self.router.current_path():
            self.router.navigate(new_active.path)

    # --- Helpers ---

    def _new_tab_key(self) -> str:
        # Millisecond timestamps can repeat under programmatic redirects
        base = f"tab_{int(self.clock() * 1000)}"
        taken = {tab.key for tab in self._tabs}
        key = base
        n = 1
        while key in taken:
            key = f"{base}_{n}"
            n += 1
        return key

    def _find_by_key(self, key: str) -> Optional[Tab]:
        for tab in self._tabs:
            if tab.key == key:
                return tab
        return None

    def _find_by_path(self, path: str) -> Optional[Tab]:
        for tab in self._tabs:
            if tab.path == path:
                return tab
        return None

    def _index_of(self, key: str) -> Optional[int]:
        for i, tab in enumerate(self._tabs):
            if tab.key == key:
                return i
        return None
