# ui_nav.py

import streamlit as st

from config import HOME_PATH
from menu_service import localise
from tab_session import TabSessionManager, TabSessionStore


class SessionRouter:
    """
    The console's router. The current path lives in session state so it
    survives Streamlit reruns.

    Listeners are called synchronously, in registration order, every time
    the path changes.
    """

    STATE_KEY = "current_path"

    def __init__(self, state=None, default_path: str = HOME_PATH):
        self.state = st.session_state if state is None else state
        if self.STATE_KEY not in self.state:
            self.state[self.STATE_KEY] = default_path
        self._listeners = []

    def current_path(self) -> str:
        return self.state[self.STATE_KEY]

    def navigate(self, path: str) -> None:
        if path == self.current_path():
            return
        self.state[self.STATE_KEY] = path
        for listener in list(self._listeners):
            listener(path)

    def subscribe(self, listener) -> None:
        """Registers a listener and calls it once with the current path."""
        self._listeners.append(listener)
        listener(self.current_path())


def get_navigation(state=None):
    """
    Return the (router, tab manager) pair for this session, creating and
    wiring them on the first run. Later reruns get the same objects back.
    """
    if state is None:
        state = st.session_state

    if "tab_manager" not in state:
        router = SessionRouter(state)
        manager = TabSessionManager(TabSessionStore(state), router)
        router.subscribe(manager.reconcile_navigation)
        state["router"] = router
        state["tab_manager"] = manager

    return state["router"], state["tab_manager"]


def build_sidebar(user, role, menus, router):
    """
    Draw the sidebar navigation from the transformed menu tree.

    Clicking an entry navigates the router (which in turn opens or
    activates a tab) and reruns the script.

    Returns a dict:
      {
        "current_path": ...,
        "logout": True/False
      }
    """
    current_path = router.current_path()

    with st.sidebar:
        st.markdown("### 🏛️ Yufung Console")
        st.write(f"**User:** {user or 'guest'}")

        # --- 1. Navigation ---
        for menu in menus:
            label = localise(menu["locale"], menu["name"])
            icon = menu["icon"] or "📁"
            routes = menu.get("routes")

            if routes:
                expanded_default = current_path.startswith(menu["path"] + "/") if menu["path"] else False
                with st.expander(f"{icon} {label}", expanded=expanded_default):
                    _render_menu_tree(routes, current_path, router)
            else:
                _render_menu_button(menu, current_path, router)

        # --- 2. Sidebar Footer ---
        st.markdown("---")
        st.write(f"**Role:** `{role}`")

        logout_clicked = st.button("🔐 Log Out")

    return {
        "current_path": router.current_path(),
        "logout": logout_clicked
    }


def _render_menu_tree(menus, current_path, router, depth=0):
    """
    Everything below a top-level section. Expanders can't nest, so deeper
    sections become an indented caption with their entries under it.
    """
    for menu in menus:
        routes = menu.get("routes")
        if routes:
            label = localise(menu["locale"], menu["name"])
            st.caption(f"{'↳ ' * depth}{menu['icon'] or '📁'} **{label}**")
            _render_menu_tree(routes, current_path, router, depth + 1)
        else:
            _render_menu_button(menu, current_path, router, depth)


def _render_menu_button(menu, current_path, router, depth=0):
    label = localise(menu["locale"], menu["name"])
    icon = menu["icon"] or "•"
    button_label = f"✅ {label}" if menu["path"] == current_path else f"{icon} {label}"
    clicked = st.button(f"{'↳ ' * depth}{button_label}", key=f"nav::{menu['key']}")
    if clicked and menu["path"]:
        router.navigate(menu["path"])
        st.rerun()


def render_tab_strip(manager):
    """
    One button per open tab, plus a close button for closable ones.
    The active tab is marked and disabled.
    """
    tabs = manager.tabs
    if not tabs:
        return

    widths = []
    for tab in tabs:
        widths.extend([4, 1] if tab.closable else [4])
    columns = st.columns(widths)

    i = 0
    for tab in tabs:
        is_active = tab.key == manager.active_key
        label = f"▶ {tab.label}" if is_active else tab.label
        if columns[i].button(label, key=f"tab::{tab.key}", disabled=is_active, width="stretch"):
            manager.activate_tab(tab.key)
            st.rerun()
        i += 1

        if tab.closable:
            if columns[i].button("✕", key=f"close::{tab.key}", help=f"Close {tab.label}"):
                manager.remove_tab(tab.key)
                st.rerun()
            i += 1
