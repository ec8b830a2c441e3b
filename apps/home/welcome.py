"""
apps/home/welcome.py

The landing page behind the permanent "首页" tab.

It shows the user where they are: which tabs are open in this session and
which screens their role can reach from the sidebar.
"""

import streamlit as st
from datetime import datetime

from menu_service import flatten_routes, localise


class Page:
    def __init__(self, role: str):
        self.role = role
        self.manager = st.session_state.get("tab_manager")
        self.menus = st.session_state.get("nav_menus") or []

        self.meta = {
            "title_override": "首页",
            "owner": "Back Office Platform Team",
            "last_updated": datetime.now().strftime("%Y-%m-%d %H:%M"),
            "coming_soon": False,
        }

    def _render_open_tabs(self):
        st.subheader("🗂️ Open Tabs")
        if self.manager is None:
            st.caption("No tab session yet.")
            return

        tabs = self.manager.tabs
        c1, c2 = st.columns(2)
        c1.metric("Open Tabs", len(tabs))
        c2.metric("Closable", len([t for t in tabs if t.closable]))

        rows = [
            {
                "Title": tab.label,
                "Path": tab.path,
                "Active": "✅" if tab.key == self.manager.active_key else "",
                "Closable": "Yes" if tab.closable else "No",
            }
            for tab in tabs
        ]
        st.dataframe(rows, width="stretch", hide_index=True)

    def _render_shortcuts(self):
        st.subheader("🧭 Your Screens")
        if not self.menus:
            st.info("Your role does not have any screens assigned yet.")
            return

        for menu in self.menus:
            entries = flatten_routes(menu.get("routes") or [menu])
            st.markdown(f"**{menu['icon'] or '📁'} {localise(menu['locale'], menu['name'])}**")
            st.caption(" · ".join(localise(r["locale"], r["name"]) for r in entries))

    def render_body(self, role: str) -> None:
        """Called by render_frame."""
        st.markdown(f"Signed in as role **`{role}`**. Pick a screen from the sidebar to open it in a new tab.")
        st.markdown("---")
        col1, col2 = st.columns(2)
        with col1:
            self._render_open_tabs()
        with col2:
            self._render_shortcuts()


def render_page(role: str) -> (callable, dict):
    """
    This is the public function that main_app.py interacts with.
    """
    page = Page(role=role)
    return page.render_body, page.meta
