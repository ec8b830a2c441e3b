# security.py

import streamlit as st

# Roles known to the console, in the order the role picker shows them.
ALL_ROLES = ["admin", "operator", "auditor"]

DEFAULT_ROLE = "admin"


def get_user_session(state=None):
    """Return (and initialise if needed) the session dict for auth."""
    if state is None:
        state = st.session_state
    if "authenticated" not in state:
        state["authenticated"] = False
        state["role"] = DEFAULT_ROLE
        state["user"] = None

    return {
        "authenticated": state["authenticated"],
        "role": state["role"],
        "user": state["user"]
    }


def get_allowed_menus_for_role(role, menu_tree):
    """
    Filter MENU_TREE down to only the entries this role can open.
    Returns a list in the same shape as MENU_TREE but pruned.

    A leaf is kept when the role is in its "allowed_roles".
    A section (a node with children) is kept when any child survives.
    """
    filtered = []
    for menu in menu_tree:
        children = menu.get("children") or []
        if children:
            allowed_children = get_allowed_menus_for_role(role, children)
            if allowed_children:
                pruned = dict(menu)
                pruned["children"] = allowed_children
                filtered.append(pruned)
        elif role in menu.get("allowed_roles", []):
            filtered.append(dict(menu))
    return filtered


def get_allowed_paths(menus):
    """Every route_path in an (already filtered) menu tree, depth-first."""
    paths = []
    for menu in menus:
        if menu.get("route_path"):
            paths.append(menu["route_path"])
        paths.extend(get_allowed_paths(menu.get("children") or []))
    return paths
