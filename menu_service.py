"""
menu_service.py

Turns the backend's menu tree into the nested navigation tree the sidebar
draws.

The backend sends nodes shaped like:
    {"menu_id", "menu_name", "route_path", "icon", "children": [...]}

The sidebar wants:
    {"key", "name", "path", "icon", "locale", "routes": [...]}

where "icon" is already resolved to a glyph and "locale" is the key used to
look up the display label.
"""

import re
import sys

import requests
import streamlit as st

from config import (
    MENU_TREE,
    MENU_ICONS,
    MENU_NAME_LOCALE_MAP,
    LOCALE_LABELS,
    MAX_MENU_DEPTH,
    MENU_API_URL,
    API_TOKEN,
    MENU_API_TIMEOUT,
    MENU_CACHE_TTL,
)
from security import get_allowed_menus_for_role


def render_menu_icon(icon_name):
    """Glyph for a menu icon key, or None when unset or unknown."""
    if not icon_name:
        return None
    return MENU_ICONS.get(icon_name)


def create_locale_key(menu_name: str, route_path: str) -> str:
    """
    Locale key for a menu entry.

    "/system/user-management" -> "menu.system.user-management".
    Routes with fewer than two segments fall back to the name table, then
    to a slug of the name ("Data Center" -> "menu.data-center").
    """
    if route_path:
        segments = [s for s in route_path.split("/") if s]
        if len(segments) >= 2:
            return "menu." + ".".join(segments)

    if menu_name in MENU_NAME_LOCALE_MAP:
        return MENU_NAME_LOCALE_MAP[menu_name]

    return "menu." + re.sub(r"\s+", "-", menu_name.lower())


def transform_user_menus(menus, depth=0):
    """Depth-first, order-preserving conversion of the backend tree."""
    if depth >= MAX_MENU_DEPTH:
        print(f"WARNING: Menu tree deeper than {MAX_MENU_DEPTH} levels, dropping the rest", file=sys.stderr)
        return []

    transformed = []
    for menu in menus or []:
        name = menu.get("menu_name")
        if not name:
            raise ValueError(f"Menu '{menu.get('menu_id')}' has no menu_name")

        route_path = menu.get("route_path") or ""
        node = {
            "key": menu.get("menu_id"),
            "name": name,
            "path": route_path,
            "icon": render_menu_icon(menu.get("icon")),
            "locale": create_locale_key(name, route_path),
        }

        children = menu.get("children") or []
        if children:
            node["routes"] = transform_user_menus(children, depth + 1)

        transformed.append(node)
    return transformed


def flatten_routes(menus):
    """Leaf entries of a transformed tree, depth-first."""
    leaves = []
    for menu in menus or []:
        if menu.get("routes"):
            leaves.extend(flatten_routes(menu["routes"]))
        else:
            leaves.append(menu)
    return leaves


def localise(locale_key, fallback):
    """zh-CN label for a locale key, or the fallback."""
    return LOCALE_LABELS.get(locale_key, fallback)


@st.cache_data(ttl=MENU_CACHE_TTL, show_spinner=False)
def _request_user_menus(base_url, token):
    """
    [PRIVATE] One GET to the menu endpoint, cached per (base_url, token).
    Raises on any failure, so failures are never cached.
    """
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    response = requests.get(
        f"{base_url.rstrip('/')}/api/v1/menus/user",
        headers=headers,
        timeout=MENU_API_TIMEOUT,
    )
    response.raise_for_status()
    body = response.json()

    if body.get("code") != 200 or not isinstance(body.get("data"), list):
        raise ValueError(f"Menu API returned an unexpected payload: {body.get('message')}")
    return body["data"]


def fetch_backend_menus(base_url, token=""):
    """
    GETs the current user's menu tree from the backend.
    Returns the list under "data", or None if the call or the envelope fails.
    """
    try:
        return _request_user_menus(base_url, token)
    except (requests.RequestException, ValueError) as e:
        print(f"CRITICAL: Failed to fetch user menus from {base_url}: {e}", file=sys.stderr)
        return None


def get_user_menus(role):
    """
    The raw menu tree for this role.

    Uses the backend when YUFUNG_MENU_API_URL is set (the backend already
    filters by user), otherwise the static MENU_TREE pruned by role.
    """
    if MENU_API_URL:
        menus = fetch_backend_menus(MENU_API_URL, API_TOKEN)
        if menus is not None:
            return menus
    return get_allowed_menus_for_role(role, MENU_TREE)
