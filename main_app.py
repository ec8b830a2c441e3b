import streamlit as st

from apps.home import welcome
from common.layout import render_frame

from config import HOME_PATH
from menu_service import get_user_menus, transform_user_menus
from security import get_user_session, get_allowed_paths
from tab_session import title_for
from ui_nav import build_sidebar, get_navigation, render_tab_strip

# -------------------------------------------
# PAGE CONFIG
# -------------------------------------------
st.set_page_config(
    page_title="Yufung Back Office",
    page_icon="🏛️",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Route -> page module. Routes not listed here are in the menu but not built yet.
PAGE_COMPONENTS = {
    HOME_PATH: welcome.render_page,
}

# 1. Auth / session ---------------------------------
session = get_user_session()
role = session["role"]
user = session["user"]

# 2. Figure out what this role can see ----------------
raw_menus = get_user_menus(role)
try:
    menus = transform_user_menus(raw_menus)
except ValueError as e:
    st.error(f"The menu for role '{role}' could not be built: {e}")
    st.stop()
st.session_state["nav_menus"] = menus

allowed_paths = set(get_allowed_paths(raw_menus)) | {HOME_PATH}

# 3. Router + tabs (created once per browser session) --
router, manager = get_navigation()

# Deep link (?page=/system/company-list), honoured once per session
if not st.session_state.get("deep_link_checked"):
    st.session_state["deep_link_checked"] = True
    requested = st.query_params.get("page")
    if requested and requested in allowed_paths:
        router.navigate(requested)

# 4. Draw sidebar + get nav state ---------------------
nav_state = build_sidebar(
    user=user,
    role=role,
    menus=menus,
    router=router,
)

if nav_state["logout"]:
    # wipe session (tabs included) & rerun
    st.session_state.clear()
    st.rerun()

current_path = nav_state["current_path"]

# 5. Tab strip ----------------------------------------
render_tab_strip(manager)

# 6. Load and render the chosen page ------------------
active_tab = manager.active_tab
page_label = active_tab.label if active_tab and active_tab.path == current_path else title_for(current_path)

if current_path not in allowed_paths:
    st.error(f"Your role does not have access to '{page_label}'.")
    st.stop()

render_page = PAGE_COMPONENTS.get(current_path)
if render_page is None:
    # "Coming soon" placeholder
    body_component = None
    meta = {
        "title_override": page_label,
        "last_updated": "N/A",
        "owner": "TBD",
        "coming_soon": True
    }
else:
    try:
        body_component, meta = render_page(role=role)
    except Exception as e:
        # Catch any other error from within the page module
        st.error(f"An error occurred while rendering '{page_label}'.")
        st.exception(e)
        st.stop()

# 7. Wrap it in the console frame ---------------------
render_frame(
    title_override = meta.get("title_override", page_label),
    body_component = body_component,
    last_updated   = meta.get("last_updated", "N/A"),
    owner          = meta.get("owner", "TBD"),
    coming_soon    = meta.get("coming_soon", False),
    path           = current_path,
    role           = role,
)
