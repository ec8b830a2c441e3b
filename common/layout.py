"""
common/layout.py

Shared layout helpers for console pages.

It embeds its own CSS inside the st.markdown() call to draw a thin header
bar above the tab strip's page body. No external style.css is needed.
"""

from typing import Optional, Callable
import streamlit as st


HEADER_CSS = """
<style>
    div.block-container {
        padding-top: 1.8rem !important;
    }

    .console-header {
        display: flex;
        justify-content: space-between;
        align-items: center;
        padding: 0.3rem 1.25rem;
        background-image: linear-gradient(90deg, #001529, #1677FF);
        border-radius: 10px;
        box-shadow: 0 4px 12px rgba(0, 0, 0, 0.1);
        margin-bottom: 1.0rem;
    }

    /* --- Left Side: Title, Badges --- */
    .header-left {
        display: flex;
        align-items: center;
        gap: 0.75rem;
        color: white;
    }
    .header-left h2 {
        font-size: 1.1rem;
        font-weight: 500;
        margin: 0;
        padding: 0;
        line-height: 1;
        color: white;
    }
    .path-badge, .coming-soon-badge {
        padding: 0.2rem 0.5rem;
        border-radius: 4px;
        font-size: 0.7rem;
        font-weight: 700;
        line-height: 1.0;
    }
    .path-badge {
        font-family: 'Consolas', 'Menlo', 'monospace';
        background-color: rgba(255, 255, 255, 0.15);
        color: white;
    }
    .coming-soon-badge {
        background-color: #FFC107;
        color: #333;
    }

    /* --- Right Side: Metadata (Owner, Updated) --- */
    .header-right {
        display: flex;
        flex-direction: row;
        align-items: center;
        gap: 1.25rem;
        font-size: 0.8rem;
        color: #eee;
    }
    .meta-item {
        line-height: 1;
        white-space: nowrap;
    }
    .meta-item strong {
        font-weight: 600;
        color: #ccc;
    }
</style>
"""


def render_frame(
    title_override: str,
    body_component: Optional[Callable],
    last_updated: str,
    owner: str,
    coming_soon: bool = False,
    path: Optional[str] = None,
    role: Optional[str] = None,
) -> None:
    """
    Render the header strip for the current page, then the page body.

    Pages that are registered in the menu but not built yet pass
    coming_soon=True and get a placeholder instead of a body.
    """

    path_badge = f'<span class="path-badge">{path}</span>' if path else ""
    coming_soon_tag = '<span class="coming-soon-badge">⚠ Coming Soon</span>' if coming_soon else ""

    header_html = f"""
<div class="console-header">
<div class="header-left">
<h2>Yufung · {title_override}</h2>
{path_badge}
{coming_soon_tag}
</div>
<div class="header-right">
<div class="meta-item">
    <strong>Owner:</strong> {owner}
</div>
<div class="meta-item">
    <strong>Updated:</strong> {last_updated}
</div>
</div>
</div>
"""

    st.markdown(HEADER_CSS, unsafe_allow_html=True)
    st.markdown(header_html, unsafe_allow_html=True)

    if coming_soon:
        st.info(
            "This page has a place in the console menu, "
            "but the screen behind it is still being built."
        )

    elif body_component:
        body_component(role=role)

    else:
        st.error(
            f"**Page Rendering Error:** The page '{title_override}' is not marked "
            "'Coming Soon' but did not provide a valid body component to render."
        )
