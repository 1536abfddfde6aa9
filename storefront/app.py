import asyncio

import streamlit as st

# Configuration
from storefront.config import get_config
from storefront.logging import get_logger

# CatalogAccess interface + factory (HTTP by default, JSON fixture for local dev)
from storefront.data.util import get_catalog_access
from storefront.controller import StorefrontController
from storefront.ui.page import build_page

st.set_page_config(page_title="Storefront", layout="wide")

# Upper bound on how late an expired error banner is removed
EXPIRY_CHECK_SECONDS = 1.0

config = get_config()
logger = get_logger("storefront.app")

# -----------------------------------------------------------------------------
# Page handles + controller live for the whole browser session
# -----------------------------------------------------------------------------
if "storefront_controller" not in st.session_state:
    page = build_page(hero_height=config.hero_height)
    st.session_state["storefront_page"] = page
    st.session_state["storefront_controller"] = StorefrontController.from_page(page, get_catalog_access())

page = st.session_state["storefront_page"]
controller: StorefrontController = st.session_state["storefront_controller"]

# Page load: full catalog, once per session
if not st.session_state.get("storefront_loaded"):
    st.session_state["storefront_loaded"] = True
    logger.info(f"Initial catalog load ({config.catalog_backend} backend)")
    asyncio.run(controller.load())


# -----------------------------------------------------------------------------
# Search box: a form, so only Enter (or the button) commits; leaving the box
# does not search. Submitting an empty box shows the catalog again.
# -----------------------------------------------------------------------------
def _on_search_submit() -> None:
    text = st.session_state["search_term"]
    if text == "":
        asyncio.run(controller.on_search_input(text))
    else:
        asyncio.run(controller.on_search_commit(text))


# -----------------------------------------------------------------------------
# Styles: card grid + navbar fade driven by the hero height
# -----------------------------------------------------------------------------
st.markdown(
    f"""
    <style>
    .navbar {{
        position: sticky;
        top: 0;
        height: 56px;
        background-color: rgba(0, 0, 0, 0);
        z-index: 1000;
    }}
    .carousel {{
        height: {page.hero.client_height}px;
        background: linear-gradient(135deg, #222 0%, #555 100%);
    }}
    .products .row {{
        display: flex;
        flex-wrap: wrap;
        gap: 16px;
    }}
    .products .col-md-6 {{
        flex: 0 0 calc(33.333% - 16px);
    }}
    .card-img-top {{
        width: 100%;
        border-radius: 6px 6px 0 0;
    }}
    .alert-danger {{
        background: #f8d7da;
        color: #842029;
        padding: 12px 16px;
        border-radius: 6px;
        margin-top: 16px;
    }}
    {controller.navbar_css()}
    </style>
    """,
    unsafe_allow_html=True,
)

st.markdown(page.navbar.to_html(), unsafe_allow_html=True)
st.markdown(page.hero.to_html(), unsafe_allow_html=True)

with st.form("search_form", border=False):
    st.text_input(
        "Search products",
        key="search_term",
        placeholder="Search and press Enter",
    )
    st.form_submit_button("Search", on_click=_on_search_submit)

# -----------------------------------------------------------------------------
# Products region (cards + error slot). Reruns on its own timer so an error
# banner expires even when the shopper does nothing.
# -----------------------------------------------------------------------------
@st.fragment(run_every=min(EXPIRY_CHECK_SECONDS, config.error_timeout_seconds))
def products_region() -> None:
    controller.expire_error()
    st.markdown(page.container.to_html(), unsafe_allow_html=True)

    if controller.error_banner is not None:
        st.button("Dismiss error", on_click=controller.dismiss_error)


products_region()

# -----------------------------------------------------------------------------
# Footer
# -----------------------------------------------------------------------------
with st.expander("Data source"):
    st.write(
        f"Products are read through the **CatalogAccess** interface "
        f"(`{config.catalog_backend}` backend, API base `{config.api_base_url}`). "
        f"At most {config.max_visible_products} products are shown at a time."
    )
