"""
Info panel for the selected feature.

The panel is a pure function of the view state: build_panel_view() decides
what to show, render_info_panel() draws it and turns button clicks into
view events.

Panel layouts:
- Collapsed: title, original name, explainer preview, "Развернуть" if the
  explainer is longer than the preview
- Expanded: title, original name, full explainer, "Свернуть"
"""
import html
from dataclasses import dataclass
from typing import Callable, Optional

import streamlit as st

from utils.color_schemes import ORIGINAL_NAME_COLOR, get_name_type
from utils.text_preview import is_expandable, preview_text
from utils.view_state import (
    CloseClicked,
    CollapseClicked,
    Event,
    ExpandClicked,
    SelectionStatus,
    ViewState,
    get_explainer,
)

EXPAND_LABEL = "Развернуть"
COLLAPSE_LABEL = "Свернуть"
CLOSE_LABEL = "×"


@dataclass(frozen=True)
class PanelView:
    """What the info panel shows."""

    title: str
    original_name: Optional[str]
    body: str
    name_type: Optional[str]
    expanded: bool
    show_expand: bool
    show_collapse: bool


def build_panel_view(state: ViewState) -> Optional[PanelView]:
    """
    Decide what the info panel shows for the current view state.

    Args:
        state: Current view state

    Returns:
        PanelView, or None when nothing is selected
    """
    if state.status == SelectionStatus.IDLE:
        return None

    feature = state.selected_feature
    properties = feature.get('properties') or {}
    explainer = get_explainer(feature)
    expanded = state.status == SelectionStatus.SELECTED_EXPANDED

    return PanelView(
        title=str(properties.get('name') or ''),
        original_name=properties.get('original_name') or None,
        body=(explainer or '') if expanded else preview_text(explainer),
        name_type=get_name_type(feature),
        expanded=expanded,
        show_expand=not expanded and is_expandable(explainer),
        show_collapse=expanded,
    )


def render_info_panel(state: ViewState, dispatch: Callable[[Event], None]) -> None:
    """
    Render the info panel for the selected feature (nothing when idle).

    Args:
        state: Current view state
        dispatch: Callback applying an event to the page's view state
    """
    view = build_panel_view(state)
    if view is None:
        return

    panel_class = "info-panel expanded" if view.expanded else "info-panel"

    with st.container(border=True):
        header_col, close_col = st.columns([6, 1])
        with header_col:
            header_html = f'<div class="{panel_class}"><div class="panel-title">{html.escape(view.title)}</div>'
            if view.original_name:
                header_html += (
                    f'<div class="panel-original" style="color:{ORIGINAL_NAME_COLOR};">'
                    f'{html.escape(str(view.original_name))}</div>'
                )
            header_html += '</div>'
            st.markdown(header_html, unsafe_allow_html=True)
        with close_col:
            st.button(CLOSE_LABEL, key="panel_close", on_click=dispatch, args=(CloseClicked(),))

        if view.body:
            st.markdown(
                f'<div class="panel-explainer">{html.escape(view.body)}</div>',
                unsafe_allow_html=True
            )

        bottom_left, bottom_right = st.columns([1, 1])
        with bottom_left:
            if view.show_expand:
                st.button(EXPAND_LABEL, key="panel_expand", on_click=dispatch, args=(ExpandClicked(),))
            elif view.show_collapse:
                st.button(COLLAPSE_LABEL, key="panel_collapse", on_click=dispatch, args=(CollapseClicked(),))
        with bottom_right:
            if view.name_type:
                st.caption(view.name_type)
