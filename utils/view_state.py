"""
View state for the map page.

All mutable UI state (zoom, selected feature, panel expansion, about panel)
lives in one frozen ViewState owned by the page. It only changes through
apply_event(), which maps (state, event) to a new state.

Selection states:
- IDLE: nothing selected
- SELECTED: a feature is selected, panel collapsed
- SELECTED_EXPANDED: a feature is selected, full explainer shown
"""
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Union

from .text_preview import as_text, is_expandable

DEFAULT_ZOOM = 12


class SelectionStatus(Enum):
    IDLE = 'idle'
    SELECTED = 'selected'
    SELECTED_EXPANDED = 'selected_expanded'


@dataclass(frozen=True)
class ViewState:
    """Everything the page needs to render, apart from the loaded data."""

    zoom: float = DEFAULT_ZOOM
    selected_feature: Optional[dict] = None
    expanded: bool = False
    show_about: bool = False

    @property
    def status(self) -> SelectionStatus:
        if self.selected_feature is None:
            return SelectionStatus.IDLE
        if self.expanded:
            return SelectionStatus.SELECTED_EXPANDED
        return SelectionStatus.SELECTED


# =============================================================================
# Events
# =============================================================================

@dataclass(frozen=True)
class ZoomChanged:
    zoom: float


@dataclass(frozen=True)
class FeatureClicked:
    feature: dict


@dataclass(frozen=True)
class ExpandClicked:
    pass


@dataclass(frozen=True)
class CollapseClicked:
    pass


@dataclass(frozen=True)
class CloseClicked:
    pass


@dataclass(frozen=True)
class AboutOpened:
    pass


@dataclass(frozen=True)
class AboutClosed:
    pass


Event = Union[
    ZoomChanged, FeatureClicked, ExpandClicked, CollapseClicked,
    CloseClicked, AboutOpened, AboutClosed,
]


def get_explainer(feature: Optional[dict]) -> Optional[str]:
    """Explainer text of a feature, if any."""
    if feature is None:
        return None
    explainer = as_text((feature.get('properties') or {}).get('explainer'))
    return explainer or None


def apply_event(state: ViewState, event: Event) -> ViewState:
    """
    Apply one UI event to the view state.

    Events that make no sense in the current state (expanding with nothing
    selected, collapsing a collapsed panel, ...) return the state unchanged.

    Args:
        state: Current view state
        event: Event dispatched by the page

    Returns:
        New view state (may be the same object)
    """
    if isinstance(event, ZoomChanged):
        return replace(state, zoom=event.zoom)

    if isinstance(event, FeatureClicked):
        # New selection always starts collapsed
        return replace(state, selected_feature=event.feature, expanded=False)

    if isinstance(event, ExpandClicked):
        if state.status != SelectionStatus.SELECTED:
            return state
        if not is_expandable(get_explainer(state.selected_feature)):
            return state
        return replace(state, expanded=True)

    if isinstance(event, CollapseClicked):
        if state.status != SelectionStatus.SELECTED_EXPANDED:
            return state
        return replace(state, expanded=False)

    if isinstance(event, CloseClicked):
        return replace(state, selected_feature=None, expanded=False)

    if isinstance(event, AboutOpened):
        return replace(state, show_about=True)

    if isinstance(event, AboutClosed):
        return replace(state, show_about=False)

    raise TypeError(f"Unknown view event: {event!r}")
