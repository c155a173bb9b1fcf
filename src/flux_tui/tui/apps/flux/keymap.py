"""Keyboard to action mapping.

Keys are Textual key names (``"up"``, ``"enter"``, ``"G"``, ``"f5"``).
The mapping depends on which popup is open.
"""

from __future__ import annotations

from flux_tui.core.actions import (
    Action,
    Bottom,
    ClosePopup,
    Down,
    FilterNamespace,
    NamespaceDown,
    NamespaceUp,
    NextTab,
    Noop,
    PreviousTab,
    Quit,
    Reconcile,
    ReconcileWithSource,
    Refresh,
    Select,
    SetNamespace,
    ToggleSuspend,
    Top,
    Up,
)
from flux_tui.core.state import (
    ErrorPopup,
    NamespaceFilterPopup,
    NoPopup,
    Popup,
    ReconcilingPopup,
    ResourceDetailsPopup,
)

NORMAL_KEYS: dict[str, Action] = {
    # Quit
    "q": Quit(),
    "escape": Quit(),
    "ctrl+c": Quit(),
    # Navigation
    "up": Up(),
    "k": Up(),
    "down": Down(),
    "j": Down(),
    "home": Top(),
    "g": Top(),
    "end": Bottom(),
    "G": Bottom(),
    # Tabs
    "left": PreviousTab(),
    "h": PreviousTab(),
    "shift+tab": PreviousTab(),
    "right": NextTab(),
    "l": NextTab(),
    "tab": NextTab(),
    # Commands
    "enter": Select(),
    "r": Reconcile(),
    "R": ReconcileWithSource(),
    "s": ToggleSuspend(),
    "n": FilterNamespace(),
    "f5": Refresh(),
}

NAMESPACE_POPUP_KEYS: dict[str, Action] = {
    "escape": ClosePopup(),
    "up": NamespaceUp(),
    "k": NamespaceUp(),
    "down": NamespaceDown(),
    "j": NamespaceDown(),
    "q": Quit(),
}

DISMISSABLE_POPUP_KEYS: dict[str, Action] = {
    "escape": ClosePopup(),
    "enter": ClosePopup(),
    "q": Quit(),
}

RECONCILING_POPUP_KEYS: dict[str, Action] = {
    "q": Quit(),
}


def action_for_key(key: str, popup: Popup) -> Action:
    """Translate a key press into an action for the current popup.

    Args:
        key: Textual key name.
        popup: The popup currently shown.

    Returns:
        The action to dispatch, ``Noop`` for unbound keys.
    """
    if isinstance(popup, NamespaceFilterPopup):
        if key == "enter":
            found, namespace = popup.namespace_for_index(popup.selected)
            return SetNamespace(namespace) if found else Noop()
        return NAMESPACE_POPUP_KEYS.get(key, Noop())
    if isinstance(popup, ResourceDetailsPopup | ErrorPopup):
        return DISMISSABLE_POPUP_KEYS.get(key, Noop())
    if isinstance(popup, ReconcilingPopup):
        return RECONCILING_POPUP_KEYS.get(key, Noop())
    if isinstance(popup, NoPopup):
        return NORMAL_KEYS.get(key, Noop())
    return Noop()
