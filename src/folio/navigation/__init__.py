"""Navigation — guard, history, scroll restoration and the editor-mode flag."""

from folio.navigation.guard import (
    GuardDecision,
    NavigationGuard,
    Proceed,
    RedirectToLogin,
    SessionProvider,
)
from folio.navigation.history import HistoryEntry, MemoryHistory
from folio.navigation.mode import EditorMode, is_editor_path
from folio.navigation.navigator import NavigationFailureType, NavigationResult, Navigator
from folio.navigation.scroll import (
    ForceTop,
    ScrollController,
    ScrollIntent,
    ScrollPosition,
    ScrollToElement,
    ScrollToPosition,
    ScrollToSelector,
    Viewport,
    decide_scroll,
)

__all__ = [
    "EditorMode",
    "ForceTop",
    "GuardDecision",
    "HistoryEntry",
    "MemoryHistory",
    "NavigationFailureType",
    "NavigationGuard",
    "NavigationResult",
    "Navigator",
    "Proceed",
    "RedirectToLogin",
    "ScrollController",
    "ScrollIntent",
    "ScrollPosition",
    "ScrollToElement",
    "ScrollToPosition",
    "ScrollToSelector",
    "SessionProvider",
    "Viewport",
    "decide_scroll",
    "is_editor_path",
]
