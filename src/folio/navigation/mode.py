"""Editor mode flag.

Presentation components theme themselves by mode: the back-office and
its mirrored reading views render in editor mode, everything else in
reading mode. The flag is derived from the current path alone.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from folio.navigation.guard import under_prefix

if TYPE_CHECKING:
    from folio.navigation.navigator import Navigator
    from folio.routing import ResolvedNavigation


def is_editor_path(path: str, prefix: str = "/admin") -> bool:
    """True when *path* is under the admin prefix."""
    return under_prefix(path, prefix)


class EditorMode:
    """Read-only editor-mode flag bound to a navigator.

    Usage::

        mode = EditorMode(navigator)
        mode.watch(lambda editing: theme.switch("moon" if editing else "earth"))
        if mode.is_editor:
            ...
    """

    __slots__ = ("_navigator", "_prefix")

    def __init__(self, navigator: Navigator, prefix: str | None = None) -> None:
        self._navigator = navigator
        self._prefix = prefix if prefix is not None else navigator.config.admin_prefix

    @property
    def is_editor(self) -> bool:
        current = self._navigator.current
        if current is None:
            return False
        return is_editor_path(current.path, self._prefix)

    def watch(self, callback: Callable[[bool], None]) -> Callable[[], None]:
        """Call *callback(is_editor)* whenever the flag flips.

        Returns an unsubscribe callable.
        """

        def on_commit(to: ResolvedNavigation, from_: ResolvedNavigation | None) -> None:
            before = from_ is not None and is_editor_path(from_.path, self._prefix)
            after = is_editor_path(to.path, self._prefix)
            if before != after:
                callback(after)

        return self._navigator.subscribe(on_commit)

    def template_globals(self) -> dict[str, Any]:
        """Globals for presentation templates.

        ``is_editor_mode`` is a callable so templates read the live value.
        """
        return {"is_editor_mode": lambda: self.is_editor}
