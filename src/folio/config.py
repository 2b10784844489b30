"""Navigation configuration.

NavigationConfig is a frozen dataclass — immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass

from folio.errors import ConfigurationError

ANCHOR_BLOCKS = frozenset({"start", "center", "end", "nearest"})


@dataclass(frozen=True, slots=True)
class NavigationConfig:
    """Navigation configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = NavigationConfig(settle_delay=0.05, anchor_block="start")
    """

    # History
    base_url: str = "/"

    # Routing
    default_path: str = "/home"
    max_redirects: int = 10

    # Auth
    admin_prefix: str = "/admin"
    login_route: str = "login"
    redirect_param: str | None = "redirect"  # None = never carry a return target

    # Scroll restoration
    settle_delay: float = 1.0  # Seconds to wait for late content before scrolling
    anchor_block: str = "center"  # Alignment for fragment targets
    top_views: frozenset[str] = frozenset({"AuthorView"})  # Views that always open at (0, 0)

    def validate(self) -> None:
        """Raise ``ConfigurationError`` if any field is out of range."""
        if not self.admin_prefix.startswith("/"):
            msg = f"admin_prefix must start with '/', got {self.admin_prefix!r}"
            raise ConfigurationError(msg)
        if not self.default_path.startswith("/"):
            msg = f"default_path must start with '/', got {self.default_path!r}"
            raise ConfigurationError(msg)
        if self.settle_delay < 0:
            msg = f"settle_delay must be >= 0, got {self.settle_delay!r}"
            raise ConfigurationError(msg)
        if self.anchor_block not in ANCHOR_BLOCKS:
            allowed = ", ".join(sorted(ANCHOR_BLOCKS))
            msg = f"anchor_block must be one of {allowed}, got {self.anchor_block!r}"
            raise ConfigurationError(msg)
        if self.max_redirects < 1:
            msg = f"max_redirects must be >= 1, got {self.max_redirects!r}"
            raise ConfigurationError(msg)
