"""Theme definition for the Build Bookmarks TUI.

The Textual Theme controls the base UI colors ($background, $surface,
$panel, $primary, ...) used by the app and modal CSS.  Green for a build
that can run, amber for warnings, red for failed builds and saves.
"""

from textual.theme import Theme

BOOKMARKS_THEME = Theme(
    name="bookmarks-dark",
    primary="#4caf7a",
    secondary="#6ab0c8",
    accent="#3b4a5c",
    foreground="#d8dee4",
    background="#12161b",
    surface="#1b2129",
    panel="#2a323d",
    success="#4caf7a",
    warning="#e0a33a",
    error="#e05252",
    dark=True,
)
