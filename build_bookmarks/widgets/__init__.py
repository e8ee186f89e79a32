"""Widget classes for Build Bookmarks.

Re-exports the modal screens so ``from .widgets import X`` works.
"""

from .screens import (
    BookmarkPickerScreen,
    ShortcutPromptScreen,
    TextPromptScreen,
)

__all__ = [
    "BookmarkPickerScreen",
    "ShortcutPromptScreen",
    "TextPromptScreen",
]
