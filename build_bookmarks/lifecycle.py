"""Enabling and disabling bookmarks: load on the way in, save on the way out."""

from __future__ import annotations

import atexit
from collections.abc import Callable

from .context import BookmarkContext
from .log import logger
from .persistence import BookmarkFile


class BookmarkController:
    """Two-state switch around a :class:`BookmarkContext`.

    Enabling loads the bookmarks file (refusing if bookmarks are already in
    memory) and registers a save to run at process exit.  Disabling saves,
    empties the store and drops the exit hook, so enabling again is safe.
    """

    def __init__(
        self,
        ctx: BookmarkContext,
        bookmark_file: BookmarkFile,
        *,
        register_exit: Callable[[Callable[[], None]], object] = atexit.register,
        unregister_exit: Callable[[Callable[[], None]], object] = atexit.unregister,
    ) -> None:
        self.ctx = ctx
        self.file = bookmark_file
        self._register_exit = register_exit
        self._unregister_exit = unregister_exit
        self._enabled = False

    @property
    def enabled(self) -> bool:
        return self._enabled

    def enable(self) -> None:
        if self._enabled:
            return
        self.file.load(self.ctx.store, self.ctx.state, force=False)
        self._register_exit(self._save_at_exit)
        self._enabled = True
        self.ctx.refresh_menu()
        logger.debug("bookmarks enabled (%d loaded)", len(self.ctx.store))

    def disable(self) -> None:
        if not self._enabled:
            return
        # A failed save leaves everything in place so nothing is lost.
        self.save()
        self.ctx.store.clear()
        self._unregister_exit(self._save_at_exit)
        self._enabled = False
        logger.debug("bookmarks disabled")

    def toggle(self) -> bool:
        """Flip between enabled and disabled; return the new state."""
        if self._enabled:
            self.disable()
        else:
            self.enable()
        return self._enabled

    def save(self) -> None:
        self.file.save(self.ctx.store, self.ctx.state)

    def _save_at_exit(self) -> None:
        if self._enabled:
            self.save()
