"""Event dispatch via pluggy, synchronous or on a ThreadPoolExecutor.

Events are one-shot notifications: nothing is persisted and failed hooks
are not retried.

INVARIANT: Plugin failures are warnings, never errors.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from mdnest.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class EventBus:
    """Dispatches hook calls to registered plugins.

    Parameters:
        plugin_manager: Loaded PluginManager for hook dispatch.
        sync: Dispatch in the calling thread (useful for testing / ``--sync``).
            Hook exceptions then propagate to the caller.
        max_workers: ThreadPoolExecutor worker count for async dispatch.
    """

    def __init__(
        self,
        plugin_manager: PluginManager,
        *,
        sync: bool = False,
        max_workers: int = 2,
    ) -> None:
        self._pm = plugin_manager
        self._sync = sync
        self._executor: ThreadPoolExecutor | None = (
            None if sync else ThreadPoolExecutor(max_workers=max_workers)
        )
        self._futures: list[Future[None]] = []

    @property
    def plugin_manager(self) -> PluginManager:
        return self._pm

    def dispatch(self, hook_name: str, payload: dict[str, Any]) -> None:
        """Call *hook_name* with *payload* now (sync) or in the background."""
        if self._sync:
            self._call_hook(hook_name, payload)
            return
        assert self._executor is not None
        future = self._executor.submit(self._call_hook_logged, hook_name, payload)
        self._futures.append(future)

    def drain(self) -> None:
        """Wait for in-flight background dispatches to finish."""
        for future in self._futures:
            future.result()
        self._futures.clear()

    def shutdown(self) -> None:
        """Shutdown ThreadPoolExecutor, waiting for pending tasks."""
        self.drain()
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _call_hook(self, hook_name: str, payload: dict[str, Any]) -> None:
        hook_fn = getattr(self._pm.hook, hook_name, None)
        if hook_fn is None:
            logger.debug("No hook named %s", hook_name)
            return
        hook_fn(**payload)

    def _call_hook_logged(self, hook_name: str, payload: dict[str, Any]) -> None:
        try:
            self._call_hook(hook_name, payload)
        except Exception:
            logger.warning("Hook %s failed", hook_name, exc_info=True)
