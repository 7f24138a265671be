"""
Apply hooks.

Other subsystems register callbacks here to react whenever the
configuration is loaded or changed.
"""

import logging
from typing import Any, Callable, List

logger = logging.getLogger(__name__)

ApplyCallback = Callable[[Any], None]


class ApplyHooks:
    """
    Ordered list of callbacks run after the configuration changes.

    Callbacks run in registration order and receive the live settings
    instance. Exceptions raised by a callback propagate to the caller.
    """

    def __init__(self):
        self._callbacks: List[ApplyCallback] = []

    def register(self, callback: ApplyCallback) -> ApplyCallback:
        """
        Add a callback. Registering the same callback twice has no effect.

        Returns the callback so this can be used as a decorator.
        """
        if callback not in self._callbacks:
            self._callbacks.append(callback)
        return callback

    def unregister(self, callback: ApplyCallback):
        """Remove a previously registered callback."""
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def apply(self, settings: Any):
        """Run every callback against the given settings."""
        for callback in list(self._callbacks):
            logger.debug(f"Applying configuration to {getattr(callback, '__qualname__', callback)}")
            callback(settings)

    def __len__(self) -> int:
        return len(self._callbacks)
