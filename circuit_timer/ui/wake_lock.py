"""Screen keep-awake capability used while a workout runs."""

from __future__ import annotations

import logging
from typing import Any, Protocol


logger = logging.getLogger(__name__)

BROWSER_WAKE_LOCK_JS = """
<script>
  window.ctWakeLock = (() => {
    let sentinel = null;
    const report = () => emitEvent('ct_wake_lock', {
      supported: 'wakeLock' in navigator,
      active: sentinel !== null,
    });
    return {
      request: async () => {
        if (!('wakeLock' in navigator)) { report(); return false; }
        if (sentinel) { return true; }
        try {
          sentinel = await navigator.wakeLock.request('screen');
          sentinel.addEventListener('release', () => { sentinel = null; report(); });
        } catch (err) {
          console.warn('Wake Lock request failed:', err.message);
          sentinel = null;
        }
        report();
        return sentinel !== null;
      },
      release: async () => {
        if (!sentinel) { return; }
        try {
          await sentinel.release();
          sentinel = null;
        } catch (err) {
          console.warn('Wake Lock release failed:', err.message);
        }
        report();
      },
    };
  })();
  document.addEventListener('visibilitychange', () => {
    emitEvent('ct_visibility', { visible: document.visibilityState === 'visible' });
  });
</script>
"""


class WakeLock(Protocol):
    @property
    def supported(self) -> bool: ...

    @property
    def active(self) -> bool: ...

    def acquire(self) -> bool: ...

    def release(self) -> None: ...


class NullWakeLock:
    """For hosts without a screen to keep awake (terminal, tests)."""

    supported = False
    active = False

    def acquire(self) -> bool:
        return False

    def release(self) -> None:
        return None


class BrowserWakeLock:
    """Screen Wake Lock API in the connected browser tab.

    Requests are fire-and-forget; the page reports the real outcome back
    through the ``ct_wake_lock`` event, which should be routed to
    ``on_browser_report``.
    """

    def __init__(self, client: Any) -> None:
        self._client = client
        self._supported = True
        self._active = False

    @property
    def supported(self) -> bool:
        return self._supported

    @property
    def active(self) -> bool:
        return self._active

    def acquire(self) -> bool:
        if not self._supported:
            return False
        if self._active:
            return True
        try:
            self._client.run_javascript("window.ctWakeLock && window.ctWakeLock.request()")
        except Exception as exc:
            logger.warning("Wake lock request failed: %s", exc)
            return False
        self._active = True
        return True

    def release(self) -> None:
        if not self._active:
            return
        self._active = False
        try:
            self._client.run_javascript("window.ctWakeLock && window.ctWakeLock.release()")
        except Exception as exc:
            logger.warning("Wake lock release failed: %s", exc)

    def on_browser_report(self, supported: bool, active: bool) -> None:
        if not supported and self._supported:
            logger.info("Screen wake lock not supported by this browser")
        self._supported = supported
        self._active = active
