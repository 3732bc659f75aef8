"""Cue sinks that realize engine cues as sound."""

from __future__ import annotations

import logging
from typing import Any


logger = logging.getLogger(__name__)

# Pitch rises as the countdown approaches zero.
COUNTDOWN_FREQUENCIES_HZ = {3: 600, 2: 700, 1: 800}

BROWSER_AUDIO_JS = """
<script>
  window.ctAudio = (() => {
    let ctx = null;
    const context = () => {
      if (!ctx) {
        ctx = new (window.AudioContext || window.webkitAudioContext)();
      }
      return ctx;
    };
    const beep = (freq, durationMs, type = 'sine', volume = 0.3) => {
      try {
        const c = context();
        const osc = c.createOscillator();
        const gain = c.createGain();
        osc.connect(gain);
        gain.connect(c.destination);
        osc.frequency.value = freq;
        osc.type = type;
        gain.gain.setValueAtTime(volume, c.currentTime);
        gain.gain.exponentialRampToValueAtTime(0.01, c.currentTime + durationMs / 1000);
        osc.start(c.currentTime);
        osc.stop(c.currentTime + durationMs / 1000);
      } catch (e) {
        console.warn('Audio not available:', e);
      }
    };
    return {
      init: () => { try { context().resume(); } catch (e) { console.warn('Audio not available:', e); } },
      countdown: (freq) => beep(freq, 200),
      start: () => beep(1000, 300, 'square'),
      change: () => {
        beep(880, 150, 'sine', 0.4);
        setTimeout(() => beep(1100, 200, 'sine', 0.4), 150);
      },
      phaseEnd: () => {
        beep(800, 200);
        setTimeout(() => beep(1000, 200), 200);
        setTimeout(() => beep(1200, 300), 400);
      },
    };
  })();
</script>
"""


class SilentCues:
    def init_audio(self) -> None:
        return None

    def play_countdown(self, n: int) -> None:
        return None

    def play_start(self) -> None:
        return None

    def play_change(self) -> None:
        return None

    def play_phase_end(self) -> None:
        return None


class ConsoleCues:
    """Terminal cues: the bell character plus a short marker."""

    def __init__(self, bell: bool = True) -> None:
        self._bell = bell

    def _ring(self, text: str) -> None:
        prefix = "\a" if self._bell else ""
        print(f"{prefix}  >> {text}")

    def init_audio(self) -> None:
        return None

    def play_countdown(self, n: int) -> None:
        self._ring(str(n))

    def play_start(self) -> None:
        self._ring("GO")

    def play_change(self) -> None:
        self._ring("CHANGE")

    def play_phase_end(self) -> None:
        self._ring("PHASE COMPLETE")


class BrowserCues:
    """Plays cues in the connected browser tab via the Web Audio API.

    The page must include ``BROWSER_AUDIO_JS`` in its head.
    """

    def __init__(self, client: Any) -> None:
        self._client = client

    def _run(self, code: str) -> None:
        self._client.run_javascript(code)

    def init_audio(self) -> None:
        self._run("window.ctAudio && window.ctAudio.init()")

    def play_countdown(self, n: int) -> None:
        freq = COUNTDOWN_FREQUENCIES_HZ.get(n, 600)
        self._run(f"window.ctAudio && window.ctAudio.countdown({freq})")

    def play_start(self) -> None:
        self._run("window.ctAudio && window.ctAudio.start()")

    def play_change(self) -> None:
        self._run("window.ctAudio && window.ctAudio.change()")

    def play_phase_end(self) -> None:
        self._run("window.ctAudio && window.ctAudio.phaseEnd()")
