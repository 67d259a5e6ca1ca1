"""
Tell a hardware barcode scanner apart from a person typing.

Scanners act as keyboards that type very fast and finish with Enter. Keys
are buffered while they keep arriving within ``max_pause_ms`` of each
other; a slow keystroke starts a new buffer.
"""

import time
from typing import Callable, Optional

BARCODE_MIN_LENGTH = 3
MAX_PAUSE_MS = 120


def _monotonic_ms() -> float:
    return time.monotonic() * 1000


class BarcodeScanBuffer:
    """Keystroke accumulator emitting scanned codes through ``on_scan``"""

    def __init__(
        self,
        on_scan: Callable[[str], None],
        min_length: int = BARCODE_MIN_LENGTH,
        max_pause_ms: float = MAX_PAUSE_MS,
        clock: Callable[[], float] = _monotonic_ms
    ):
        self.on_scan = on_scan
        self.min_length = min_length
        self.max_pause_ms = max_pause_ms
        self.clock = clock
        self.buffer = ""
        self.last_key_time = 0.0

    def reset(self) -> None:
        self.buffer = ""

    def feed(
        self,
        key: str,
        in_input: bool = False,
        ctrl: bool = False,
        meta: bool = False,
        alt: bool = False
    ) -> Optional[str]:
        """Handle one key press; returns the code when this key completed a scan"""
        if in_input:
            return None

        now = self.clock()
        if now - self.last_key_time > self.max_pause_ms:
            self.buffer = ""
        self.last_key_time = now

        if key == "Enter":
            code = self.buffer.strip()
            self.buffer = ""
            if len(code) >= self.min_length:
                self.on_scan(code)
                return code
            return None

        if len(key) == 1 and not (ctrl or meta or alt):
            self.buffer += key

        return None
