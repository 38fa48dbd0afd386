"""Booking reference generation.

References look like ``LR482913K7Q``: a fixed prefix, the last six digits of
the current epoch time in milliseconds and three random base-36 characters.
Generation is local and never consults a store, so uniqueness is
probabilistic. A collision would overwrite the earlier booking in the
fallback store; this risk is accepted rather than checked for.
"""

import secrets
import string
import threading
import time
from typing import Callable

REFERENCE_PREFIX = "LR"
SUFFIX_ALPHABET = string.digits + string.ascii_uppercase
SUFFIX_LENGTH = 3


class ReferenceGenerator:
    """Generates booking references.

    Within one generator, suffixes already issued in the current millisecond
    are skipped, so a burst of calls inside one millisecond never repeats.
    """

    def __init__(self, clock_ms: Callable[[], int] | None = None) -> None:
        """Initialize the generator.

        Args:
            clock_ms: Epoch milliseconds source. Defaults to the system clock.
        """
        self._clock_ms = clock_ms or (lambda: time.time_ns() // 1_000_000)
        self._lock = threading.Lock()
        self._stamp: str | None = None
        self._issued: set[str] = set()

    @staticmethod
    def _random_suffix() -> str:
        return "".join(secrets.choice(SUFFIX_ALPHABET) for _ in range(SUFFIX_LENGTH))

    def generate(self) -> str:
        """Generate a new booking reference.

        Returns:
            Reference like LR482913K7Q
        """
        stamp = str(self._clock_ms())[-6:].rjust(6, "0")

        with self._lock:
            if stamp != self._stamp:
                self._stamp = stamp
                self._issued.clear()

            suffix = self._random_suffix()
            while suffix in self._issued:
                suffix = self._random_suffix()
            self._issued.add(suffix)

        return f"{REFERENCE_PREFIX}{stamp}{suffix}"

    __call__ = generate
