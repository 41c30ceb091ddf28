"""Anti-bot / access-denied page detection.

Any occurrence of a signal phrase anywhere in the document counts, even inside
unrelated copy that merely mentions e.g. "captcha".
"""

from typing import Optional

BLOCKED_SIGNALS = (
    "captcha",
    "access denied",
    "enable javascript",
    "verify you are human",
    "unusual traffic",
    "bot detection",
    "attention required",
)


def find_blocked_signal(text: Optional[str]) -> Optional[str]:
    """Return the first signal phrase found in text, or None."""
    if not text:
        return None
    lower = text.lower()
    for signal in BLOCKED_SIGNALS:
        if signal in lower:
            return signal
    return None


def is_blocked(text: Optional[str]) -> bool:
    return find_blocked_signal(text) is not None
