"""
Restrict free text to the character set accepted in a Swiss Payment Code.

Allowed: printable ASCII (0x20-0x7E) and the Latin-1 supplement (0xA0-0xFF).
Everything else, including control characters, tabs, emoji and other wide
Unicode, is dropped. Umlauts and accented letters survive.
"""

from enum import Enum
import re


class SanitizeMode(str, Enum):
    SINGLE_LINE = "single_line"
    MULTI_LINE = "multi_line"


_DISALLOWED = re.compile(r"[^\x20-\x7E\xA0-\xFF]")
_DISALLOWED_KEEP_NEWLINE = re.compile(r"[^\n\x20-\x7E\xA0-\xFF]")
# 0xA0 (no-break space) counts as whitespace
_WHITESPACE_RUN = re.compile(r"\s+")
_INLINE_WHITESPACE_RUN = re.compile(r"[^\S\n]+")


def _collapse(line: str) -> str:
    return _INLINE_WHITESPACE_RUN.sub(" ", line).strip()


def sanitize(text: str | None, mode: SanitizeMode = SanitizeMode.SINGLE_LINE) -> str:
    if not text:
        return ""

    if mode == SanitizeMode.MULTI_LINE:
        text = text.replace("\r\n", "\n").replace("\r", "\n")
        cleaned = _DISALLOWED_KEEP_NEWLINE.sub(" ", text)
        lines = [_collapse(line) for line in cleaned.split("\n")]
        return "\n".join(line for line in lines if line)

    cleaned = _DISALLOWED.sub(" ", text)
    return _WHITESPACE_RUN.sub(" ", cleaned).strip()
