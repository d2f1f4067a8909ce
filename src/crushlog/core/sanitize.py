"""Clean user-supplied text before it is stored or displayed."""

import re
import unicodedata

# C0 controls except tab and newline, C1 controls, zero-width space/non-joiner/joiner,
# bidi embeddings and overrides, and the BOM / zero-width no-break space.
_UNSAFE_CHARS = re.compile(
    "[\\x00-\\x08\\x0b-\\x1f\\x7f-\\x9f\\u200b-\\u200d\\u202a-\\u202e\\ufeff]"
)


def sanitize(value: object) -> str:
    """Return a safe, normalized version of ``value``.

    Unsafe code points are removed, surrounding whitespace is trimmed and the
    result is normalized to NFC. NFC rather than NFKC keeps symbols such as
    ``™``, ``©`` and ``®`` intact.

    Anything that is not a ``str`` yields ``""``. Never raises.
    """
    if not isinstance(value, str):
        return ""
    cleaned = _UNSAFE_CHARS.sub("", value).strip()
    return unicodedata.normalize("NFC", cleaned)
