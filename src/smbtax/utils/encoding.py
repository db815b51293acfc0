"""Statement text decoding."""

import codecs
from typing import Optional

# 1C exchange files declare "Кодировка=Windows" and are written in cp1251
FALLBACK_ENCODING = "cp1251"


def decode_statement(raw: bytes, encoding: Optional[str] = None) -> str:
    """Decode raw statement bytes to text.

    Args:
        raw: File contents
        encoding: Explicit encoding; when None, UTF-8 is tried first and
            cp1251 is used if the bytes are not valid UTF-8

    Returns:
        Decoded text

    Raises:
        ValueError: If an explicit encoding is unknown or cannot decode the bytes
    """
    if encoding is not None:
        # Empty input decodes without a codec lookup, so look it up first
        try:
            codec = codecs.lookup(encoding)
        except LookupError:
            raise ValueError(f"Unknown encoding '{encoding}'")
        try:
            return codec.decode(raw)[0]
        except UnicodeDecodeError as e:
            raise ValueError(f"Statement is not valid {encoding}: {e}")

    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        return raw.decode(FALLBACK_ENCODING, errors="replace")
