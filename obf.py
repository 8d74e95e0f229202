"""
Fixed-key XOR obfuscation for the combination lock secret.

The secret is kept in source only in its obfuscated form and restored at
render time. XOR with a constant is its own inverse, so both directions are
the same transform.
"""

KEY = 3

# Transform is defined over single-byte code points only
MAX_CODE_POINT = 0xFF


def _xor_text(text: str) -> str:
    chars = []
    for position, char in enumerate(text):
        code = ord(char)
        if code > MAX_CODE_POINT:
            raise ValueError(
                f"Cannot obfuscate {char!r} at position {position}: "
                f"code point {code} is outside the single-byte range"
            )
        chars.append(chr(code ^ KEY))
    return "".join(chars)


def obfuscate(text: str) -> str:
    """XOR every character of ``text`` with the key; output has the same length."""
    return _xor_text(text)


def deobfuscate(obfuscated: str) -> str:
    """Reverse :func:`obfuscate` (the same XOR, applied again)."""
    return _xor_text(obfuscated)
