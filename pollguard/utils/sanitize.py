import re

_ANGLE_BRACKETS = re.compile(r"[<>]")

# ECMAScript WhiteSpace + LineTerminator, i.e. what String.prototype.trim removes.
# str.strip() with no argument differs: it also drops \x1c-\x1f and keeps U+FEFF.
TRIM_CHARS = (
    "\t\n\x0b\x0c\r \xa0\u1680"
    + "".join(chr(c) for c in range(0x2000, 0x200B))
    + "\u2028\u2029\u202f\u205f\u3000\ufeff"
)


def sanitize(text: str) -> str:
    """
    Strip '<' and '>' then trim surrounding whitespace.

    This is a denylist: it stops literal tag injection only. Attribute or URL
    based payloads survive, so output must still be encoded at render time.
    """
    return _ANGLE_BRACKETS.sub("", text).strip(TRIM_CHARS)
