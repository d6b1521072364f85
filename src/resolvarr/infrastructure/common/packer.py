"""Dean Edwards ``eval(function(p,a,c,k,e,d)...)`` unpacker.

Several embed hosts hide their player configuration inside packed
JavaScript.  Unpacking substitutes every base-N token in the payload
with the matching word from the dictionary.
"""

from __future__ import annotations

import re

_PACKED_RE = re.compile(
    r"eval\(function\(p,a,c,k,e,[dr]\).*?\}\('(.*?)',\s*(\d+),\s*(\d+),\s*'(.*?)'\.split\('\|'\)",
    re.DOTALL,
)

_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"


def _decode_token(token: str, radix: int) -> int | None:
    """Decode a base-*radix* token using the packer's 62-symbol alphabet."""
    value = 0
    for char in token:
        digit = _ALPHABET.find(char)
        if digit < 0 or digit >= radix:
            return None
        value = value * radix + digit
    return value


def has_packed_script(html: str) -> bool:
    return "eval(function(p,a,c,k,e," in html


def unpack_all(html: str) -> list[str]:
    """Return the unpacked source of every packed block in *html*."""
    sources: list[str] = []
    for match in _PACKED_RE.finditer(html):
        payload, radix, count, words = match.groups()
        keywords = words.split("|")
        if len(keywords) < int(count):
            keywords.extend([""] * (int(count) - len(keywords)))
        base = int(radix)

        def _substitute(m: re.Match[str]) -> str:
            word = m.group(0)
            index = _decode_token(word, base)
            if index is not None and index < len(keywords) and keywords[index]:
                return keywords[index]
            return word

        unpacked = re.sub(r"\b\w+\b", _substitute, payload)
        sources.append(unpacked.replace("\\'", "'").replace('\\"', '"'))
    return sources
