"""String processing utilities for JavaScript string and regex literals."""
from __future__ import annotations
import re
from typing import Tuple


_SIMPLE_ESCAPES = {
    'n': '\n',
    't': '\t',
    'r': '\r',
    'b': '\b',
    'f': '\f',
    'v': '\v',
    '0': '\0',
}


def process_string_escapes(raw_string: str) -> str:
    r"""Process escape sequences in the body of a JavaScript string literal.

    Handles:
    - \n \t \r \b \f \v and \0 (when not followed by a digit)
    - \xNN hexadecimal escapes
    - \uNNNN and \u{N...} unicode escapes
    - backslash-newline line continuations (dropped)
    - any other escaped character stands for itself (\' \" \\ \d ...)

    Args:
        raw_string: The literal text between the quotes

    Returns:
        The string value the literal denotes
    """
    result = []
    i = 0
    n = len(raw_string)
    while i < n:
        ch = raw_string[i]
        if ch != '\\' or i + 1 >= n:
            result.append(ch)
            i += 1
            continue

        nxt = raw_string[i + 1]
        if nxt == '0' and i + 2 < n and raw_string[i + 2].isdigit():
            # legacy octal escapes are not supported; keep the digit
            result.append(nxt)
            i += 2
        elif nxt in _SIMPLE_ESCAPES:
            result.append(_SIMPLE_ESCAPES[nxt])
            i += 2
        elif nxt == 'x' and i + 3 < n and _is_hex(raw_string[i + 2:i + 4]):
            result.append(chr(int(raw_string[i + 2:i + 4], 16)))
            i += 4
        elif nxt == 'u' and raw_string[i + 2:i + 3] == '{':
            close = raw_string.find('}', i + 3)
            digits = raw_string[i + 3:close] if close != -1 else ""
            if digits and _is_hex(digits):
                result.append(chr(int(digits, 16)))
                i = close + 1
            else:
                result.append(nxt)
                i += 2
        elif nxt == 'u' and len(raw_string[i + 2:i + 6]) == 4 and _is_hex(raw_string[i + 2:i + 6]):
            result.append(chr(int(raw_string[i + 2:i + 6], 16)))
            i += 6
        elif nxt == '\n':
            i += 2
        else:
            result.append(nxt)
            i += 2

    return join_surrogates(''.join(result))


_SURROGATE_PAIR = re.compile("[\ud800-\udbff][\udc00-\udfff]")


def join_surrogates(text: str) -> str:
    """Combine UTF-16 surrogate pairs (`\\uD83D\\uDE00`) into single code points.

    Unpaired surrogates are left as they are.
    """
    return _SURROGATE_PAIR.sub(
        lambda m: chr(0x10000 + ((ord(m.group()[0]) - 0xD800) << 10) + (ord(m.group()[1]) - 0xDC00)),
        text,
    )


def _is_hex(text: str) -> bool:
    return bool(text) and all(c in "0123456789abcdefABCDEF" for c in text)


def parse_string_token(raw: str) -> str:
    """Value of a quoted STRING token ('...' or "...")."""
    return process_string_escapes(raw[1:-1])


def split_regex_token(raw: str) -> Tuple[str, str]:
    """Split a REGEX token `/body/flags` into (body, flags)."""
    end = raw.rindex('/')
    return raw[1:end], raw[end + 1:]
