"""Helpers for rendering raw stream text inside log lines."""

from __future__ import annotations

_NAMED = {
    "\x1b": "<ESC>",
    "\r": "<CR>",
    "\n": "<LF>",
    "\t": "<TAB>",
    "\x7f": "<DEL>",
}


def convert_non_printable(text: str) -> str:
    """Replace control characters with readable tags, e.g. ``\\x1b`` -> ``<ESC>``."""

    out = []
    for character in text:
        named = _NAMED.get(character)
        if named is not None:
            out.append(named)
        elif ord(character) < 0x20:
            out.append(f"<0x{ord(character):02X}>")
        else:
            out.append(character)
    return "".join(out)


__all__ = ["convert_non_printable"]
