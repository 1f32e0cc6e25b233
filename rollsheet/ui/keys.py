from __future__ import annotations

import typer

# POSIX escape sequences and the Windows two-byte forms click returns
KEY_NAMES = {
    "\r": "enter",
    "\n": "enter",
    "\x1b": "esc",
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\xe0H": "up",
    "\xe0P": "down",
    "\xe0M": "right",
    "\xe0K": "left",
    "\x00H": "up",
    "\x00P": "down",
    "\x00M": "right",
    "\x00K": "left",
    "\x03": "ctrl+c",
    "\x04": "ctrl+d",
    " ": "space",
}


def normalize_key(raw: str) -> str:
    return KEY_NAMES.get(raw, raw)


def read_key() -> str:
    return normalize_key(typer.getchar())
