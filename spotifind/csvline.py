"""Line-oriented CSV reading and small console helpers."""

from __future__ import annotations

import os
import subprocess
from typing import Iterator, List, TextIO

MAX_LINE_LENGTH = 1024
MAX_FIELDS = 300

CONTINUE_PROMPT = "Presione una tecla para continuar..."


def parse_csv_line(line: str, separator: str = ",") -> List[str]:
    """Split one CSV line into fields.

    Fields may be wrapped in double quotes, in which case they run until a
    quote directly followed by the separator. A separator directly after a
    field's terminator is skipped, so runs of separators collapse. At most
    ``MAX_FIELDS - 1`` fields are returned.
    """
    text = line.split("\n", 1)[0]
    length = len(text)
    fields: List[str] = []
    pos = 0

    while pos < length and len(fields) < MAX_FIELDS - 1:
        if text[pos] == '"':
            start = pos + 1
            end = text.find('"' + separator, start)
        else:
            start = pos
            end = text.find(separator, start)
        if end == -1:
            end = length

        if end < length:
            pos = end + 1
            if pos < length and text[pos] == separator:
                pos += 1
        else:
            pos = end

        field = text[start:end]
        cut = pos - 2
        if start <= cut < end and text[cut] == '"':
            field = text[start:cut]
        fields.append(field)

    return fields


def _physical_lines(stream: TextIO) -> Iterator[str]:
    """Yield the stream's lines in pieces no longer than a read buffer."""
    chunk = MAX_LINE_LENGTH - 1
    for line in stream:
        for offset in range(0, len(line), chunk):
            yield line[offset:offset + chunk]


def read_csv(stream: TextIO, separator: str = ",") -> Iterator[List[str]]:
    """Yield the parsed fields of every line read from ``stream``."""
    for piece in _physical_lines(stream):
        yield parse_csv_line(piece, separator)


def split_string(text: str, delim: str) -> List[str]:
    """Split ``text`` on any character of ``delim``, trimming spaces.

    Empty tokens between adjacent delimiters are dropped; a token made only of
    spaces becomes an empty string.
    """
    tokens: List[str] = []
    current: List[str] = []
    for char in text:
        if char in delim:
            if current:
                tokens.append("".join(current))
                current = []
        else:
            current.append(char)
    if current:
        tokens.append("".join(current))
    return [token.strip(" ") for token in tokens]


def clear_screen() -> None:
    """Clear the terminal window."""
    try:
        if os.name == "nt":
            subprocess.run("cls", shell=True, check=False)
        else:
            subprocess.run(["clear"], check=False)
    except OSError:
        pass


def wait_for_key(stream: TextIO) -> str:
    """Prompt, then consume two characters from ``stream`` and return them."""
    print(CONTINUE_PROMPT, flush=True)
    return stream.read(1) + stream.read(1)