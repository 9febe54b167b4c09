"""
Command sequences embedded in move comments.

Borrowed from enhanced PGN: a comment "{[%clk 0:09:56.7] Sacrifice!}" carries the time left on the
clock of the player who just moved, next to the human-readable comment.
Only the 'clk' command is supported.
"""

import re
from dataclasses import dataclass
from typing import Optional

from src.core.exceptions import InvalidCommentCommand

VALID_COMMANDS: tuple[str, ...] = ("clk",)

_COMMAND_PATTERN = re.compile(r"\[%(\w+) ([^\]]+)\]")
_CLOCK_PATTERN = re.compile(r"(\d+):(\d{2}):(\d{2})\.(\d)")


@dataclass
class MoveComment:
    text: str = ""
    clock_stamp: Optional[int] = None  # milliseconds


def format_clock(millis: int) -> str:
    """Milliseconds -> H:MM:SS.D (rounded up to the next tenth of a second)"""
    if millis <= 0:
        return "0:00:00.0"
    tenths_total = -(-millis // 100)
    seconds_total, tenths = divmod(tenths_total, 10)
    minutes_total, seconds = divmod(seconds_total, 60)
    hours, minutes = divmod(minutes_total, 60)
    return f"{hours}:{minutes:02d}:{seconds:02d}.{tenths}"


def parse_clock(value: str) -> int:
    """H:MM:SS.D -> milliseconds"""
    match = _CLOCK_PATTERN.fullmatch(value)
    if match is None:
        raise InvalidCommentCommand(
            f"Clock value must be formatted as H:MM:SS.D, got {value!r}"
        )
    hours, minutes, seconds, tenths = (int(part) for part in match.groups())
    return ((hours * 60 + minutes) * 60 + seconds) * 1000 + tenths * 100


def combine_comment(comment: MoveComment) -> str:
    """Content of the comment, without the outer braces. Commands go first."""
    parts = []
    if comment.clock_stamp is not None:
        parts.append(f"[%clk {format_clock(comment.clock_stamp)}]")
    if comment.text.strip():
        parts.append(comment.text.strip())
    return " ".join(parts)


def extract_comment(content: str) -> MoveComment:
    """Split the content of a comment (without braces) into its commands and the remaining text."""
    clock_stamp = None
    for command, value in _COMMAND_PATTERN.findall(content):
        if command not in VALID_COMMANDS:
            raise InvalidCommentCommand(f"Unknown command in comment: [%{command} ...]")
        clock_stamp = parse_clock(value)

    text = _COMMAND_PATTERN.sub("", content)
    text = re.sub(r"\s{2,}", " ", text.strip())
    return MoveComment(text, clock_stamp)
