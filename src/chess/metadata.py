"""
Metadata header of an ICN string.

Same idea as the tag pairs in PGN: one [Key "Value"] per line, followed by a blank line.
Older games use the legacy form [Key: Value], which can still be read.
"""

import re

from src.core.exceptions import UnclosedMetadataBracket

# Order in which known keys are written. Unknown keys follow in their original order.
METADATA_KEY_ORDER: tuple[str, ...] = (
    "Event",
    "Site",
    "Variant",
    "Round",
    "UTCDate",
    "UTCTime",
    "TimeControl",
    "White",
    "Black",
    "WhiteID",
    "BlackID",
    "Result",
    "Termination",
)

_NEW_FORMAT = re.compile(r'(\S+)\s+"(.*)"', re.DOTALL)
_LEGACY_SEPARATOR = ": "


def metadata_to_icn(metadata: dict[str, str], newlines: bool = True) -> str:
    """Header block, including the separator (blank line) towards the rest of the ICN. Empty if there is no metadata."""
    keys = [key for key in METADATA_KEY_ORDER if metadata.get(key)]
    keys += [key for key in metadata if key not in METADATA_KEY_ORDER]
    if not keys:
        return ""

    separator = "\n" if newlines else " "
    header = separator.join(f'[{key} "{metadata[key]}"]' for key in keys)
    return header + separator * 2


def metadata_from_icn(icn: str) -> tuple[dict[str, str], str]:
    """
    Read the [...] entries at the start of the string.
    ----

    Returns the metadata (in the order it was written) and the remainder of the string.
    """
    metadata: dict[str, str] = {}
    cursor = 0
    while True:
        start = _skip_whitespace(icn, cursor)
        if start == len(icn) or icn[start] != "[":
            break

        end = icn.find("]", start)
        if end == -1:
            raise UnclosedMetadataBracket(
                f"Metadata entry starting at index {start} is never closed with ']'"
            )
        key, value = parse_metadata_entry(icn[start + 1 : end])
        metadata[key] = value
        cursor = end + 1

    return metadata, icn[cursor:]


def parse_metadata_entry(entry: str) -> tuple[str, str]:
    """'Key "Value"' (or legacy 'Key: Value') -> (key, value)"""
    entry = entry.strip()
    match = _NEW_FORMAT.fullmatch(entry)
    if match:
        return match.group(1), match.group(2)

    if _LEGACY_SEPARATOR in entry:
        key, value = entry.split(_LEGACY_SEPARATOR, 1)
        return key.strip(), value.strip()

    # No value given
    return entry, ""


def _skip_whitespace(text: str, cursor: int) -> int:
    while cursor < len(text) and text[cursor].isspace():
        cursor += 1
    return cursor
