"""
Coordinates on an infinite board.

(placed in its own module as multiple other modules need to import it)

The board has no edges, so x and y are unbounded integers. ICN allows writing them in scientific notation
("2.0e32"), hence every numeral gets normalized into a plain integer string before it is used.
No floats are involved at any point: Python integers are arbitrary precision.
"""

import re
from dataclasses import dataclass
from typing import Self

from src.core.exceptions import MalformedCoordinate

# Pattern of a single numeral, used as building block for the regexes of the other codecs.
SCIENTIFIC_NUMBER = r"[-+]?[0-9]*\.?[0-9]+(?:[eE][-+]?[0-9]+)?"

# sign, digits before the point, digits after the point, exponent
_NUMBER_PARTS = re.compile(r"([-+]?)([0-9]*)(?:\.([0-9]+))?(?:[eE]([-+]?[0-9]+))?")


def standardize_number_string(number: str) -> str:
    """
    Convert an integer-valued numeral, possibly in scientific notation, to its plain decimal form.
    ----

    examples:
    * "42" -> "42"
    * "-01.5e3" -> "-1500"
    * "2.0e32" -> "2" followed by 32 zeros

    Raises MalformedCoordinate if the string is not a numeral, or its value is not an integer.
    """
    match = _NUMBER_PARTS.fullmatch(number.strip())
    if match is None or not (match.group(2) or match.group(3)):
        raise MalformedCoordinate(f"Cannot interpret {number!r} as a number.")

    sign, whole, fraction, exponent = match.groups()
    fraction = fraction or ""

    # Remove the decimal point: the digits now represent the value times 10^len(fraction)
    digits = (whole + fraction).lstrip("0") or "0"
    shift = int(exponent or 0) - len(fraction)

    if shift >= 0:
        value = int(digits) * 10**shift
    else:
        kept, dropped = digits[:shift], digits[shift:]
        if dropped.strip("0"):
            raise MalformedCoordinate(
                f"Coordinates must be integers, got {number!r}."
            )
        value = int(kept or "0")

    if sign == "-":
        value = -value
    return str(value)


def standardize_coord_string(coords: str) -> str:
    """Normalize both halves of an 'x,y' pair."""
    if "," not in coords:
        raise MalformedCoordinate(f"Coordinate pair needs a comma: {coords!r}")
    x, y = coords.split(",", 1)
    return f"{standardize_number_string(x)},{standardize_number_string(y)}"


@dataclass(frozen=True)
class Coords:
    x: int
    y: int

    @classmethod
    def from_string(cls, coords: str) -> Self:
        """'x,y' (in any accepted numeral notation) -> Coords"""
        x, y = standardize_coord_string(coords).split(",")
        return cls(int(x), int(y))

    def to_string(self) -> str:
        """The canonical key of the square, e.g. '-3,1000'"""
        return f"{self.x},{self.y}"

    def __str__(self) -> str:
        return self.to_string()

    def offset(self, dx: int, dy: int) -> Self:
        return type(self)(self.x + dx, self.y + dy)
