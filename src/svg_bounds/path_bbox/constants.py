"""Constants for the SVG path utilities."""

from __future__ import annotations

import re
from typing import Literal, TypeAlias

COMMANDS = r"MLQCZVHTSAmlqczvhtsa"
"""A string containing all the valid SVG path commands."""

VALID_COMMANDS = set("MLQCZVHTSA")
"""A set containing all the valid upper case SVG path commands."""

ValidCommand: TypeAlias = Literal["M", "L", "Q", "C", "Z", "V", "H", "T", "S", "A"]
"""A type alias for the valid SVG path commands."""

SUBCOMMAND_PATTERN = re.compile(r"([A-DF-Za-df-z])([^A-DF-Za-df-z]+)?")
"""A regex pattern to match SVG path subcommands."""

NUMBER = r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?"
"""A regex matching a single number of the path grammar."""

NUMBER_PATTERN = re.compile(NUMBER)
"""A regex pattern to find the numbers in the data of a subcommand."""

ARG_COUNTS: dict[ValidCommand, int] = {
    "M": 2,
    "L": 2,
    "Q": 4,
    "C": 6,
    "Z": 0,
    "V": 1,
    "H": 1,
    "T": 2,
    "S": 4,
    "A": 7,
}
"""The number of values expected for each SVG path command."""

CUBIC_TEXT_PATTERN = re.compile(
    r"(?<![A-Za-z])([Cc])[\s,]*"
    + r"[\s,]+".join(f"({NUMBER})" for _ in range(6))
    + r"(?![\s,]*[-+.\deE])"
)
"""A regex matching a cubic command with exactly one coordinate set."""

DEFAULT_PRECISION = 5
"""Decimal places used when writing path data."""
