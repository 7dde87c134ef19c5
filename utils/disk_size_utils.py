"""
Disk size parsing for machine pool root volumes.

Sizes are free-form strings such as "300GiB", "1 TB" or "128g". AWS expects
the root volume size in gibibytes.
"""

import re
from dataclasses import dataclass
from decimal import Decimal, ROUND_CEILING
from typing import Dict

from models.errors import (
    DiskSizeUnitTooSmallError,
    InvalidDiskSizeFormatError,
    MissingUnitSuffixError,
)


MAX_INT64 = 2 ** 63 - 1
GIBIBYTE = 2 ** 30

SUFFIX_ERROR = "accepted units are Giga or Tera in the form of g, G, GB, GiB, Gi, t, T, TB, TiB, Ti"

# Units on the left are rewritten to the unit on the right. The alias sets are
# disjoint, so the order of substitution does not matter.
UNIT_ALIASES: Dict[str, str] = {
    "GB|gb|Gb|g": "G",
    "gib|GIB|GiB|Gib": "Gi",
    "TB|tb|Tb|t": "T",
    "tib|TIB|TiB|Tib": "Ti",
}

BINARY_SUFFIXES: Dict[str, int] = {
    "Ki": 2 ** 10,
    "Mi": 2 ** 20,
    "Gi": 2 ** 30,
    "Ti": 2 ** 40,
    "Pi": 2 ** 50,
    "Ei": 2 ** 60,
}

DECIMAL_SUFFIXES: Dict[str, int] = {
    "k": 10 ** 3,
    "K": 10 ** 3,
    "M": 10 ** 6,
    "G": 10 ** 9,
    "T": 10 ** 12,
    "P": 10 ** 15,
    "E": 10 ** 18,
}

TOO_SMALL_SUFFIXES = ("K", "k", "Ki", "M", "Mi")

QUANTITY_PATTERN = re.compile(
    r"^(?P<sign>[+-]?)(?P<number>\d+(?:\.\d*)?|\.\d+)"
    r"(?P<suffix>Ki|Mi|Gi|Ti|Pi|Ei|[kKMGTPE]|[eE][+-]?\d+)?$"
)


@dataclass
class DiskQuantity:
    """A parsed quantity: number, unit suffix and its value in bytes."""
    number: Decimal
    suffix: str
    value: int

    @property
    def has_suffix(self) -> bool:
        return bool(self.suffix)

    @property
    def is_zero(self) -> bool:
        return self.number == 0

    @property
    def gibibytes(self) -> int:
        return self.value // GIBIBYTE


def normalize_units(size: str) -> str:
    """Remove spaces and rewrite unit aliases to their canonical suffix."""
    size = size.replace(" ", "")
    for bad_unit, right_unit in UNIT_ALIASES.items():
        size = re.sub(bad_unit, right_unit, size)
    return size


def parse_quantity(size: str) -> DiskQuantity:
    """
    Parse a normalized size string into a quantity.

    Fractional byte values round up; values beyond the signed 64-bit range
    saturate at the maximum.

    Raises:
        InvalidDiskSizeFormatError: If the string is not a quantity
    """
    match = QUANTITY_PATTERN.match(size)
    if not match:
        raise InvalidDiskSizeFormatError(f"invalid disk size format: {size}. {SUFFIX_ERROR}", size)

    if match.group('sign') == "-":
        raise InvalidDiskSizeFormatError(f"invalid disk size: {size}. Disk size cannot be negative", size)

    number = Decimal(match.group('number'))
    suffix = match.group('suffix') or ""

    if suffix in BINARY_SUFFIXES:
        multiplier = Decimal(BINARY_SUFFIXES[suffix])
    elif suffix in DECIMAL_SUFFIXES:
        multiplier = Decimal(DECIMAL_SUFFIXES[suffix])
    elif suffix:
        multiplier = Decimal(10) ** int(suffix[1:])
    else:
        multiplier = Decimal(1)

    value = (number * multiplier).to_integral_value(rounding=ROUND_CEILING)
    return DiskQuantity(number=number, suffix=suffix, value=min(int(value), MAX_INT64))


def parse_disk_size_to_gibibyte(size: str) -> int:
    """
    Parse a disk size string and return whole gibibytes.

    Args:
        size: Disk size such as "300GiB", "1 TB" or "" for unset

    Returns:
        Size in gibibytes (truncated), or 0 when unset or zero

    Raises:
        InvalidDiskSizeFormatError: If the format is wrong
        MissingUnitSuffixError: If a non-zero size has no unit
        DiskSizeUnitTooSmallError: If the unit is smaller than gibibytes
    """
    # Empty string is valid, a default will be set later
    if size == "":
        return 0

    normalized = normalize_units(size)
    quantity = parse_quantity(normalized)

    # Zero usually means the unit was forgotten; the default applies
    if quantity.is_zero:
        return 0

    if not quantity.has_suffix:
        # A huge value is passed through and rejected by the service
        if quantity.value != MAX_INT64:
            raise MissingUnitSuffixError(
                f"missing unit suffix: {normalized}. {SUFFIX_ERROR}", normalized
            )

    if quantity.suffix in TOO_SMALL_SUFFIXES:
        raise DiskSizeUnitTooSmallError(
            f"invalid disk size format: {normalized}. {SUFFIX_ERROR}", normalized
        )

    return quantity.gibibytes
