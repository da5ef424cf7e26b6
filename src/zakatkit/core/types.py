"""Shared type aliases used across zakatkit."""

from decimal import Decimal
from pathlib import Path
from typing import Any

# Nested mapping as loaded from a config file
ConfigDict = dict[str, Any]

# Anything Money accepts as an amount
Numeric = Decimal | int | float | str

PathLike = str | Path
