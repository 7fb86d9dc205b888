"""Domain type definitions for purse.

These NewTypes provide semantic clarity and help with type checking:
- Money: Decimal amount (never a binary float)
- Month: Month in YYYY-MM format
- CategoryName: Free-text category label
- Description: Transaction description text
"""

from decimal import Decimal
from typing import NewType

# Money amounts are Decimals so sums never drift the way floats do
Money = NewType("Money", Decimal)

# Month is always in YYYY-MM format (e.g., "2024-02")
Month = NewType("Month", str)

# Category label, not checked against any taxonomy
CategoryName = NewType("CategoryName", str)

# Transaction description text
Description = NewType("Description", str)
