"""Domain models and types for purse.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Ledger rules separated from persistence and presentation
"""

from purse.domain.models import CategoryName, Description, Money, Month

__all__ = ["Money", "Month", "CategoryName", "Description"]
