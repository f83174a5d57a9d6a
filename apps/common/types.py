"""
Shared types for the gifting storefront.
Ok/Err results for service calls, money and identifier aliases, and the base
exception every domain error derives from.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar('T')
E = TypeVar('E')

# ===============================================================================
# SERVICE RESULTS
# ===============================================================================

@dataclass(frozen=True)
class Ok(Generic[T]):
    """A service call that succeeded"""
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def map(self, func: Callable[[T], Any]) -> Result[Any, Any]:
        """Apply func to the value; an exception turns into Err"""
        try:
            return Ok(func(self.value))
        except Exception as e:
            return Err(str(e))


@dataclass(frozen=True)
class Err(Generic[E]):
    """A service call that failed with a domain error"""
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> Any:
        # Callers check is_err() first; reaching here is a programming error
        raise ValueError(f"Called unwrap on Err: {self.error}")

    def unwrap_or(self, default: T) -> T:
        return default

    def map(self, func: Callable[[Any], Any]) -> Result[Any, E]:
        return self


Result = Ok[T] | Err[E]

# ===============================================================================
# DOMAIN ALIASES
# ===============================================================================

Naira = int  # Whole naira; the storefront never prices in kobo
OrderNumber = str  # "VAL-7K2M9QXA"
ReferenceId = str  # Catalog UUID, or a slug for add-ons and bundles
PhoneNumber = str  # Free-form, at least 10 characters
EmailAddress = str  # May be empty

ValidationErrors = dict[str, list[str]]
NotificationPayload = dict[str, Any]

# ===============================================================================
# BASE EXCEPTION
# ===============================================================================

class BusinessError(Exception):
    """Root of every storefront domain error"""
