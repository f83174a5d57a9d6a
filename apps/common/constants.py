"""
Storefront constants

Centralized business rules that span multiple apps: the service fee schedule,
checkout field limits and order identifier format.
This file is the single source of truth for anything that changes money.
"""

from typing import Final

# ===============================================================================
# SERVICE FEE SCHEDULE 💰
# ===============================================================================

# Flat handling fee for any non-empty order
SERVICE_FEE_BASE: Final[int] = 2500
# Added for every additional bracket of merchandise value
SERVICE_FEE_STEP: Final[int] = 1000
# Width of one bracket; the first bracket covers 1..50000 inclusive
SERVICE_FEE_BRACKET_SIZE: Final[int] = 50000

# ===============================================================================
# CHECKOUT VALIDATION LIMITS ✅
# ===============================================================================

CUSTOMER_NAME_MIN_LENGTH: Final[int] = 2
CUSTOMER_PHONE_MIN_LENGTH: Final[int] = 10
CUSTOMER_ADDRESS_MIN_LENGTH: Final[int] = 5

MAX_NAME_LENGTH: Final[int] = 200
MAX_PHONE_LENGTH: Final[int] = 30
MAX_ADDRESS_LENGTH: Final[int] = 500
MAX_MESSAGE_LENGTH: Final[int] = 2000
MAX_REFERENCE_LENGTH: Final[int] = 200

# ===============================================================================
# ORDER IDENTIFIERS 🔖
# ===============================================================================

ORDER_ID_PREFIX_DEFAULT: Final[str] = 'VAL'
ORDER_ID_SUFFIX_LENGTH: Final[int] = 8
ORDER_ID_ALPHABET: Final[str] = 'ABCDEFGHJKLMNPQRSTUVWXYZ23456789'  # No 0/O/1/I confusion
ORDER_ID_MAX_ATTEMPTS: Final[int] = 5

SERVICE_TICKET_PREFIX: Final[str] = 'TICKET'
SERVICE_TICKET_LENGTH: Final[int] = 9

# ===============================================================================
# API LIMITS ⚡
# ===============================================================================

ADMIN_ORDER_PAGE_SIZE_DEFAULT: Final[int] = 20
ADMIN_ORDER_PAGE_SIZE_MAX: Final[int] = 100
