"""
Application constants for the Domain Registry API.

Roles, record statuses, validation limits and pagination bounds.
"""

import re

# =============================================================================
# Roles
# =============================================================================

ROLE_ADMIN = "admin"
ROLE_USER = "user"
ROLES = (ROLE_ADMIN, ROLE_USER)

# =============================================================================
# Record Statuses
# =============================================================================

STATUS_ACTIVE = "active"
STATUS_INACTIVE = "inactive"

# Users and domains share the same two-state lifecycle
USER_STATUSES = (STATUS_ACTIVE, STATUS_INACTIVE)
DOMAIN_STATUSES = (STATUS_ACTIVE, STATUS_INACTIVE)

# =============================================================================
# Validation
# =============================================================================

MIN_PASSWORD_LENGTH = 6
# bcrypt only looks at the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72

# Labels of 1-63 chars joined by dots, alphabetic TLD of 2-63 chars.
# \Z rather than $: $ also matches before a trailing newline.
DOMAIN_PATTERN = re.compile(r"^(?!-)([a-z0-9-]{1,63}\.)+[a-z]{2,63}\Z", re.IGNORECASE)
DOMAIN_SCHEME_PATTERN = re.compile(r"^https?://")
TRAILING_SLASHES_PATTERN = re.compile(r"/+\Z")

# Fields an administrator may change through the update endpoint
USER_UPDATABLE_FIELDS = ("name", "email", "role", "password", "status")
PASSWORD_HASH_FIELDS = ("passwordHash", "password_hash")

# =============================================================================
# Pagination
# =============================================================================

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
