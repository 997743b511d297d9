"""Shared constants used across the package."""

# Column names of the persisted option layout
KEY_COLUMN = "opt_key"
VALUE_COLUMN = "opt_value"

# Maximum length of a persisted option key
KEY_MAX_LENGTH = 32

# Signed 32-bit and 64-bit integer ranges
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# Decimal integer syntax, matched against the whole string
INTEGER_PATTERN = r"[+-]?[0-9]+"
