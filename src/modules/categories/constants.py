"""Category domain constants."""

CATEGORY_NAME_MAX_LENGTH = 100
