"""Product domain constants."""

PRODUCT_NAME_MAX_LENGTH = 255

PRICE_MAX_DIGITS = 12
PRICE_DECIMAL_PLACES = 2

# Range of the signed 32-bit ``stock_quantity`` column.
STOCK_MIN = -(2**31)
STOCK_MAX = 2**31 - 1
