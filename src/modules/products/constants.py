"""Product catalog constants.

Field limits mirror the database schema; paging defaults apply whenever
the caller sends zero (or a negative value) for page number or size.
"""

from decimal import Decimal

NAME_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000
CATEGORY_MAX_LENGTH = 100

PRICE_MAX_DIGITS = 18
PRICE_DECIMAL_PLACES = 2
PRICE_QUANTUM = Decimal("0.01")
PRICE_UPPER_BOUND = Decimal(10) ** (PRICE_MAX_DIGITS - PRICE_DECIMAL_PLACES)

INT32_MAX = 2_147_483_647
STOCK_UPPER_BOUND = INT32_MAX

DEFAULT_PAGE_NUMBER = 1
DEFAULT_PAGE_SIZE = 10

RPC_SERVICE_NAME = "products.Products"

RPC_OPERATIONS: dict[str, str] = {
    "GetProduct": "Get a product by ID",
    "GetProducts": "List products with pagination (streaming)",
    "SearchProducts": "Search active products by term (streaming)",
    "CreateProduct": "Create a new product",
    "UpdateProduct": "Update an existing product",
    "DeleteProduct": "Delete a product (logical)",
}

INTERNAL_ERROR_MESSAGE = "Internal error while processing the request"
