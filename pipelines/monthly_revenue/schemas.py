from pyspark.sql.types import DecimalType, IntegerType, StringType

from common.schema import TableSchema

# Source amounts may carry at most 4 decimal places; more is a load error.
MONEY = DecimalType(18, 4)
REVENUE = DecimalType(20, 2)

_ORDER_COLUMNS = (
    ("order_id", IntegerType()),
    ("order_date", StringType()),
    ("order_customer_id", IntegerType()),
    ("order_status", StringType()),
)

_ORDER_ITEM_COLUMNS = (
    ("order_item_id", IntegerType()),
    ("order_item_order_id", IntegerType()),
    ("order_item_product_id", IntegerType()),
    ("order_item_quantity", IntegerType()),
    ("order_item_subtotal", MONEY),
    ("order_item_product_price", MONEY),
)

ORDERS = TableSchema(
    name="orders",
    columns=_ORDER_COLUMNS,
    required=tuple(name for name, _ in _ORDER_COLUMNS),
    date_columns=("order_date",),
    unique=("order_id",),
)

ORDER_ITEMS = TableSchema(
    name="order_items",
    columns=_ORDER_ITEM_COLUMNS,
    required=tuple(name for name, _ in _ORDER_ITEM_COLUMNS),
)

MONTHLY_REVENUE = TableSchema(
    name="monthly_revenue",
    columns=(
        ("order_month", StringType()),
        ("revenue", REVENUE),
    ),
    required=("order_month", "revenue"),
)

REVENUE_STATUSES = ("COMPLETE", "CLOSED")
