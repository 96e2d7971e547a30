"""
Pure DataFrame stages of the monthly revenue job.

Each function takes DataFrames and returns a new one; none of them trigger
an action.
"""
from pyspark.sql import DataFrame
from pyspark.sql import functions as F

from pipelines.monthly_revenue.schemas import REVENUE, REVENUE_STATUSES


def filter_orders(orders: DataFrame, statuses=REVENUE_STATUSES) -> DataFrame:
    # isin is an exact, case-sensitive match
    return orders.filter(F.col("order_status").isin(list(statuses)))


def add_order_month(orders: DataFrame) -> DataFrame:
    return orders.select(
        "order_id",
        F.date_format(F.to_date(F.col("order_date")), "yyyyMM").alias("order_month"),
    )


def join_order_items(orders: DataFrame, order_items: DataFrame) -> DataFrame:
    return (
        orders
        .join(order_items, orders["order_id"] == order_items["order_item_order_id"], "inner")
        .select("order_month", "order_item_subtotal")
    )


def aggregate_revenue(joined: DataFrame) -> DataFrame:
    """
    Sum subtotals per order_month.

    The sum is exact decimal arithmetic and `round` on decimals is HALF_UP,
    so 2.345 becomes 2.35.
    """
    return (
        joined.groupBy("order_month")
        .agg(F.round(F.sum("order_item_subtotal"), 2).cast(REVENUE).alias("revenue"))
    )


def sort_by_month(revenue: DataFrame) -> DataFrame:
    return revenue.orderBy(F.col("order_month").asc())
