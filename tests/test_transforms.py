from decimal import Decimal

import pytest

from pipelines.monthly_revenue.job import monthly_revenue
from pipelines.monthly_revenue.schemas import ORDER_ITEMS, ORDERS, REVENUE_STATUSES
from pipelines.monthly_revenue.transforms import (
    add_order_month,
    aggregate_revenue,
    filter_orders,
    join_order_items,
    sort_by_month,
)


@pytest.fixture
def orders(spark):
    return spark.createDataFrame([
        (1, "2013-07-25 00:00:00.0", 11599, "CLOSED"),
        (2, "2013-07-26 00:00:00.0", 256, "PENDING"),
        (3, "2013-08-01 00:00:00.0", 12111, "COMPLETE"),
        (4, "2014-01-31 00:00:00.0", 8827, "closed"),
        (5, "2013-08-15 00:00:00.0", 11318, "COMPLETE"),
    ], ORDERS.struct())


def items(spark, rows):
    """rows: (order_item_id, order_item_order_id, subtotal)"""
    return spark.createDataFrame(
        [(item_id, order_id, 1, 1, Decimal(subtotal), Decimal(subtotal)) for item_id, order_id, subtotal in rows],
        ORDER_ITEMS.struct(),
    )


def test_filter_orders_exact_status(orders):
    ids = sorted(r["order_id"] for r in filter_orders(orders).collect())
    assert ids == [1, 3, 5]


def test_filter_orders_custom_statuses(orders):
    ids = [r["order_id"] for r in filter_orders(orders, ("PENDING",)).collect()]
    assert ids == [2]


def test_filter_leaves_columns_alone(orders):
    assert filter_orders(orders).columns == orders.columns


def test_add_order_month(spark):
    df = spark.createDataFrame([
        (1, "2013-07-25 00:00:00.0", 1, "CLOSED"),
        (2, "2014-01-02", 1, "CLOSED"),
    ], ORDERS.struct())

    rows = {r["order_id"]: r["order_month"] for r in add_order_month(df).collect()}

    assert rows == {1: "201307", 2: "201401"}
    assert add_order_month(df).columns == ["order_id", "order_month"]


def test_join_drops_orphans_on_both_sides(spark, orders):
    projected = add_order_month(filter_orders(orders))
    order_items = items(spark, [(1, 1, "10.00"), (2, 1, "5.00"), (3, 99, "1000.00")])

    rows = join_order_items(projected, order_items).collect()

    assert sorted(r["order_item_subtotal"] for r in rows) == [Decimal("5.00"), Decimal("10.00")]
    assert {r["order_month"] for r in rows} == {"201307"}


def test_aggregate_rounds_half_up(spark):
    joined = spark.createDataFrame(
        [("201307", Decimal("1.1725")), ("201307", Decimal("1.1725")), ("201308", Decimal("333465.4550"))],
        "order_month string, order_item_subtotal decimal(18,4)",
    )

    rows = {r["order_month"]: r["revenue"] for r in aggregate_revenue(joined).collect()}

    assert rows["201307"] == Decimal("2.35")
    assert rows["201308"] == Decimal("333465.46")


def test_sort_by_month(spark):
    df = spark.createDataFrame(
        [("201402", Decimal("1")), ("201307", Decimal("2")), ("201312", Decimal("3"))],
        "order_month string, revenue decimal(20,2)",
    )
    assert [r["order_month"] for r in sort_by_month(df).collect()] == ["201307", "201312", "201402"]


def test_monthly_revenue_pipeline(spark, orders):
    order_items = items(spark, [
        (1, 1, "100.00"),
        (2, 2, "50.00"),      # PENDING
        (3, 3, "20.10"),
        (4, 5, "0.90"),
        (5, 4, "70.00"),      # lower-case status
        (6, 42, "999.99"),    # no such order
    ])

    rows = monthly_revenue(orders, order_items, REVENUE_STATUSES).collect()

    assert [(r["order_month"], r["revenue"]) for r in rows] == [
        ("201307", Decimal("100.00")),
        ("201308", Decimal("21.00")),
    ]


def test_pending_order_contributes_nothing(spark, orders):
    order_items = items(spark, [(1, 2, "50.00")])
    assert monthly_revenue(orders, order_items, REVENUE_STATUSES).count() == 0
