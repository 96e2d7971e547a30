import uuid
from dataclasses import dataclass

from common.csv_io import load_table, write_single_csv
from common.log import configure_logging, get_logger
from common.spark_session import get_spark
from pipelines.monthly_revenue.config import parse_args
from pipelines.monthly_revenue.schemas import ORDER_ITEMS, ORDERS
from pipelines.monthly_revenue.transforms import (
    add_order_month,
    aggregate_revenue,
    filter_orders,
    join_order_items,
    sort_by_month,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class RunSummary:
    run_id: str
    orders_read: int
    order_items_read: int
    orders_retained: int
    months_written: int
    output_path: str


def monthly_revenue(orders, order_items, statuses):
    """Filter -> project -> join -> aggregate -> sort, without any I/O."""
    retained = filter_orders(orders, statuses)
    projected = add_order_month(retained)
    joined = join_order_items(projected, order_items)
    return sort_by_month(aggregate_revenue(joined))


def run(spark, config, run_id=None):
    run_id = run_id or str(uuid.uuid4())
    logger.info("monthly_revenue run %s started: orders=%s order_items=%s",
                run_id, config.orders_path, config.order_items_path)

    orders = load_table(spark, config.orders_path, ORDERS).cache()
    order_items = load_table(spark, config.order_items_path, ORDER_ITEMS).cache()
    revenue = monthly_revenue(orders, order_items, config.statuses).cache()
    try:
        orders_read = orders.count()
        order_items_read = order_items.count()
        logger.info("Loaded %d orders and %d order items", orders_read, order_items_read)

        orders_retained = filter_orders(orders, config.statuses).count()
        logger.info("%d orders with status in %s", orders_retained, list(config.statuses))

        months_written = revenue.count()
        write_single_csv(revenue, config.output_path, order_by=("order_month",))
    finally:
        for df in (revenue, order_items, orders):
            df.unpersist()

    summary = RunSummary(
        run_id=run_id,
        orders_read=orders_read,
        order_items_read=order_items_read,
        orders_retained=orders_retained,
        months_written=months_written,
        output_path=config.output_path,
    )
    logger.info("monthly_revenue run %s wrote %d month(s) to %s",
                run_id, months_written, config.output_path)
    return summary


def main(argv=None):
    spark_config, job_config, log_level = parse_args(argv)
    configure_logging(log_level)
    run_id = str(uuid.uuid4())

    spark = get_spark(spark_config)
    try:
        return run(spark, job_config, run_id=run_id)
    except Exception:
        logger.exception("monthly_revenue run %s failed", run_id)
        raise
    finally:
        spark.stop()


if __name__ == "__main__":
    main()
