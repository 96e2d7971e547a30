import argparse
from dataclasses import dataclass
from typing import Tuple

from common.errors import ConfigError
from common.spark_session import SparkConfig
from pipelines.monthly_revenue.schemas import REVENUE_STATUSES

DEFAULT_ORDERS_PATH = "/public/retail_db/orders"
DEFAULT_ORDER_ITEMS_PATH = "/public/retail_db/order_items"
DEFAULT_OUTPUT_PATH = "/user/retail_db/revenue_per_month"
APP_NAME = "Monthly_Revenue_ETL"


@dataclass(frozen=True)
class MonthlyRevenueConfig:
    orders_path: str = DEFAULT_ORDERS_PATH
    order_items_path: str = DEFAULT_ORDER_ITEMS_PATH
    output_path: str = DEFAULT_OUTPUT_PATH
    statuses: Tuple[str, ...] = REVENUE_STATUSES

    def __post_init__(self):
        if not self.statuses:
            raise ConfigError("At least one order status is required")
        for name in ("orders_path", "order_items_path", "output_path"):
            if not getattr(self, name):
                raise ConfigError(f"{name} must not be empty")


def _statuses(value):
    return tuple(s.strip() for s in value.split(",") if s.strip())


def build_parser():
    parser = argparse.ArgumentParser(
        prog="monthly_revenue",
        description="Monthly revenue from COMPLETE/CLOSED orders",
    )
    parser.add_argument("--orders", default=DEFAULT_ORDERS_PATH, help="Orders CSV path (no header)")
    parser.add_argument("--order-items", default=DEFAULT_ORDER_ITEMS_PATH, help="Order items CSV path (no header)")
    parser.add_argument("--output", default=DEFAULT_OUTPUT_PATH, help="Output folder, replaced on each run")
    parser.add_argument("--statuses", type=_statuses, default=REVENUE_STATUSES,
                        help="Comma-separated order statuses that count as revenue")
    parser.add_argument("--app-name", default=APP_NAME)
    parser.add_argument("--master", default=None, help="e.g. local[*]; leave unset under spark-submit")
    parser.add_argument("--shuffle-partitions", type=int, default=None)
    parser.add_argument("--log-level", default="INFO", help="Job log level")
    parser.add_argument("--spark-log-level", default="WARN")
    return parser


def parse_args(argv=None):
    """Return (SparkConfig, MonthlyRevenueConfig, job log level) for argv."""
    args = build_parser().parse_args(argv)

    if args.shuffle_partitions is not None and args.shuffle_partitions < 1:
        raise ConfigError("--shuffle-partitions must be a positive integer")

    spark_config = SparkConfig(
        app_name=args.app_name,
        master=args.master,
        shuffle_partitions=args.shuffle_partitions,
        log_level=args.spark_log_level,
    )
    job_config = MonthlyRevenueConfig(
        orders_path=args.orders,
        order_items_path=args.order_items,
        output_path=args.output,
        statuses=tuple(args.statuses),
    )
    return spark_config, job_config, args.log_level
