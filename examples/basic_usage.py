"""
Basic usage example for logship.

Ships the records of one application logger to CloudWatch Logs. Requires AWS
credentials in the environment (or an instance role).
"""

import logging

import boto3

from logship import CloudWatchLogsHandler


def main() -> None:
    handler = CloudWatchLogsHandler(
        boto3.client("logs", region_name="us-east-1"),
        group="/logship/examples",
        stream="basic-usage",
        retention=7,
        tags={"environment": "development"},
        level="INFO",
        bubble=False,
    )
    logger = handler.attach(logging.getLogger("example"))
    logger.setLevel(logging.DEBUG)

    logger.debug("Debug message")  # below the handler level, not shipped
    logger.info("Application started")
    logger.warning("Disk usage high", extra={"disk": "/var", "used_pct": 91})
    try:
        1 / 0
    except ZeroDivisionError:
        logger.exception("Calculation failed")

    # Drain anything still buffered
    handler.close()


if __name__ == "__main__":
    main()
