"""
Async sink example.

Feeds structured entries from an async pipeline into CloudWatch Logs. The
boto3 client is created on ``start()`` from ``AWS_REGION``.
"""

import asyncio
import os
import time

from logship import CloudWatchSink, CloudWatchSinkConfig


async def main() -> None:
    sink = CloudWatchSink(
        CloudWatchSinkConfig(
            log_group_name=os.getenv("LOGSHIP_EXAMPLE_GROUP", "/logship/examples"),
            log_stream_name="async-sink",
            region=os.getenv("AWS_REGION", "us-east-1"),
            batch_size=100,
        )
    )
    await sink.start()
    for i in range(250):
        await sink.write(
            {"timestamp": time.time(), "level": "INFO", "message": f"tick {i}"}
        )
    await sink.stop()
    print("healthy:", await sink.health_check())


if __name__ == "__main__":
    asyncio.run(main())
