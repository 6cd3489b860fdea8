"""Provider limits for CloudWatch Logs PutLogEvents.

https://docs.aws.amazon.com/AmazonCloudWatch/latest/logs/cloudwatch_limits_cwl.html
https://docs.aws.amazon.com/AmazonCloudWatchLogs/latest/APIReference/API_PutLogEvents.html
"""

from __future__ import annotations

from typing import Final

# Requests per second per log stream
RPS_LIMIT: Final[int] = 5

# Bytes counted per event on top of the raw message length
EVENT_OVERHEAD: Final[int] = 26

# 262144 minus the per-event overhead
EVENT_SIZE_LIMIT: Final[int] = 262_118

# Maximum batch size in bytes, events plus overhead
DATA_AMOUNT_LIMIT: Final[int] = 1_048_576

# Maximum events per batch
MAX_BATCH_SIZE: Final[int] = 10_000
