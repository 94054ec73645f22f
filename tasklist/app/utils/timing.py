from __future__ import annotations

import time
from typing import Any


def log_op_timing(
    logger,
    *,
    op: str,
    start_time: float,
    task_id: int | None = None,
    count: int | None = None,
) -> None:
    elapsed_ms = int((time.perf_counter() - start_time) * 1000)
    payload: dict[str, Any] = {"op": op, "elapsed_ms": elapsed_ms}
    if task_id is not None:
        payload["task_id"] = task_id
    if count is not None:
        payload["count"] = count
    logger.info(
        "op_timing %s",
        payload,
        extra={"op": op, "elapsed_ms": elapsed_ms, "task": task_id if task_id is not None else "-"},
    )
