from __future__ import annotations

import time
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from .logger import get_logger

logger = get_logger(__name__)


@dataclass
class TraceStep:
    """解析流水线中的单个步骤"""

    step: int
    name: str
    started_at: str
    ended_at: str | None = None
    duration_ms: int | None = None
    status: str = "pending"  # pending / success / failed
    output: dict[str, Any] | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "step": self.step,
            "name": self.name,
            "started_at": self.started_at,
            "status": self.status,
        }
        if self.ended_at:
            result["ended_at"] = self.ended_at
        if self.duration_ms is not None:
            result["duration_ms"] = self.duration_ms
        if self.output:
            result["output"] = self.output
        if self.error:
            result["error"] = self.error
        return result


class Tracer:
    """单次 resolve 请求的步骤追踪器"""

    def __init__(self, raw_input: str, trace_id: str | None = None):
        self.trace_id = trace_id or self._generate_trace_id()
        self.raw_input = raw_input
        self.steps: list[TraceStep] = []
        self._started = time.perf_counter()

    @staticmethod
    def _generate_trace_id() -> str:
        date_str = datetime.now(timezone.utc).strftime("%Y%m%d")
        return f"rs-{date_str}-{uuid.uuid4().hex[:12]}"

    @staticmethod
    def _now_iso() -> str:
        return datetime.now(timezone.utc).isoformat()

    def step(self, name: str) -> _TracerStepContext:
        """上下文管理器方式记录一个步骤"""
        return _TracerStepContext(self, name)

    def _start(self, name: str) -> TraceStep:
        step = TraceStep(step=len(self.steps) + 1, name=name, started_at=self._now_iso())
        self.steps.append(step)
        logger.debug("trace_step_started", trace_id=self.trace_id, step=step.step, name=name)
        return step

    def _finish(
        self,
        step: TraceStep,
        started: float,
        status: str,
        output: dict[str, Any] | None,
        error: str | None,
    ) -> None:
        step.ended_at = self._now_iso()
        step.duration_ms = int((time.perf_counter() - started) * 1000)
        step.status = status
        step.output = output
        step.error = error
        logger.debug(
            "trace_step_ended",
            trace_id=self.trace_id,
            step=step.step,
            name=step.name,
            status=status,
            duration_ms=step.duration_ms,
            output=output,
            error=error,
        )

    def get_total_duration_ms(self) -> int:
        return int((time.perf_counter() - self._started) * 1000)

    def get_timings(self) -> dict[str, int]:
        """获取各步骤耗时汇总"""
        timings: dict[str, int] = {"total_ms": self.get_total_duration_ms()}
        for step in self.steps:
            if step.duration_ms is not None:
                timings[f"{step.name}_ms"] = step.duration_ms
        return timings

    def to_dict(self) -> dict[str, Any]:
        return {
            "trace_id": self.trace_id,
            "raw_input": self.raw_input,
            "total_duration_ms": self.get_total_duration_ms(),
            "steps": [step.to_dict() for step in self.steps],
        }


class _TracerStepContext:
    def __init__(self, tracer: Tracer, name: str):
        self.tracer = tracer
        self.name = name
        self.output_data: dict[str, Any] | None = None
        self._step: TraceStep | None = None
        self._started = 0.0

    def __enter__(self) -> _TracerStepContext:
        self._started = time.perf_counter()
        self._step = self.tracer._start(self.name)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if self._step is None:
            raise RuntimeError(f"trace step {self.name!r} exited without being entered")
        if exc_type is not None:
            self.tracer._finish(self._step, self._started, "failed", self.output_data, str(exc_val))
        else:
            self.tracer._finish(self._step, self._started, "success", self.output_data, None)
        return False

    def set_output(self, output_data: dict[str, Any]) -> None:
        self.output_data = output_data
