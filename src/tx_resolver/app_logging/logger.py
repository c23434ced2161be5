from __future__ import annotations

import logging
import sys
from typing import Any
from urllib.parse import urlsplit

import structlog
from structlog.types import Processor


SERVICE_NAME = "tx-resolver"

# 敏感字段列表
SENSITIVE_KEYS = {"api_key", "private_key", "password", "secret", "token", "authorization"}

# RPC 地址的路径和查询串里经常带 API key，只保留 scheme + host
URL_KEYS = {"rpc_url"}


def _redact_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        return url
    suffix = "/***" if parts.path.strip("/") or parts.query else ""
    return f"{parts.scheme}://{parts.netloc}{suffix}"


def _mask_sensitive_data(data: Any, depth: int = 0) -> Any:
    """递归脱敏敏感数据"""
    if depth > 10:
        return data

    if isinstance(data, dict):
        masked: dict[str, Any] = {}
        for k, v in data.items():
            key = k.lower() if isinstance(k, str) else k
            if key in SENSITIVE_KEYS:
                masked[k] = "***MASKED***"
            elif key in URL_KEYS and isinstance(v, str):
                masked[k] = _redact_url(v)
            else:
                masked[k] = _mask_sensitive_data(v, depth + 1)
        return masked
    elif isinstance(data, list):
        return [_mask_sensitive_data(item, depth + 1) for item in data]
    return data


def _mask_sensitive_processor(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """structlog 处理器：脱敏敏感数据"""
    return _mask_sensitive_data(event_dict)


def _add_service_info(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """添加服务信息"""
    event_dict["service"] = SERVICE_NAME
    return event_dict


def configure_logging(log_level: str = "INFO", log_format: str = "json") -> None:
    """配置日志系统"""
    level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        _add_service_info,
        _mask_sensitive_processor,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format.lower() == "json":
        # JSON 格式（生产环境）
        renderers: list[Processor] = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        # 人类可读格式（开发环境）
        renderers = [structlog.dev.ConsoleRenderer(colors=True)]

    structlog.configure(
        processors=shared_processors + renderers,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """获取 logger 实例"""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """绑定上下文变量到当前解析请求"""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """清除当前解析请求的上下文变量"""
    structlog.contextvars.clear_contextvars()


def bound_context(**kwargs: Any):
    """with 块内绑定上下文变量，退出时恢复调用方原有的绑定"""
    return structlog.contextvars.bound_contextvars(**kwargs)
