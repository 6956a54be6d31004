"""按配置丢弃 DEBUG 事件的 structlog 处理器."""

from __future__ import annotations

from typing import Any

import structlog


class DebugFilter:
    """根据配置决定是否丢弃 DEBUG 日志的处理器.

    Attributes:
        enabled: 是否启用 DEBUG 日志.

    """

    def __init__(self, *, enabled: bool = False) -> None:
        self.enabled = enabled

    def set_enabled(self, *, enabled: bool) -> None:
        self.enabled = enabled

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:  # noqa: ANN401
        """处理日志事件.

        Raises:
            structlog.DropEvent: 未启用 DEBUG 时丢弃 debug 级别事件.

        """
        del logger
        if method_name == "debug" and not self.enabled:
            raise structlog.DropEvent
        return event_dict


__all__ = ["DebugFilter"]
