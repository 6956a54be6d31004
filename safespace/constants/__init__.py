"""常量模块。

集中管理系统常量，包括错误分类、错误消息、HTTP 状态码等。
"""

# 导入HTTP状态码常量（使用Python标准库）
from http import HTTPStatus as HttpStatus

from .http_headers import HttpHeaders
from .system_constants import (
    ErrorCategory,
    ErrorMessages,
    ErrorSeverity,
    LogLevel,
    SuccessMessages,
)

__all__ = [
    "ErrorCategory",
    "ErrorMessages",
    "ErrorSeverity",
    "HttpHeaders",
    "HttpStatus",
    "LogLevel",
    "SuccessMessages",
]
