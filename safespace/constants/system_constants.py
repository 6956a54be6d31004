"""SafeSpace - 常量定义模块

统一管理错误分类、严重度与对外文案.
"""

from enum import Enum


class LogLevel(Enum):
    """日志级别枚举."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ErrorCategory(Enum):
    """错误分类枚举."""

    VALIDATION = "validation"
    BUSINESS = "business"
    SYSTEM = "system"


class ErrorSeverity(Enum):
    """错误严重程度枚举."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorMessages:
    """错误消息常量."""

    INTERNAL_ERROR = "Internal server error"
    VALIDATION_ERROR = "Validation Error"
    INVALID_INPUT = "Invalid input data"
    UNKNOWN_SCHEMA = "Unknown validation schema: {name}"
    BODY_NOT_OBJECT = "Request body must be a JSON object"


class SuccessMessages:
    """成功消息常量."""

    OPERATION_SUCCESS = "Operation completed"
    HEALTH_OK = "Health check passed"
    SIGNUP_ACCEPTED = "Signup request accepted"
    USER_ACCEPTED = "User payload accepted"
    PROFILE_ACCEPTED = "Profile update accepted"
    LOGIN_ACCEPTED = "Login request accepted"
    OTP_SEND_ACCEPTED = "OTP request accepted"
    OTP_VERIFY_ACCEPTED = "OTP verification request accepted"
    PASSWORD_CHANGE_ACCEPTED = "Password change request accepted"
    NOTIFICATION_SETTINGS_ACCEPTED = "Notification settings accepted"


__all__ = [
    "ErrorCategory",
    "ErrorMessages",
    "ErrorSeverity",
    "LogLevel",
    "SuccessMessages",
]
