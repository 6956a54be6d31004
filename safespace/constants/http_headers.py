"""HTTP头常量.

定义本服务读写的HTTP头名称，避免魔法字符串。
"""


class HttpHeaders:
    """HTTP头常量."""

    CONTENT_TYPE = "Content-Type"

    # 请求链路追踪
    X_REQUEST_ID = "X-Request-ID"
