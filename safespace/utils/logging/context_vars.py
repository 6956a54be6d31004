"""结构化日志与错误封套共享的请求级上下文变量."""

from contextvars import ContextVar

request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)
schema_name_var: ContextVar[str | None] = ContextVar("schema_name", default=None)

__all__ = ["request_id_var", "schema_name_var"]
