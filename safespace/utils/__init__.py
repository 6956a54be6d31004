"""工具模块.

主要工具:
- structlog_config: 结构化日志配置
- response_utils: 统一成功/错误响应封套
- logging: 上下文变量、调试日志过滤与错误元数据推导
"""
