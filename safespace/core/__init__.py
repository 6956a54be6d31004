"""Shared kernel: 与框架无关的异常与类型定义."""
