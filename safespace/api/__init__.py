"""HTTP 边界: 路由、错误映射."""
