from tesoql_fastapi.middleware.request_context import RequestContextMiddleware, parse_cors_origins

__all__ = ["RequestContextMiddleware", "parse_cors_origins"]
