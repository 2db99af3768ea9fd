from fastapi import Request

from core.context import AppContext


def get_context(request: Request) -> AppContext:
    """FastAPI dependency：取得 lifespan 建立的 AppContext"""
    return request.app.state.context
