from .codecs import codecs_router

__all__ = ["codecs_router"]
