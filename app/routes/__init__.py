from app.routes.blog import get_blog_service, get_media_service
from app.routes.blog import router as blog_router

__all__ = [
    "blog_router",
    "get_blog_service",
    "get_media_service",
]
