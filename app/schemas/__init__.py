from app.schemas.blog import (
    BlogCreate,
    BlogEnvelope,
    BlogListEnvelope,
    BlogListQuery,
    BlogPage,
    BlogResponse,
    BlogUpdate,
    CategoryRef,
    ErrorEnvelope,
    ImageUpload,
    MessageEnvelope,
    Pagination,
)
from app.schemas.health import HealthCheckResponse

__all__ = [
    "BlogCreate",
    "BlogEnvelope",
    "BlogListEnvelope",
    "BlogListQuery",
    "BlogPage",
    "BlogResponse",
    "BlogUpdate",
    "CategoryRef",
    "ErrorEnvelope",
    "HealthCheckResponse",
    "ImageUpload",
    "MessageEnvelope",
    "Pagination",
]
