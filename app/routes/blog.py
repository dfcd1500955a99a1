# app/routes/blog.py

"""
Blog Routes.

Provides CRUD endpoints and publish-gated listings for blogs.

Summary
-------
Endpoints include:
  - Create blog
  - List blogs (filter, search, sort, paginate)
  - Get blog by id or slug
  - Get blog by slug
  - List blogs by category
  - Update blog (PUT or PATCH, partial)
  - Delete blog

Dependencies
------------
  - `BlogServiceDep`: `BlogService` wired to request-scoped repositories
    and the process-wide media service.

Errors
------
Service errors are rendered by the exception handlers registered in
`app.main` using the `{success, message, error}` envelope.
"""

from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from typing import Annotated, Any

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from fastapi.responses import ORJSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import (
    HTTP_200_OK,
    HTTP_201_CREATED,
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from app.configs.settings import settings
from app.db import get_session
from app.repositories import BlogRepository, CategoryRepository
from app.schemas import (
    BlogCreate,
    BlogEnvelope,
    BlogListEnvelope,
    BlogListQuery,
    BlogPage,
    BlogUpdate,
    ErrorEnvelope,
    ImageUpload,
    MessageEnvelope,
)
from app.services import BlogService, CategoryValidator, MediaService

router = APIRouter(prefix="/blogs", tags=["📝 Blogs"])



def error_response(description: str, message: str, error: str) -> dict[str, Any]:
    return {
        "model": ErrorEnvelope,
        "description": description,
        "content": {
            "application/json": {
                "example": {"success": False, "message": message, "error": error},
            },
        },
    }


VALIDATION_400 = error_response(
    "Invalid input",
    "Missing required field: title",
    "BlogValidationError",
)
BLOG_404 = error_response("Blog not found", "Blog not found", "NotFoundError")
CATEGORY_404 = error_response("Category not found", "Category not found", "NotFoundError")
SLUG_409 = error_response("Slug already exists", "Slug already exists", "ConflictError")
SERVER_500 = error_response("Upload or storage failure", "Error uploading image", "UploadError")


@lru_cache
def get_media_service() -> MediaService:
    """
    Resolve the process-wide `MediaService`.

    Built once on first use so the asset store client is shared across
    requests.
    """
    return MediaService()


def get_blog_service(
    session: Annotated[AsyncSession, Depends(get_session)],
    media: Annotated[MediaService, Depends(get_media_service)],
) -> BlogService:
    """
    Resolve the `BlogService` dependency.

    Parameters
    ----------
    session : AsyncSession
        Request-scoped database session.
    media : MediaService
        Shared media service.

    Returns
    -------
    BlogService
        Service bound to repositories on this session.
    """
    return BlogService(
        blogs=BlogRepository(session),
        categories=CategoryValidator(CategoryRepository(session)),
        media=media,
    )


BlogServiceDep = Annotated[BlogService, Depends(get_blog_service)]


@dataclass
class BlogForm:
    """
    Multipart form fields shared by create and update.

    Every field is optional here; the service decides what is required.
    """

    title: Annotated[str | None, Form()] = None
    content: Annotated[str | None, Form()] = None
    read_time_minutes: Annotated[int | None, Form(alias="readTimeMinutes")] = None
    category_id: Annotated[str | None, Form(alias="categoryId")] = None
    slug: Annotated[str | None, Form()] = None
    meta_title: Annotated[str | None, Form(alias="metaTitle")] = None
    meta_description: Annotated[str | None, Form(alias="metaDescription")] = None
    published_date: Annotated[datetime | None, Form(alias="publishedDate")] = None
    cover_image_url: Annotated[str | None, Form(alias="coverImageUrl")] = None

    def supplied(self) -> dict[str, Any]:
        """Fields the client actually sent."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


BlogFormDep = Annotated[BlogForm, Depends()]
CoverImageDep = Annotated[UploadFile | None, File(alias="coverImage")]


async def read_cover_image(upload: UploadFile | None) -> ImageUpload | None:
    """
    Read an uploaded cover image into memory.

    Browsers send an empty part when no file was chosen; that counts as
    no upload.
    """
    if upload is None:
        return None

    data = await upload.read()
    if not data and not upload.filename:
        return None

    return ImageUpload(data=data, content_type=upload.content_type, filename=upload.filename)


def page_envelope(page: BlogPage) -> BlogListEnvelope:
    return BlogListEnvelope(data=page.items, pagination=page.pagination)


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=BlogEnvelope,
    response_model_exclude_none=True,
    status_code=HTTP_201_CREATED,
    summary="Create a new blog post",
    description=(
        "Create a blog post from multipart form data. Upload a cover image in "
        "`coverImage` or pass an existing URL in `coverImageUrl`."
    ),
    responses={
        HTTP_400_BAD_REQUEST: VALIDATION_400,
        HTTP_404_NOT_FOUND: CATEGORY_404,
        HTTP_409_CONFLICT: SLUG_409,
        HTTP_500_INTERNAL_SERVER_ERROR: SERVER_500,
    },
    operation_id="blogs_create",
)
async def create_blog(
    form: BlogFormDep,
    service: BlogServiceDep,
    cover_image: CoverImageDep = None,
) -> BlogEnvelope:
    """
    Create a new blog post.

    Parameters
    ----------
    form : BlogForm
        Submitted text fields.
    service : BlogService
        Blog service.
    cover_image : UploadFile | None
        Optional cover image upload.

    Returns
    -------
    BlogEnvelope
        Created blog wrapped in the success envelope.

    Examples
    --------
    Request
        POST /blogs (multipart: title, content, readTimeMinutes, categoryId, coverImage)
    Response
        201 Created
        {"success": true, "message": "Blog created successfully", "data": { ... }}
    """
    blog = await service.create(
        BlogCreate.model_validate(form.supplied()),
        await read_cover_image(cover_image),
    )
    return BlogEnvelope(message="Blog created successfully", data=blog)


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=BlogListEnvelope,
    response_model_exclude_none=True,
    status_code=HTTP_200_OK,
    summary="List published blogs",
    description=(
        "List blogs whose publication date has passed, optionally filtered by "
        "category and a case-insensitive search over title and content."
    ),
    responses={HTTP_400_BAD_REQUEST: VALIDATION_400},
    operation_id="blogs_list",
)
async def list_blogs(
    service: BlogServiceDep,
    page: Annotated[int, Query(description="1-based page number")] = 1,
    limit: Annotated[
        int,
        Query(description=f"Page size (1-{settings.BLOG_MAX_PAGE_SIZE})"),
    ] = settings.BLOG_DEFAULT_PAGE_SIZE,
    category: Annotated[str | None, Query(description="Category ID filter")] = None,
    search: Annotated[str | None, Query(description="Search in title or content")] = None,
    sort_by: Annotated[str, Query(alias="sortBy")] = "publishedDate",
    sort_order: Annotated[str, Query(alias="sortOrder")] = "desc",
) -> BlogListEnvelope:
    """
    List published blogs.

    Returns
    -------
    BlogListEnvelope
        Page of blogs plus pagination metadata.

    Examples
    --------
    Request
        GET /blogs?page=2&limit=10&search=bali&sortBy=title&sortOrder=asc
    Response
        200 OK
        {"success": true, "data": [ ... ], "pagination": {"currentPage": 2, ...}}
    """
    query = BlogListQuery(
        page=page,
        limit=limit,
        category_id=category,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return page_envelope(await service.list_blogs(query))


@router.get(
    "/slug/{slug}",
    response_class=ORJSONResponse,
    response_model=BlogEnvelope,
    response_model_exclude_none=True,
    summary="Get blog by slug",
    responses={HTTP_404_NOT_FOUND: BLOG_404},
    operation_id="blogs_get_by_slug",
)
async def get_blog_by_slug(slug: str, service: BlogServiceDep) -> BlogEnvelope:
    """
    Retrieve a blog by its slug.

    Examples
    --------
    Request
        GET /blogs/slug/hello-world
    Response
        200 OK
        {"success": true, "data": {"slug": "hello-world", ...}}
    """
    return BlogEnvelope(data=await service.get_by_slug(slug))


@router.get(
    "/category/{category_id}",
    response_class=ORJSONResponse,
    response_model=BlogListEnvelope,
    response_model_exclude_none=True,
    summary="List published blogs in a category",
    responses={HTTP_400_BAD_REQUEST: VALIDATION_400},
    operation_id="blogs_list_by_category",
)
async def list_blogs_by_category(
    category_id: str,
    service: BlogServiceDep,
    page: Annotated[int, Query(description="1-based page number")] = 1,
    limit: Annotated[int, Query(description="Page size")] = settings.BLOG_DEFAULT_PAGE_SIZE,
) -> BlogListEnvelope:
    """
    List published blogs of one category, newest first.

    Examples
    --------
    Request
        GET /blogs/category/123e4567-e89b-12d3-a456-426614174000?page=1&limit=10
    Response
        200 OK
        {"success": true, "data": [ ... ], "pagination": { ... }}
    """
    return page_envelope(await service.list_by_category(category_id, page=page, limit=limit))


@router.get(
    "/{identifier}",
    response_class=ORJSONResponse,
    response_model=BlogEnvelope,
    response_model_exclude_none=True,
    summary="Get blog by id or slug",
    description="Look the identifier up as an id first, then as a slug.",
    responses={HTTP_404_NOT_FOUND: BLOG_404},
    operation_id="blogs_get",
)
async def get_blog(identifier: str, service: BlogServiceDep) -> BlogEnvelope:
    """
    Retrieve a blog by id or slug.

    Examples
    --------
    Request
        GET /blogs/550e8400-e29b-41d4-a716-446655440000
        GET /blogs/hello-world
    Response
        200 OK
        {"success": true, "data": { ... }}
    """
    return BlogEnvelope(data=await service.get(identifier))


@router.api_route(
    "/{blog_id}",
    methods=["PUT", "PATCH"],
    response_class=ORJSONResponse,
    response_model=BlogEnvelope,
    response_model_exclude_none=True,
    summary="Update a blog",
    description="Partially update a blog; fields that are not sent keep their value.",
    responses={
        HTTP_400_BAD_REQUEST: VALIDATION_400,
        HTTP_404_NOT_FOUND: BLOG_404,
        HTTP_409_CONFLICT: SLUG_409,
        HTTP_500_INTERNAL_SERVER_ERROR: SERVER_500,
    },
    operation_id="blogs_update",
)
async def update_blog(
    blog_id: str,
    form: BlogFormDep,
    service: BlogServiceDep,
    cover_image: CoverImageDep = None,
) -> BlogEnvelope:
    """
    Update a blog.

    Examples
    --------
    Request
        PATCH /blogs/550e8400-e29b-41d4-a716-446655440000 (multipart: slug=new-slug)
    Response
        200 OK
        {"success": true, "message": "Blog updated successfully", "data": { ... }}
    """
    blog = await service.update(
        blog_id,
        BlogUpdate.model_validate(form.supplied()),
        await read_cover_image(cover_image),
    )
    return BlogEnvelope(message="Blog updated successfully", data=blog)


@router.delete(
    "/{blog_id}",
    response_class=ORJSONResponse,
    response_model=MessageEnvelope,
    summary="Delete a blog",
    responses={HTTP_404_NOT_FOUND: BLOG_404},
    operation_id="blogs_delete",
)
async def delete_blog(blog_id: str, service: BlogServiceDep) -> MessageEnvelope:
    """
    Delete a blog and release its managed cover image.

    Examples
    --------
    Request
        DELETE /blogs/550e8400-e29b-41d4-a716-446655440000
    Response
        200 OK
        {"success": true, "message": "Blog deleted successfully"}
    """
    await service.delete(blog_id)
    return MessageEnvelope(message="Blog deleted successfully")
