"""
Blog use cases.

``BlogService`` validates input explicitly before any store call,
derives slugs, enforces category references and slug uniqueness, and
shapes repository rows into responses. The unique index on ``slug``
remains the final authority: a collision detected at write time is
reported exactly like one caught by the pre-check.
"""

from collections.abc import Callable
from datetime import datetime
from math import ceil
from typing import Any
from uuid import UUID

from app.configs.settings import (
    MAX_IMAGE_URL_LENGTH,
    MAX_META_LENGTH,
    MAX_READ_TIME,
    MAX_SLUG_LENGTH,
    MAX_TITLE_LENGTH,
    MIN_READ_TIME,
    settings,
)
from app.errors.blog import BlogValidationError, ConflictError, NotFoundError
from app.errors.database import DuplicateEntryError
from app.models.blog import BlogDB
from app.monitoring import get_logger
from app.repositories.blog import SORT_COLUMNS, BlogFilter, BlogRepository, BlogSort
from app.schemas.blog import (
    BlogCreate,
    BlogListQuery,
    BlogPage,
    BlogResponse,
    BlogUpdate,
    CategoryRef,
    ImageUpload,
    Pagination,
)
from app.services.category import CategoryValidator, parse_uuid
from app.services.media import MediaService
from app.utils.helpers import as_utc, utc_now
from app.utils.slug import create_slug

logger = get_logger(__name__)

TEXT_FIELDS = (
    "title",
    "content",
    "slug",
    "category_id",
    "meta_title",
    "meta_description",
    "cover_image_url",
)

FIELD_LABELS = {
    "title": "title",
    "content": "content",
    "read_time_minutes": "readTimeMinutes",
    "category_id": "categoryId",
    "slug": "slug",
    "meta_title": "metaTitle",
    "meta_description": "metaDescription",
    "cover_image_url": "coverImageUrl",
}


# --- Validation ---


def clean_text(value: str | None) -> str | None:
    """Strip surrounding whitespace; blank strings become None."""
    if value is None:
        return None
    return value.strip() or None


def check_length(value: str, field: str, max_length: int) -> None:
    """Reject ``value`` if it is longer than ``max_length`` characters."""
    if len(value) > max_length:
        mssg = f"{FIELD_LABELS.get(field, field)} must be at most {max_length} characters"
        raise BlogValidationError(mssg)


def check_read_time(value: int) -> None:
    """Reject read times outside the accepted minute range."""
    if not MIN_READ_TIME <= value <= MAX_READ_TIME:
        mssg = f"readTimeMinutes must be between {MIN_READ_TIME} and {MAX_READ_TIME}"
        raise BlogValidationError(mssg)


def normalize_slug(source: str) -> str:
    """Normalize a title or explicit slug and check the stored length limit."""
    slug = create_slug(source)
    check_length(slug, "slug", MAX_SLUG_LENGTH)
    return slug


def validate_fields(fields: dict[str, Any]) -> None:
    """
    Check length and range limits of the supplied fields.

    Only keys present in ``fields`` are checked, so the same rules serve
    full creates and partial updates.
    """
    limits = {
        "title": MAX_TITLE_LENGTH,
        "meta_title": MAX_META_LENGTH,
        "meta_description": MAX_META_LENGTH,
        "cover_image_url": MAX_IMAGE_URL_LENGTH,
    }
    for field, max_length in limits.items():
        if (value := fields.get(field)) is not None:
            check_length(value, field, max_length)

    if (read_time := fields.get("read_time_minutes")) is not None:
        check_read_time(read_time)


def validate_paging(page: int, limit: int, max_limit: int) -> None:
    """
    Reject non-positive pages and limits, and limits above ``max_limit``.

    Raises:
        BlogValidationError: If either value is out of range
    """
    if page < 1:
        mssg = "page must be a positive integer"
        raise BlogValidationError(mssg)
    if limit < 1 or limit > max_limit:
        mssg = f"limit must be between 1 and {max_limit}"
        raise BlogValidationError(mssg)


def build_pagination(page: int, limit: int, total: int) -> Pagination:
    """
    Compute pagination metadata.

    Examples:
    --------
    >>> build_pagination(3, 10, 25).model_dump()
    {'current_page': 3, 'total_pages': 3, 'total_blogs': 25, 'has_next': False, 'has_prev': True}
    """
    total_pages = ceil(total / limit)
    return Pagination(
        current_page=page,
        total_pages=total_pages,
        total_blogs=total,
        has_next=page < total_pages,
        has_prev=page > 1,
    )


def is_slug_violation(error: DuplicateEntryError) -> bool:
    """Tell whether a unique violation came from the slug index."""
    return "slug" in (error.constraint or "").lower() or "slug" in error.detail.lower()


# --- Service ---


class BlogService:
    """
    Implements the blog use cases on top of injected collaborators.

    Args:
        blogs: Blog repository bound to the request session
        categories: Category reference validator
        media: Cover image upload service
        clock: Source of the current UTC time
    """

    def __init__(
        self,
        blogs: BlogRepository,
        categories: CategoryValidator,
        media: MediaService,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.blogs = blogs
        self.categories = categories
        self.media = media
        self.clock = clock
        self.max_page_size = settings.BLOG_MAX_PAGE_SIZE

    async def create(self, draft: BlogCreate, image: ImageUpload | None = None) -> BlogResponse:
        """
        Create a blog post.

        The cover image is uploaded first; if anything afterwards fails,
        the uploaded asset is released and no record is written.

        Args:
            draft: Submitted fields
            image: Optional uploaded cover image (takes precedence over
                ``draft.cover_image_url``)

        Returns:
            BlogResponse: Created post with its category title resolved

        Raises:
            UploadError: If the image upload fails
            BlogValidationError: On missing or malformed fields
            NotFoundError: If the category does not exist
            ConflictError: If the slug is already taken
        """
        uploaded_url = None
        if image is not None:
            uploaded_url = await self.media.upload_cover_image(image)

        try:
            blog = await self._insert(draft, uploaded_url or draft.cover_image_url)
        except Exception:
            await self.media.release(uploaded_url)
            raise

        logger.info("Blog created", blog_id=str(blog.id), slug=blog.slug)
        return await self._to_response(blog)

    async def _insert(self, draft: BlogCreate, cover_image_url: str | None) -> BlogDB:
        title = clean_text(draft.title)
        content = clean_text(draft.content)
        category_id = clean_text(draft.category_id)

        missing = [
            FIELD_LABELS[name]
            for name, value in (
                ("title", title),
                ("content", content),
                ("read_time_minutes", draft.read_time_minutes),
                ("category_id", category_id),
            )
            if value is None
        ]
        if missing:
            mssg = f"Missing required field: {', '.join(missing)}"
            raise BlogValidationError(mssg)

        cover_image_url = clean_text(cover_image_url)
        if cover_image_url is None:
            mssg = "Blog image is required"
            raise BlogValidationError(mssg)

        fields = {
            "title": title,
            "content": content,
            "read_time_minutes": draft.read_time_minutes,
            "cover_image_url": cover_image_url,
            "meta_title": clean_text(draft.meta_title) or title,
            "meta_description": clean_text(draft.meta_description) or content[:MAX_META_LENGTH],
        }
        validate_fields(fields)

        if not await self.categories.exists(category_id):
            raise NotFoundError("category")

        slug = normalize_slug(clean_text(draft.slug) or title)
        if await self.blogs.slug_taken(slug):
            raise ConflictError("slug")

        published = draft.published_date
        blog = BlogDB(
            **fields,
            slug=slug,
            category_id=parse_uuid(category_id),
            published_date=as_utc(published) if published else self.clock(),
        )

        try:
            created = await self.blogs.create(blog)
        except DuplicateEntryError as e:
            if is_slug_violation(e):
                raise ConflictError("slug") from e
            raise

        await self.blogs.commit()
        return created

    async def list_blogs(self, query: BlogListQuery) -> BlogPage:
        """
        List published blogs with filtering, sorting and pagination.

        Posts whose ``published_date`` is later than now are excluded.

        Args:
            query: Listing parameters

        Returns:
            BlogPage: Requested page and pagination metadata

        Raises:
            BlogValidationError: On invalid paging or sort parameters
        """
        validate_paging(query.page, query.limit, self.max_page_size)

        if query.sort_by not in SORT_COLUMNS:
            mssg = f"sortBy must be one of: {', '.join(SORT_COLUMNS)}"
            raise BlogValidationError(mssg)

        sort_order = query.sort_order.lower()
        if sort_order not in ("asc", "desc"):
            mssg = "sortOrder must be 'asc' or 'desc'"
            raise BlogValidationError(mssg)

        category_id = None
        # A blank category means "all categories"
        if (raw_category := clean_text(query.category_id)) is not None:
            category_id = parse_uuid(raw_category)
            if category_id is None:
                # A malformed id cannot match any post
                return BlogPage(items=[], pagination=build_pagination(query.page, query.limit, 0))

        blog_filter = BlogFilter(
            published_before=self.clock(),
            category_id=category_id,
            search=clean_text(query.search),
        )
        rows = await self.blogs.find_many(
            blog_filter,
            BlogSort(field=query.sort_by, descending=sort_order == "desc"),
            skip=(query.page - 1) * query.limit,
            limit=query.limit,
        )
        total = await self.blogs.count(blog_filter)

        return BlogPage(
            items=await self._to_responses(rows),
            pagination=build_pagination(query.page, query.limit, total),
        )

    async def list_by_category(
        self,
        category_id: str,
        page: int = 1,
        limit: int = settings.BLOG_DEFAULT_PAGE_SIZE,
    ) -> BlogPage:
        """
        List published blogs of one category, newest first.

        Args:
            category_id: Category to list
            page: 1-based page number
            limit: Page size

        Returns:
            BlogPage: Requested page and pagination metadata
        """
        if clean_text(category_id) is None:
            validate_paging(page, limit, self.max_page_size)
            return BlogPage(items=[], pagination=build_pagination(page, limit, 0))

        return await self.list_blogs(
            BlogListQuery(page=page, limit=limit, category_id=category_id),
        )

    async def get(self, identifier: str) -> BlogResponse:
        """
        Get a blog by id, falling back to slug.

        Identifiers that parse as a UUID are tried as an id first; any
        miss is retried as a slug.

        Raises:
            NotFoundError: If neither lookup finds a blog
        """
        blog = None
        if (blog_id := parse_uuid(identifier)) is not None:
            blog = await self.blogs.get_by_id(blog_id)
        if blog is None:
            blog = await self.blogs.get_by_slug(identifier)
        if blog is None:
            raise NotFoundError("blog")

        return await self._to_response(blog)

    async def get_by_slug(self, slug: str) -> BlogResponse:
        """
        Get a blog by slug.

        Raises:
            NotFoundError: If no blog has this slug
        """
        blog = await self.blogs.get_by_slug(slug)
        if blog is None:
            raise NotFoundError("blog")

        return await self._to_response(blog)

    async def update(
        self,
        blog_id: str | UUID,
        patch: BlogUpdate,
        image: ImageUpload | None = None,
    ) -> BlogResponse:
        """
        Partially update a blog.

        Only fields set on ``patch`` change. A new slug is normalized and
        must not belong to another post; keeping the current slug is not a
        conflict. A replaced managed cover image is released only after the
        change is committed.

        Raises:
            NotFoundError: If the blog or the new category does not exist
            BlogValidationError: On malformed fields
            ConflictError: If the new slug belongs to another post
            UploadError: If the new image upload fails
        """
        blog = await self._get_existing(blog_id)

        changes = patch.model_dump(exclude_unset=True, exclude_none=True)
        for field in TEXT_FIELDS:
            if field in changes:
                value = clean_text(changes[field])
                if value is None:
                    mssg = f"{FIELD_LABELS.get(field, field)} cannot be empty"
                    raise BlogValidationError(mssg)
                changes[field] = value
        validate_fields(changes)

        if "category_id" in changes:
            if not await self.categories.exists(changes["category_id"]):
                raise NotFoundError("category")
            changes["category_id"] = parse_uuid(changes["category_id"])

        if "slug" in changes:
            changes["slug"] = normalize_slug(changes["slug"])
            if await self.blogs.slug_taken(changes["slug"], exclude_id=blog.id):
                raise ConflictError("slug")

        if "published_date" in changes:
            changes["published_date"] = as_utc(changes["published_date"])

        previous_cover = blog.cover_image_url
        uploaded_url = None
        if image is not None:
            uploaded_url = await self.media.upload_cover_image(image)
            changes["cover_image_url"] = uploaded_url

        try:
            updated = await self.blogs.update(blog, changes)
            # The old cover may only go once the new URL is durable
            await self.blogs.commit()
        except DuplicateEntryError as e:
            await self.media.release(uploaded_url)
            if is_slug_violation(e):
                raise ConflictError("slug") from e
            raise
        except Exception:
            await self.media.release(uploaded_url)
            raise

        if changes.get("cover_image_url", previous_cover) != previous_cover:
            await self.media.release(previous_cover)

        logger.info("Blog updated", blog_id=str(updated.id), fields=sorted(changes))
        return await self._to_response(updated)

    async def delete(self, blog_id: str | UUID) -> None:
        """
        Delete a blog and release its managed cover image.

        Asset removal is best-effort and never prevents the record from
        being deleted.

        Raises:
            NotFoundError: If the blog does not exist
        """
        blog = await self._get_existing(blog_id)

        if self.media.is_managed(blog.cover_image_url):
            await self.media.release(blog.cover_image_url)

        await self.blogs.delete(blog)
        logger.info("Blog deleted", blog_id=str(blog.id), slug=blog.slug)

    async def _get_existing(self, blog_id: str | UUID) -> BlogDB:
        parsed = parse_uuid(blog_id)
        blog = await self.blogs.get_by_id(parsed) if parsed is not None else None
        if blog is None:
            raise NotFoundError("blog")
        return blog

    async def _to_response(self, blog: BlogDB) -> BlogResponse:
        (response,) = await self._to_responses([blog])
        return response

    async def _to_responses(self, blogs: list[BlogDB]) -> list[BlogResponse]:
        titles = await self.categories.titles({blog.category_id for blog in blogs})
        return [
            BlogResponse(
                id=blog.id,
                title=blog.title,
                slug=blog.slug,
                content=blog.content,
                cover_image_url=blog.cover_image_url,
                read_time_minutes=blog.read_time_minutes,
                category_id=blog.category_id,
                category=CategoryRef(id=blog.category_id, title=titles.get(blog.category_id)),
                meta_title=blog.meta_title,
                meta_description=blog.meta_description,
                published_date=as_utc(blog.published_date),
                created_at=as_utc(blog.created_at),
                updated_at=as_utc(blog.updated_at),
            )
            for blog in blogs
        ]
