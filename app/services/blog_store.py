"""Blog post persistence."""

import logging
import uuid as uuid_lib
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.blog import BlogPost

logger = logging.getLogger(__name__)


class BlogStore:
    """Blog post table access over an async session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_posts(self, include_unpublished: bool = False) -> list[BlogPost]:
        """Posts, newest first. Drafts only when asked for."""
        query = select(BlogPost).order_by(BlogPost.created_at.desc())
        if not include_unpublished:
            query = query.where(BlogPost.published.is_(True))
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_post(self, post_id: uuid_lib.UUID) -> BlogPost | None:
        result = await self.db.execute(select(BlogPost).where(BlogPost.id == post_id))
        return result.scalar_one_or_none()

    async def get_published_post_by_slug(self, slug: str) -> BlogPost | None:
        result = await self.db.execute(
            select(BlogPost).where(BlogPost.slug == slug, BlogPost.published.is_(True))
        )
        return result.scalar_one_or_none()

    async def create_post(self, fields: dict[str, Any]) -> BlogPost:
        post = BlogPost(**fields)
        self.db.add(post)
        await self.db.flush()
        await self.db.refresh(post)
        logger.info(f"Created blog post {post.slug}")
        return post

    async def update_post(self, post_id: uuid_lib.UUID, fields: dict[str, Any]) -> BlogPost | None:
        post = await self.get_post(post_id)
        if post is None:
            return None

        for key, value in fields.items():
            setattr(post, key, value)
        post.updated_at = datetime.now(timezone.utc)

        await self.db.flush()
        await self.db.refresh(post)
        logger.info(f"Updated blog post {post.slug}")
        return post

    async def delete_post(self, post_id: uuid_lib.UUID) -> bool:
        post = await self.get_post(post_id)
        if post is None:
            return False
        await self.db.delete(post)
        await self.db.flush()
        logger.info(f"Deleted blog post {post.slug}")
        return True
