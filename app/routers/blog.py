from uuid import UUID

from fastapi import APIRouter, Query, status

from app.core.exceptions import NotFoundException, BadRequestException
from app.dependencies import AdminUser, IsAdmin, Posts, Songs
from app.schemas.auth import MessageResponse
from app.schemas.blog import (
    BlogPostCreate,
    BlogPostUpdate,
    BlogPostResponse,
    BlogPostWithSongsResponse,
)
from app.utils.display import slugify
from app.utils.responses import build_song_response

router = APIRouter()


@router.get(
    "",
    response_model=list[BlogPostResponse],
    summary="List blog posts",
)
async def list_posts(
    posts: Posts,
    is_admin: IsAdmin,
    include_all: bool = Query(False, alias="all", description="Include drafts (admin only)"),
):
    """
    Published posts, newest first.

    `all=true` adds drafts, but only for the admin; anyone else gets the
    published list.
    """
    return await posts.list_posts(include_unpublished=include_all and is_admin)


@router.get(
    "/slug/{slug}",
    response_model=BlogPostWithSongsResponse,
    summary="Get a published post with its songs",
)
async def get_post_by_slug(slug: str, posts: Posts, songs: Songs):
    """A published post plus its songs, in the order the post lists them."""
    post = await posts.get_published_post_by_slug(slug)
    if post is None:
        raise NotFoundException("Post not found")

    post_songs = await songs.list_songs_by_ids(UUID(str(song_id)) for song_id in post.song_ids or [])
    response = BlogPostResponse.model_validate(post)
    return BlogPostWithSongsResponse(
        **response.model_dump(),
        songs=[build_song_response(song) for song in post_songs],
    )


@router.get(
    "/{post_id}",
    response_model=BlogPostResponse,
    summary="Get a blog post",
)
async def get_post(post_id: UUID, posts: Posts):
    post = await posts.get_post(post_id)
    if post is None:
        raise NotFoundException("Post not found")
    return post


@router.post(
    "",
    response_model=BlogPostResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a blog post",
)
async def create_post(_: AdminUser, request: BlogPostCreate, posts: Posts):
    """
    Create a post. Without a slug, one is made from the title.

    - **song_ids**: songs referenced by the post, in display order
    """
    slug = slugify(request.slug or request.title)
    if not slug:
        raise BadRequestException("Title, slug, and content are required")

    fields = request.model_dump()
    fields["slug"] = slug
    fields["song_ids"] = [str(song_id) for song_id in request.song_ids]
    fields["preview"] = request.preview or None

    return await posts.create_post(fields)


@router.patch(
    "/{post_id}",
    response_model=BlogPostResponse,
    summary="Update a blog post",
)
async def update_post(_: AdminUser, post_id: UUID, request: BlogPostUpdate, posts: Posts):
    fields = request.model_dump(exclude_unset=True)
    for required in ("title", "slug", "content", "published"):
        if required in fields and fields[required] is None:
            del fields[required]

    if "slug" in fields:
        fields["slug"] = slugify(fields["slug"])
        if not fields["slug"]:
            raise BadRequestException("Slug cannot be empty")
    if "song_ids" in fields:
        fields["song_ids"] = [str(song_id) for song_id in fields["song_ids"] or []]

    post = await posts.update_post(post_id, fields)
    if post is None:
        raise NotFoundException("Post not found")
    return post


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    summary="Delete a blog post",
)
async def delete_post(_: AdminUser, post_id: UUID, posts: Posts):
    if not await posts.delete_post(post_id):
        raise NotFoundException("Post not found")
    return MessageResponse(message="Post deleted")
