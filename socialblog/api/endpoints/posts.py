import logging
from typing import Literal, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from socialblog.db.database import get_session
from socialblog.models.post import Post
from socialblog.schemas.post import (
    MessageResponse,
    PostEnvelope,
    PostListResponse,
    PostWrite,
)
from socialblog.schemas.user import Identity
from socialblog.core.security import require_caller, resolve_caller
from socialblog.services.feed import (
    get_owned_post,
    get_visible_post,
    resolve_feed,
    serialize_posts,
)
from socialblog.services.tags import set_post_tags
from datetime import datetime, UTC

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("", response_model=PostListResponse, summary="List the posts visible to the caller")
def list_posts(
    tag: Optional[str] = None,
    author: Optional[str] = None,
    feed: Optional[Literal["following"]] = None,
    session: Session = Depends(get_session),
    current_user: Identity | None = Depends(resolve_caller)
):
    """List posts, newest first

    A bad token only matters for the following feed; elsewhere the caller
    is treated as anonymous.
    """
    posts = resolve_feed(session, current_user, tag=tag, author=author, feed=feed)
    return {"posts": posts}

@router.get("/{post_id}", response_model=PostEnvelope, summary="Get a specific post")
def get_post(
    post_id: int,
    session: Session = Depends(get_session),
    current_user: Identity | None = Depends(resolve_caller)
):
    """Get a specific post"""
    post = get_visible_post(session, current_user, post_id)
    return {"post": serialize_posts(session, [post])[0]}

@router.post("", response_model=PostEnvelope, summary="Create a new post")
def create_post(
    post_in: PostWrite,
    current_user: Identity = Depends(require_caller),
    session: Session = Depends(get_session)
):
    """Create a post and link its tags in one transaction"""
    post = Post(
        user_id=current_user.id,
        title=post_in.title,
        content=post_in.content,
    )
    post.visibility = post_in.visibility
    session.add(post)
    session.flush()  # Flush to get the post ID

    set_post_tags(session, post.id, post_in.tags)
    session.commit()
    session.refresh(post)

    logger.info("User %s created post %s", current_user.id, post.id)
    return {"post": serialize_posts(session, [post])[0]}

@router.put("/{post_id}", response_model=MessageResponse, summary="Update title, content, visibility and tags of a post")
def update_post(
    post_id: int,
    post_in: PostWrite,
    session: Session = Depends(get_session),
    current_user: Identity = Depends(require_caller)
):
    """Overwrite a post and replace its tags wholesale"""
    post = get_owned_post(session, current_user, post_id)

    post.title = post_in.title
    post.content = post_in.content
    post.visibility = post_in.visibility
    post.updated_at = datetime.now(UTC)

    set_post_tags(session, post.id, post_in.tags)
    session.commit()
    return {"message": "Post updated successfully"}

@router.delete("/{post_id}", response_model=MessageResponse, summary="Delete a post with its comments and tag links")
def delete_post(
    post_id: int,
    session: Session = Depends(get_session),
    current_user: Identity = Depends(require_caller)
):
    """Delete a post; comments and tag links go with it"""
    post = get_owned_post(session, current_user, post_id)
    session.delete(post)
    session.commit()

    logger.info("User %s deleted post %s", current_user.id, post_id)
    return {"message": "Post deleted successfully"}
