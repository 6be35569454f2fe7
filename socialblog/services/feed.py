"""Visibility and feed resolution.

A post is visible to a caller when it is public or the caller owns it.
Anonymous callers see public posts only. The request-only tier is stored
but reads exactly like private: there is no request/grant workflow.

Feeds can be narrowed by exact tag name, exact author username, and the
"following" mode, which requires a caller and keeps only posts whose
author the caller follows. Filters compose with AND, and visibility is
applied on top of them.
"""
from collections import defaultdict
from typing import List, Optional
from sqlalchemy import or_, select
from sqlalchemy.orm import Session
from socialblog.core.errors import NotFoundOrForbidden, Unauthorized
from socialblog.models.comment import Comment
from socialblog.models.post import Post
from socialblog.models.post_tag import PostTag
from socialblog.models.subscription import Subscription
from socialblog.models.tag import Tag
from socialblog.models.user import User
from socialblog.schemas.user import Identity

FOLLOWING = "following"


def visibility_clause(caller: Optional[Identity]):
    """WHERE clause restricting posts to those the caller may read"""
    if caller is None:
        return Post.is_public.is_(True)
    return or_(Post.is_public.is_(True), Post.user_id == caller.id)


def build_feed_query(
    caller: Optional[Identity],
    tag: Optional[str] = None,
    author: Optional[str] = None,
    feed: Optional[str] = None,
):
    """Assemble the SELECT for a feed; raises Unauthorized for an anonymous following feed"""
    stmt = select(Post).join(User, User.id == Post.user_id)

    if tag:
        stmt = (
            stmt.join(PostTag, PostTag.post_id == Post.id)
            .join(Tag, Tag.id == PostTag.tag_id)
            .where(Tag.name == tag)
        )

    if author:
        stmt = stmt.where(User.username == author)

    if feed == FOLLOWING:
        if caller is None:
            raise Unauthorized("Authentication required for following feed")
        stmt = stmt.join(Subscription, Subscription.followed_id == Post.user_id).where(
            Subscription.follower_id == caller.id
        )

    return stmt.where(visibility_clause(caller)).order_by(Post.created_at.desc(), Post.id.desc())


def _author_summary(user: User) -> dict:
    return {"id": user.id, "name": user.username}


def serialize_comment(comment: Comment) -> dict:
    return {
        "id": comment.id,
        "content": comment.content,
        "created_at": comment.created_at,
        "author": _author_summary(comment.author),
    }


def serialize_posts(session: Session, posts: List[Post]) -> List[dict]:
    """Attach tag names, comments and author to each post

    Tags and comments for the whole page are loaded with one query each.
    """
    post_ids = [post.id for post in posts]
    tags_by_post = defaultdict(list)
    comments_by_post = defaultdict(list)

    if post_ids:
        tag_rows = session.execute(
            select(PostTag.post_id, Tag.name)
            .join(Tag, Tag.id == PostTag.tag_id)
            .where(PostTag.post_id.in_(post_ids))
            .order_by(Tag.id)
        ).all()
        for post_id, name in tag_rows:
            tags_by_post[post_id].append(name)

        comments = session.execute(
            select(Comment)
            .where(Comment.post_id.in_(post_ids))
            .order_by(Comment.created_at.asc(), Comment.id.asc())
        ).scalars().all()
        for comment in comments:
            comments_by_post[comment.post_id].append(serialize_comment(comment))

    return [{
        "id": post.id,
        "title": post.title,
        "content": post.content,
        "is_public": post.is_public,
        "is_request_only": post.is_request_only,
        "visibility": post.visibility,
        "created_at": post.created_at,
        "updated_at": post.updated_at,
        "tags": tags_by_post[post.id],
        "comments": comments_by_post[post.id],
        "comments_count": len(comments_by_post[post.id]),
        "author": _author_summary(post.author),
    } for post in posts]


def resolve_feed(
    session: Session,
    caller: Optional[Identity],
    tag: Optional[str] = None,
    author: Optional[str] = None,
    feed: Optional[str] = None,
) -> List[dict]:
    """Ordered, enriched posts the caller is allowed to see"""
    stmt = build_feed_query(caller, tag=tag, author=author, feed=feed)
    posts = session.execute(stmt).scalars().all()
    return serialize_posts(session, posts)


def get_visible_post(session: Session, caller: Optional[Identity], post_id: int) -> Post:
    """Load one post through the visibility rule"""
    post = session.execute(
        select(Post).where(Post.id == post_id, visibility_clause(caller))
    ).scalar_one_or_none()
    if post is None:
        raise NotFoundOrForbidden("Post not found")
    return post


def get_owned_post(session: Session, caller: Identity, post_id: int) -> Post:
    """Load a post for mutation; absent and not-owned raise the same error"""
    post = session.execute(
        select(Post).where(Post.id == post_id, Post.user_id == caller.id)
    ).scalar_one_or_none()
    if post is None:
        raise NotFoundOrForbidden()
    return post
