from fastapi import APIRouter
from socialblog.api.endpoints import (
    auth,
    posts,
    comments,
    follow,
    tags,
    health
)

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(posts.router, prefix="/posts", tags=["posts"])
api_router.include_router(comments.router, prefix="/posts/{post_id}/comments", tags=["comments"])
api_router.include_router(follow.router, prefix="/follow", tags=["follow"])
api_router.include_router(tags.router, prefix="/tags", tags=["tags"])
api_router.include_router(health.router, prefix="/health", tags=["health"])
