from pydantic import BaseModel, Field
from datetime import datetime
from typing import Annotated, List
from socialblog.models.post import Visibility
from socialblog.schemas.comment import AuthorSummary, CommentResponse

class PostWrite(BaseModel):
    """文章创建/更新请求模型"""
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)
    tags: List[Annotated[str, Field(max_length=50)]] = Field(default_factory=list, description="标签名称列表")
    visibility: Visibility = Field(default=Visibility.PUBLIC, description="可见性")

class PostResponse(BaseModel):
    """文章响应模型"""
    id: int
    title: str
    content: str
    is_public: bool
    is_request_only: bool
    visibility: Visibility
    created_at: datetime
    updated_at: datetime
    tags: List[str] = Field(default_factory=list)
    comments: List[CommentResponse] = Field(default_factory=list)
    comments_count: int = 0
    author: AuthorSummary

class PostEnvelope(BaseModel):
    post: PostResponse

class PostListResponse(BaseModel):
    posts: List[PostResponse]

class MessageResponse(BaseModel):
    message: str
