from datetime import datetime
from pydantic import BaseModel, Field

class AuthorSummary(BaseModel):
    """作者摘要"""
    id: int = Field(..., description="用户ID")
    name: str = Field(..., description="用户名")

class CommentCreate(BaseModel):
    """创建评论请求模型"""
    content: str = Field(..., min_length=1, description="评论内容")

class CommentResponse(BaseModel):
    """评论响应模型"""
    id: int = Field(..., description="评论ID")
    content: str = Field(..., description="评论内容")
    created_at: datetime = Field(..., description="创建时间")
    author: AuthorSummary = Field(..., description="作者")

class CommentEnvelope(BaseModel):
    comment: CommentResponse
