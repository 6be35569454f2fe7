from pydantic import BaseModel, Field
from typing import List

class TagCount(BaseModel):
    """标签使用统计"""
    name: str = Field(..., description="标签名称")
    count: int = Field(..., description="关联文章数")

class TagListResponse(BaseModel):
    tags: List[TagCount]
