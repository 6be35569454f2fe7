from pydantic import BaseModel, ConfigDict, Field

class FollowStatus(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_following: bool = Field(..., alias="isFollowing")

class FollowStats(BaseModel):
    """Outgoing and incoming edge counts for one user"""
    following: int
    followers: int
