import logging
from fastapi import APIRouter, Depends
from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session
from socialblog.core.errors import InvalidOperation, NotFoundOrForbidden
from socialblog.core.security import require_caller
from socialblog.db.database import get_session, insert_or_ignore
from socialblog.models.subscription import Subscription
from socialblog.models.user import User
from socialblog.schemas.follow import FollowStats, FollowStatus
from socialblog.schemas.post import MessageResponse
from socialblog.schemas.user import Identity

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/{user_id}", response_model=MessageResponse, summary="Follow a user")
def follow_user(
    user_id: int,
    current_user: Identity = Depends(require_caller),
    session: Session = Depends(get_session)
):
    """Follow a user; following twice is not an error"""
    if user_id == current_user.id:
        raise InvalidOperation("Cannot follow yourself")

    if session.get(User, user_id) is None:
        raise NotFoundOrForbidden("User not found")

    insert_or_ignore(
        session,
        Subscription,
        [{"follower_id": current_user.id, "followed_id": user_id}],
        ["follower_id", "followed_id"],
    )
    session.commit()

    logger.info("User %s followed user %s", current_user.id, user_id)
    return {"message": "Followed successfully"}

@router.delete("/{user_id}", response_model=MessageResponse, summary="Unfollow a user")
def unfollow_user(
    user_id: int,
    current_user: Identity = Depends(require_caller),
    session: Session = Depends(get_session)
):
    """Remove the follow edge if there is one"""
    session.execute(
        delete(Subscription).where(
            Subscription.follower_id == current_user.id,
            Subscription.followed_id == user_id
        )
    )
    session.commit()
    return {"message": "Unfollowed successfully"}

@router.get("/{user_id}/status", response_model=FollowStatus, summary="Whether the caller follows a user")
def follow_status(
    user_id: int,
    current_user: Identity = Depends(require_caller),
    session: Session = Depends(get_session)
):
    edge = session.get(Subscription, (current_user.id, user_id))
    return FollowStatus(is_following=edge is not None)

@router.get("/{user_id}/stats", response_model=FollowStats, summary="Following and follower counts of a user")
def follow_stats(
    user_id: int,
    session: Session = Depends(get_session)
):
    """Public counts of outgoing and incoming follow edges"""
    following = session.scalar(
        select(func.count()).select_from(Subscription).where(Subscription.follower_id == user_id)
    )
    followers = session.scalar(
        select(func.count()).select_from(Subscription).where(Subscription.followed_id == user_id)
    )
    return {"following": following or 0, "followers": followers or 0}
