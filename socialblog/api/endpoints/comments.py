import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from socialblog.db.database import get_session
from socialblog.models.comment import Comment
from socialblog.schemas.comment import CommentCreate, CommentEnvelope
from socialblog.schemas.user import Identity
from socialblog.core.security import require_caller
from socialblog.services.feed import get_visible_post, serialize_comment

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("", response_model=CommentEnvelope, summary="Create a comment on a post")
def create_comment(
    post_id: int,
    comment: CommentCreate,
    current_user: Identity = Depends(require_caller),
    session: Session = Depends(get_session)
):
    """Create a comment on a post the caller can see"""
    # Private posts are indistinguishable from missing ones here
    get_visible_post(session, current_user, post_id)

    db_comment = Comment(
        post_id=post_id,
        user_id=current_user.id,
        content=comment.content,
    )
    session.add(db_comment)
    session.commit()
    session.refresh(db_comment)

    logger.info("User %s commented on post %s", current_user.id, post_id)
    return {"comment": serialize_comment(db_comment)}
