from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from socialblog.db.database import get_session
from socialblog.schemas.tag import TagListResponse
from socialblog.services.tags import tag_counts

router = APIRouter()

@router.get("", response_model=TagListResponse, summary="List all tags with their post counts")
def list_tags(
    session: Session = Depends(get_session)
):
    """List all tags, most used first"""
    return {"tags": [{"name": name, "count": count} for name, count in tag_counts(session)]}
