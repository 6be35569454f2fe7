from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session
from socialblog.db.database import get_session

router = APIRouter()

@router.get("", summary="Liveness probe with a store round-trip")
def health(session: Session = Depends(get_session)):
    session.execute(text("SELECT 1"))
    return {"status": "ok"}
