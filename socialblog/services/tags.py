from typing import Iterable, List
from sqlalchemy import delete, desc, func, select
from sqlalchemy.orm import Session
from socialblog.db.database import insert_or_ignore
from socialblog.models.post_tag import PostTag
from socialblog.models.tag import Tag


def normalize_tag_names(names: Iterable[str]) -> List[str]:
    """Strip, drop blanks and duplicates, keep first-seen order"""
    seen = []
    for name in names:
        name = name.strip()
        if name and name not in seen:
            seen.append(name)
    return seen


def get_or_create_tag_ids(session: Session, names: List[str]) -> List[int]:
    """Return tag ids for names in the given order, creating missing tags

    Creation goes through INSERT ... ON CONFLICT DO NOTHING followed by a
    read, so concurrent first use of a name cannot fail on the unique key.
    """
    if not names:
        return []
    insert_or_ignore(session, Tag, [{"name": name} for name in names], ["name"])
    rows = session.execute(select(Tag.name, Tag.id).where(Tag.name.in_(names))).all()
    ids_by_name = {name: tag_id for name, tag_id in rows}
    return [ids_by_name[name] for name in names]


def set_post_tags(session: Session, post_id: int, names: Iterable[str]) -> None:
    """Replace the tag links of a post with the given names"""
    session.execute(delete(PostTag).where(PostTag.post_id == post_id))
    tag_ids = get_or_create_tag_ids(session, normalize_tag_names(names))
    session.add_all(PostTag(post_id=post_id, tag_id=tag_id) for tag_id in tag_ids)


def tag_counts(session: Session):
    """(name, post count) for every tag, most used first"""
    count = func.count(PostTag.post_id).label("count")
    stmt = (
        select(Tag.name, count)
        .outerjoin(PostTag, PostTag.tag_id == Tag.id)
        .group_by(Tag.id, Tag.name)
        .order_by(desc(count), Tag.name)
    )
    return session.execute(stmt).all()
