from sqlalchemy import event
from newsdesk.extensions import db
from .base import BaseModel


class ContentPageVersion(BaseModel):
    __tablename__ = "content_page_versions"

    page_id = db.Column(
        db.String(36),
        db.ForeignKey("content_pages.id"),
        nullable=False
    )

    version = db.Column(db.Integer, nullable=False)
    snapshot = db.Column(db.JSON, nullable=False)
    published_at = db.Column(db.DateTime(timezone=True), nullable=False)

    created_by = db.Column(db.String(36), nullable=True)

    __table_args__ = (
        db.UniqueConstraint("page_id", "version", name="uq_content_page_version"),
        db.Index("idx_content_page_version_page", "page_id"),
    )


@event.listens_for(ContentPageVersion, 'before_update')
@event.listens_for(ContentPageVersion, 'before_delete')
def prevent_snapshot_mutation(mapper, connection, target):
    raise RuntimeError("Published snapshots are immutable")
