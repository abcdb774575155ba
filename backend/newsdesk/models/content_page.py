from newsdesk.extensions import db
from .base import BaseModel


class ContentPage(BaseModel):
    """
    Live editorial draft of the landing content page.

    There is exactly one row, keyed by ``CONTENT_PAGE_SLUG``. Public
    readers never see this row; they read ``ContentPageVersion``.
    """
    __tablename__ = "content_pages"

    slug = db.Column(db.String(100), nullable=False, unique=True, index=True)
    # draft | review | scheduled | published
    status = db.Column(db.String(20), nullable=False, default="draft", index=True)
    sections = db.Column(db.JSON, nullable=False, default=list)
    seo = db.Column(db.JSON(none_as_null=True), nullable=True)

    version = db.Column(db.Integer, nullable=False, default=1)
    published_at = db.Column(db.DateTime(timezone=True), nullable=True)

    updated_by = db.Column(db.String(36), nullable=True)
