import math
import re
from newsdesk.extensions import db
from .base import BaseModel

WORDS_PER_MINUTE = 200


class Post(BaseModel):
    __tablename__ = "posts"

    title = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(255), nullable=False, unique=True, index=True)
    body = db.Column(db.Text, nullable=False, default="")
    excerpt = db.Column(db.String(500), nullable=True)

    tags = db.Column(db.JSON, nullable=False, default=list)
    categories = db.Column(db.JSON, nullable=False, default=list)  # external category ids

    # draft | review | scheduled | published | archived
    status = db.Column(db.String(20), nullable=False, default="draft", index=True)

    author_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False, index=True)
    author = db.relationship("User")

    published_at = db.Column(db.DateTime(timezone=True), nullable=True, index=True)
    scheduled_at = db.Column(db.DateTime(timezone=True), nullable=True)

    seo = db.Column(db.JSON(none_as_null=True), default=dict)
    reading_time = db.Column(db.Integer, nullable=False, default=0)  # minutes
    views = db.Column(db.Integer, nullable=False, default=0)

    __table_args__ = (
        db.Index("idx_post_status_published", "status", "published_at"),
    )

    def refresh_reading_time(self):
        words = len((self.body or "").split())
        self.reading_time = math.ceil(words / WORDS_PER_MINUTE)

    def generate_excerpt(self, length=150):
        if self.excerpt:
            return self.excerpt
        text = re.sub(r"<[^>]*>", "", self.body or "")
        return text[:length] + "..." if len(text) > length else text
