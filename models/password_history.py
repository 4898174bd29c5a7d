# models/password_history.py
from sqlalchemy import DateTime
from extensions.database import db
from utils.datetime_helpers import utcnow


class PasswordHistoryEntry(db.Model):
    __tablename__ = "password_history"
    __table_args__ = (
        db.Index("ix_password_history_user_changed", "user_id", "changed_at"),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    changed_at = db.Column(DateTime, nullable=False, default=utcnow)

    user = db.relationship("User", back_populates="password_history")

    def __repr__(self):
        return f"<PasswordHistoryEntry id={self.id} user_id={self.user_id} changed_at={self.changed_at}>"
