# Journal_app/models/journal_entry.py

from datetime import datetime

from Journal_app.extensions import db
from Journal_app.utils import isoformat_z


class JournalEntry(db.Model):
    __tablename__ = 'journal_entries'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    title = db.Column(db.String(200), nullable=False)
    content = db.Column(db.Text, nullable=False)
    date = db.Column(db.DateTime, nullable=False)
    mood = db.Column(db.String(10))  # positive, neutral, negative
    tags = db.Column(db.JSON, default=list)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    __table_args__ = (
        db.Index('idx_journal_entries_user_date', 'user_id', 'date'),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "title": self.title,
            "content": self.content,
            "date": isoformat_z(self.date),
            "mood": self.mood,
            "tags": list(self.tags or []),
            "createdAt": isoformat_z(self.created_at),
        }
