from teamstock import db
from teamstock.utils.timestamps import utcnow


class StoredCollection(db.Model):
    """One JSON array blob per collection key"""

    __tablename__ = 'stored_collections'

    key = db.Column(db.String(64), primary_key=True)
    payload = db.Column(db.Text, nullable=False, default='[]')
    version = db.Column(db.Integer, nullable=False, default=1)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self):
        return f'<StoredCollection {self.key} v{self.version}>'
