from typing import Optional

from pwanalyzer import db


class StoredValue(db.Model):
    __tablename__ = 'stored_value'
    key   = db.Column(db.String(120), primary_key=True)
    value = db.Column(db.Text, nullable=False)


class SQLStorage:
    """Key-value storage on the StoredValue table. Needs an app context."""

    def get(self, key: str) -> Optional[str]:
        row = db.session.get(StoredValue, key)
        return row.value if row else None

    def set(self, key: str, value: str) -> None:
        row = db.session.get(StoredValue, key)
        if row is None:
            db.session.add(StoredValue(key=key, value=value))
        else:
            row.value = value
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
