from sqlalchemy import Column, LargeBinary, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class KeyValueEntry(Base):
    __tablename__ = "kv_entries"

    key = Column(String, primary_key=True)
    value = Column(LargeBinary, nullable=False)  # Serialized snapshot (UTF-8 JSON for the roster)
    updated_at_utc = Column(String, nullable=False)  # ISO 8601 string
