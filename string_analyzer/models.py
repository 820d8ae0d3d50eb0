from sqlalchemy import Column, String, Integer, Boolean, JSON
from string_analyzer.database import Base


class StringAnalysis(Base):
    __tablename__ = "strings"

    id = Column(String(64), primary_key=True, index=True)  # SHA-256 hash
    value = Column(String, unique=True, nullable=False, index=True)
    length = Column(Integer, nullable=False)
    is_palindrome = Column(Boolean, nullable=False)
    unique_characters = Column(Integer, nullable=False)
    word_count = Column(Integer, nullable=False)
    sha256_hash = Column(String(64), nullable=False)
    character_frequency_map = Column(JSON, nullable=False)
    # ISO 8601 with offset; SQLite DateTime columns drop the timezone
    created_at = Column(String, nullable=False)
