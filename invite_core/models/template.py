"""
Invitation template model (read-only catalogue entry)
"""

import uuid
from sqlalchemy import Column, String, JSON

from invite_core.core.db import Base

class Template(Base):
    __tablename__ = "templates"

    id = Column(String(36), primary_key=True, default=lambda: uuid.uuid4().hex)
    slug = Column(String(100), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    title = Column(String(255), nullable=False)
    # {"images": [...], "colors": [...], "fonts": [...]} ordered defaults
    assets = Column(JSON, nullable=True)
