"""
Collaborator summaries (events, users, templates) embedded in responses
"""

from datetime import datetime
from typing import Dict, List, Optional
from pydantic import BaseModel

class UserSummary(BaseModel):
    """Public profile of a user"""
    id: str
    name: str
    email: str
    avatar: Optional[str] = None

    class Config:
        from_attributes = True

class EventSummary(BaseModel):
    """Event fields exposed to hosts and invitees"""
    id: str
    title: str
    date: Optional[datetime] = None
    venue: Optional[str] = None
    host_id: str
    template_slug: Optional[str] = None

    class Config:
        from_attributes = True

class TemplateAssets(BaseModel):
    images: List[str] = []
    colors: List[str] = []
    fonts: List[str] = []

class TemplateResponse(BaseModel):
    slug: str
    name: str
    title: str
    assets: Optional[TemplateAssets] = None

    class Config:
        from_attributes = True

class AssetMaps(BaseModel):
    """Merged, keyed asset bundle served to the invitation renderer"""
    images: Dict[str, str] = {}
    colors: Dict[str, str] = {}
    fonts: Dict[str, str] = {}
