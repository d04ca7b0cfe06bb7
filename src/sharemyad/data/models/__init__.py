"""ORM models package for database tables.

This package provides SQLAlchemy ORM models representing database tables:
- UploadSession: One processed archive upload
- CreativeSetRecord: Creative sets detected within an upload
- FolderStructure: Folder hierarchy rows per creative set
- CreativeAsset: Files attributed to a creative set

All models inherit from the shared Base declarative class defined in data.db.
"""

from sharemyad.data.db import Base
from sharemyad.data.models.creative_asset import CreativeAsset
from sharemyad.data.models.creative_set import CreativeSetRecord
from sharemyad.data.models.folder_structure import FolderStructure
from sharemyad.data.models.upload_session import SessionStatus, UploadSession

__all__ = [
    "Base",
    "CreativeAsset",
    "CreativeSetRecord",
    "FolderStructure",
    "SessionStatus",
    "UploadSession",
]
