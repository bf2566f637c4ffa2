"""
Search options for the asset query builder
Every field is optional; a missing field means "unconstrained", never "match null"
"""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict


class AssetSearchOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None

    # Time ranges
    created_before: Optional[datetime] = None
    created_after: Optional[datetime] = None
    updated_before: Optional[datetime] = None
    updated_after: Optional[datetime] = None
    trashed_before: Optional[datetime] = None
    trashed_after: Optional[datetime] = None
    taken_before: Optional[datetime] = None
    taken_after: Optional[datetime] = None

    # Location / camera (exif)
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    make: Optional[str] = None
    model: Optional[str] = None
    lens_model: Optional[str] = None

    # Identity
    checksum: Optional[bytes] = None
    device_asset_id: Optional[str] = None
    device_id: Optional[str] = None
    library_id: Optional[str] = None
    user_ids: Optional[List[str]] = None

    # Paths
    encoded_video_path: Optional[str] = None
    original_path: Optional[str] = None
    preview_path: Optional[str] = None
    thumbnail_path: Optional[str] = None
    original_file_name: Optional[str] = None

    # Tri-state flags: None = unconstrained, True/False = must equal
    is_favorite: Optional[bool] = None
    is_offline: Optional[bool] = None
    is_visible: Optional[bool] = None
    is_archived: Optional[bool] = None
    is_encoded: Optional[bool] = None
    is_motion: Optional[bool] = None
    type: Optional[str] = None  # AssetType

    # Membership
    is_not_in_album: bool = False
    album_id: Optional[str] = None
    person_ids: Optional[List[str]] = None

    # Relations / inclusion
    with_exif: bool = False
    with_faces: bool = False
    with_people: bool = False
    with_owner: bool = False
    with_library: bool = False
    with_albums: bool = False
    with_stacked: bool = False
    with_archived: bool = False
    with_deleted: bool = False

    @property
    def include_deleted(self) -> bool:
        """A trash-date bound implies searching the trash."""
        return bool(self.with_deleted or self.trashed_after or self.trashed_before)

    @property
    def effective_is_archived(self) -> Optional[bool]:
        if self.is_archived is not None:
            return self.is_archived
        return None if self.with_archived else False
