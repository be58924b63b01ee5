"""
Helpers for inserting test data directly into the store.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from maskshare.models import Masks, MaskTags, Users


async def create_user(
    db_session: AsyncSession,
    google_id: str = "google-uploader",
    name: str = "Uploader",
    can_comment: bool = True,
    can_upload: bool = True,
) -> Users:
    """Insert a user directly into the store."""
    user = Users(
        google_id=google_id,
        name=name,
        photo_url=None,
        can_comment=can_comment,
        can_upload=can_upload,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


async def create_mask(
    db_session: AsyncSession,
    mask_id: int,
    uploader_google_id: str = "google-uploader",
    name: str | None = None,
    tags: list[str] | None = None,
    **overrides,
) -> Masks:
    """Insert a mask with a chosen id directly into the store."""
    tags = tags or []
    mask = Masks(
        mask_id=mask_id,
        mask_url=f"https://cdn.example.com/masks/{mask_id}.json",
        name=name or f"Mask {mask_id}",
        description=None,
        images=[f"https://cdn.example.com/masks/{mask_id}.png"],
        tags=tags,
        uploader_google_id=uploader_google_id,
        **overrides,
    )
    db_session.add(mask)
    await db_session.flush()
    db_session.add_all(MaskTags(mask_id=mask_id, tag=tag) for tag in tags)
    await db_session.commit()
    await db_session.refresh(mask)
    return mask
