"""Profile edits shared by tenants, landlords and caretakers."""
from app.schemas.tenant import ProfileUpdate


def apply_profile_update(profile, data: ProfileUpdate) -> None:
    """Copy name/phone/photo_url onto the profile; fields that are not strings keep their value."""
    for field in ("name", "phone", "photo_url"):
        value = getattr(data, field)
        if isinstance(value, str):
            setattr(profile, field, value)
