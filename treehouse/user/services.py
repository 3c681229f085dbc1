"""Service for user profiles."""

from __future__ import annotations

import io
from typing import TYPE_CHECKING, cast

from flask import current_app
from PIL import Image, ImageOps, UnidentifiedImageError

from treehouse.core import constants as c
from treehouse.errors import ValidationError
from treehouse.utils import profile_blob_path, upload_and_link
from treehouse.workflow import InvitedUser, UserProfile

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client

    from .models import UserDocument


def get_user_profile(db: Client, uid: str) -> UserProfile | None:
    """Point-read a user's profile; ``None`` if it does not exist."""
    user_doc = cast("DocumentSnapshot", db.collection(c.USERS_COLLECTION).document(uid).get())
    if not user_doc.exists:
        return None
    return UserProfile.from_dict(uid, user_doc.to_dict())


def ensure_user_profile(
    db: Client, uid: str, email: str
) -> tuple[UserProfile | None, bool]:
    """Return the user's profile, creating it on their first sign-in.

    Returns:
        tuple[UserProfile | None, bool]: (profile, created). The profile is
        ``None`` if Firestore could not be reached.
    """
    try:
        profile = get_user_profile(db, uid)
        if profile is not None:
            return profile, False

        user_data: UserDocument = {
            "uid": uid,
            "email": email or "",
            "username": "",
            "profileImageURL": "",
        }
        db.collection(c.USERS_COLLECTION).document(uid).set(user_data)
        current_app.logger.info(f"Created profile for new user {uid}.")
        return UserProfile.from_dict(uid, dict(user_data)), True
    except Exception as e:
        current_app.logger.error(f"Error creating user profile: {e}")
        return None, False


def get_invitees(db: Client, uids: list[str]) -> list[InvitedUser]:
    """Resolve the avatar of each uid, keeping the requested order.

    Unknown uids are skipped.
    """
    if not uids:
        return []
    refs = [db.collection(c.USERS_COLLECTION).document(uid) for uid in dict.fromkeys(uids)]
    profiles = {
        doc.id: UserProfile.from_dict(doc.id, doc.to_dict())
        for doc in db.get_all(refs)
        if doc.exists
    }
    missing = [uid for uid in uids if uid not in profiles]
    if missing:
        current_app.logger.warning(f"Ignoring unknown invitees: {missing}")
    return [InvitedUser.from_profile(profiles[uid]) for uid in uids if uid in profiles]


def set_username(db: Client, uid: str, username: str) -> bool:
    """Store a new username on the user's profile."""
    try:
        db.collection(c.USERS_COLLECTION).document(uid).update({c.USER_USERNAME: username})
        return True
    except Exception as e:
        current_app.logger.error(f"Error updating username: {e}")
        return False


def encode_profile_jpeg(image_bytes: bytes, quality: int) -> bytes:
    """Re-encode an uploaded image as a JPEG at a fixed quality.

    Raises:
        ValidationError: If the bytes are not an image Pillow can read.
    """
    try:
        with Image.open(io.BytesIO(image_bytes)) as img:
            rgb = ImageOps.exif_transpose(img).convert("RGB")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise ValidationError("Images only!") from e
    out = io.BytesIO()
    rgb.save(out, format="JPEG", quality=quality)
    return out.getvalue()


def upload_profile_picture(
    db: Client, uid: str, image_bytes: bytes, quality: int
) -> str | None:
    """Upload a profile photo and store its public URL on the profile."""
    jpeg = encode_profile_jpeg(image_bytes, quality)
    user_ref = db.collection(c.USERS_COLLECTION).document(uid)
    return upload_and_link(
        profile_blob_path(uid),
        jpeg,
        lambda url: user_ref.update({c.USER_PROFILE_IMAGE_URL: url}),
    )


def get_candidates(db: Client, uid: str, limit: int = 50) -> list[UserProfile]:
    """Users the signed-in user can pick from when creating a group."""
    query = db.collection(c.USERS_COLLECTION).limit(limit + 1).stream()
    candidates = []
    for doc in query:
        if doc.id == uid or not doc.exists:
            continue
        candidates.append(UserProfile.from_dict(doc.id, doc.to_dict()))
        if len(candidates) >= limit:
            break
    return candidates

