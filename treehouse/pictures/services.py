"""Service layer for captured pictures."""

from __future__ import annotations

from typing import TYPE_CHECKING

from firebase_admin import firestore

from treehouse.core import constants as c
from treehouse.utils import picture_blob_path, upload_and_link
from treehouse.workflow import Picture, UserProfile

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client
    from google.cloud.firestore_v1.document import DocumentReference

    from .models import PictureDocument


def new_picture_ref(db: Client, uid: str) -> DocumentReference:
    """Reserve an auto-id under ``users/{uid}/Picture``."""
    return (
        db.collection(c.USERS_COLLECTION)
        .document(uid)
        .collection(c.PICTURES_SUBCOLLECTION)
        .document()
    )


def picture_payload(
    profile: UserProfile, url: str, group_id: str = ""
) -> PictureDocument:
    payload: PictureDocument = {
        "uid": profile.uid,
        "username": profile.username,
        "imageURL": url,
        "timestamp": firestore.SERVER_TIMESTAMP,
    }
    if group_id:
        payload["groupId"] = group_id
    return payload


def save_personal_picture(
    db: Client, profile: UserProfile, image_bytes: bytes
) -> Picture | None:
    """Add a captured photo to the user's own history."""
    picture_ref = new_picture_ref(db, profile.uid)
    url = upload_and_link(
        picture_blob_path(profile.uid, picture_ref.id),
        image_bytes,
        lambda url: picture_ref.set(picture_payload(profile, url)),
    )
    if url is None:
        return None
    return Picture(
        id=picture_ref.id, uid=profile.uid, username=profile.username, image_url=url
    )


def get_latest_picture(db: Client, uid: str) -> Picture | None:
    """Return the user's most recent picture, if any."""
    query = (
        db.collection(c.USERS_COLLECTION)
        .document(uid)
        .collection(c.PICTURES_SUBCOLLECTION)
        .order_by(c.PICTURE_TIMESTAMP, direction=firestore.Query.DESCENDING)
        .limit(1)
    )
    for doc in query.stream():
        return Picture.from_dict(doc.id, doc.to_dict())
    return None
