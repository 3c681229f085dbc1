"""Service layer for group operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from firebase_admin import firestore
from flask import current_app

from treehouse.core import constants as c
from treehouse.pictures.services import new_picture_ref, picture_payload
from treehouse.user.services import get_user_profile
from treehouse.utils import picture_blob_path, upload_and_link
from treehouse.workflow import Group, InviteSelection, UserProfile

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client
    from google.cloud.firestore_v1.document import DocumentReference

    from .models import GroupDocument


class GroupService:
    """Service class for group-related operations."""

    @staticmethod
    def _groups(db: Client, uid: str):
        return (
            db.collection(c.USERS_COLLECTION)
            .document(uid)
            .collection(c.GROUPS_SUBCOLLECTION)
        )

    @staticmethod
    def group_ref(db: Client, uid: str, group_id: str) -> DocumentReference:
        """Return ``users/{uid}/groups/{group_id}``."""
        return GroupService._groups(db, uid).document(group_id)

    @staticmethod
    def create_group(
        db: Client, selection: InviteSelection, group_name: str
    ) -> Group | None:
        """Create a group and write one copy of it for every member.

        The creator's avatar is read first; members are the creator followed
        by the invitees in selection order, and the creator's avatar is the
        group's placeholder image. All copies share one generated id and are
        written in a single batch, so either every member gets the group or
        none does. Returns ``None`` if anything failed.
        """
        try:
            creator = get_user_profile(db, selection.creator_uid)
            if creator is None:
                current_app.logger.error(
                    f"Cannot create group: no profile for {selection.creator_uid}."
                )
                return None

            group_id = GroupService._groups(db, creator.uid).document().id
            group = Group(
                id=group_id,
                group_name=group_name,
                members=(creator.profile_image_url,)
                + tuple(i.profile_image_url for i in selection.invitees),
                members_uid=(creator.uid,) + tuple(selection.uids),
                group_image_url=creator.profile_image_url,
                created_by=creator.uid,
                timestamp=firestore.SERVER_TIMESTAMP,
            )

            payload = cast("GroupDocument", group.to_dict())
            batch = db.batch()
            for uid in group.members_uid:
                batch.set(GroupService.group_ref(db, uid, group_id), payload)
            batch.commit()
        except Exception as e:
            current_app.logger.error(f"Error creating group: {e}")
            return None

        current_app.logger.info(
            f"Group {group_id} created by {creator.uid} for "
            f"{len(group.members_uid)} members."
        )
        return group

    @staticmethod
    def list_groups(db: Client, uid: str) -> list[Group]:
        """Return the user's copies of their groups, newest first."""
        query = GroupService._groups(db, uid).order_by(
            c.GROUP_TIMESTAMP, direction=firestore.Query.DESCENDING
        )
        return [Group.from_dict(doc.id, doc.to_dict()) for doc in query.stream()]

    @staticmethod
    def get_group(db: Client, uid: str, group_id: str) -> Group | None:
        """Return the user's copy of a group, or ``None`` if they have none."""
        doc = cast("DocumentSnapshot", GroupService.group_ref(db, uid, group_id).get())
        if not doc.exists:
            return None
        return Group.from_dict(doc.id, doc.to_dict())

    @staticmethod
    def share_photo(
        db: Client,
        group: Group,
        poster: UserProfile,
        image_bytes: bytes,
        fanout: bool = True,
    ) -> str | None:
        """Upload a photo and make it the group's current image.

        With ``fanout`` every member's copy is updated; without it only the
        poster's copy changes and the other copies keep their old image. The
        final write is one batch, so a failure leaves every copy as it was.
        """
        picture_ref = new_picture_ref(db, poster.uid)
        targets = [poster.uid]
        if fanout and group.members_uid:
            targets = list(dict.fromkeys(group.members_uid + (poster.uid,)))

        def link(url: str) -> None:
            update = {
                c.GROUP_IMAGE_URL: url,
                c.GROUP_POSTED_UIDS: firestore.ArrayUnion([poster.uid]),
            }
            batch = db.batch()
            for uid in targets:
                batch.update(GroupService.group_ref(db, uid, group.id), update)
            batch.set(picture_ref, picture_payload(poster, url, group.id))
            batch.commit()

        return upload_and_link(
            picture_blob_path(poster.uid, picture_ref.id), image_bytes, link
        )
