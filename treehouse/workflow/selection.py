"""Member selection for a group that is being created."""

from __future__ import annotations

from dataclasses import dataclass, replace

from treehouse.core.constants import MAX_INVITEES

from .models import InvitedUser


@dataclass(frozen=True)
class InviteSelection:
    """The invitees picked so far by ``creator_uid``.

    Selection stops accepting new people once ``cap`` is reached. The cap is
    applied here, while picking, and never by rejecting the group write.
    """

    creator_uid: str
    invitees: tuple[InvitedUser, ...] = ()
    cap: int = MAX_INVITEES

    @property
    def uids(self) -> list[str]:
        return [invitee.uid for invitee in self.invitees]

    @property
    def is_full(self) -> bool:
        return len(self.invitees) >= self.cap

    def __contains__(self, uid: object) -> bool:
        return uid in self.uids

    def __len__(self) -> int:
        return len(self.invitees)

    def select(self, invitee: InvitedUser) -> InviteSelection:
        """Add ``invitee`` unless they are the creator, already picked, or the cap is hit."""
        if invitee.uid == self.creator_uid or invitee.uid in self or self.is_full:
            return self
        return replace(self, invitees=self.invitees + (invitee,))

    def toggle(self, invitee: InvitedUser) -> InviteSelection:
        """Deselect ``invitee`` if picked, otherwise try to select them."""
        if invitee.uid in self:
            remaining = tuple(i for i in self.invitees if i.uid != invitee.uid)
            return replace(self, invitees=remaining)
        return self.select(invitee)

    def select_all(self, invitees: list[InvitedUser]) -> tuple[InviteSelection, list[InvitedUser]]:
        """Select ``invitees`` in order, returning the new selection and the refused ones."""
        selection = self
        refused = []
        for invitee in invitees:
            updated = selection.select(invitee)
            if updated is selection and invitee.uid not in selection:
                refused.append(invitee)
            selection = updated
        return selection, refused
