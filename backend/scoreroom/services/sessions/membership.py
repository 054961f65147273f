from typing import Callable, Optional

from scoreroom.errors import DuplicateMemberName, SessionCompleted
from scoreroom.models import Member, Session


def add_member(session: Session, name: str, new_id: Callable[[], str]) -> Member:
    """Append a new online member; names are unique within a session."""
    if session.is_completed:
        raise SessionCompleted()
    if session.has_member_named(name):
        raise DuplicateMemberName()
    member = Member(id=new_id(), name=name, is_online=True)
    session.members.append(member)
    return member


def remove_member(session: Session, member_id: str) -> None:
    session.members = [m for m in session.members if m.id != member_id]


def mark_offline(session: Session, member_id: str) -> Optional[Member]:
    # Disconnected members keep their seat; only an explicit leave removes them
    member = session.find_member(member_id)
    if member is not None:
        member.is_online = False
    return member
