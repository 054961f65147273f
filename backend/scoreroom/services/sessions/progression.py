from scoreroom.errors import SessionCompleted
from scoreroom.models import Session


def advance_category(session: Session) -> bool:
    """Open the next category, or complete the session after the last one.

    Returns True when the session was completed by this call.
    """
    if session.is_completed:
        raise SessionCompleted()
    if session.current_category_index < len(session.categories) - 1:
        session.current_category_index += 1
        return False
    session.is_completed = True
    session.is_active = False
    return True
