from scoreroom.errors import CategoryMismatch, SessionCompleted
from scoreroom.models import CategoryResult, CategoryScore, Session


def submit_score(session: Session, category_id: str, member_id: str, member_name: str,
                 score: float, timestamp: str) -> CategoryResult:
    """Record ``score`` for the open category and refresh its aggregates.

    A member holds at most one score per category; resubmitting replaces the
    earlier value. When the session has no current category (no categories
    at all) the category check is skipped and the raw id names the result.
    """
    if session.is_completed:
        raise SessionCompleted()
    current = session.current_category
    if current is not None and current.id != category_id:
        raise CategoryMismatch()

    result = session.results.get(category_id)
    if result is None:
        name = current.name if current is not None and current.id == category_id else category_id
        result = CategoryResult(category_id=category_id, category_name=name)
        session.results[category_id] = result

    result.scores = [s for s in result.scores if s.member_id != member_id]
    result.scores.append(CategoryScore(
        category_id=category_id,
        member_id=member_id,
        member_name=member_name,
        score=score,
        timestamp=timestamp,
    ))
    recompute(result, len(session.members))
    return result


def recompute(result: CategoryResult, member_count: int) -> None:
    # expected_responses tracks membership at write time, not at category open
    result.total_responses = len(result.scores)
    if result.total_responses:
        result.mean_score = sum(s.score for s in result.scores) / result.total_responses
    else:
        result.mean_score = 0
    result.expected_responses = member_count
