from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class Category:
    id: str
    name: str

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
        }


@dataclass
class Member:
    id: str
    name: str
    is_online: bool = True

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'isOnline': self.is_online,
        }


@dataclass
class CategoryScore:
    category_id: str
    member_id: str
    member_name: str
    score: float
    timestamp: str

    def to_dict(self):
        return {
            'categoryId': self.category_id,
            'memberId': self.member_id,
            'memberName': self.member_name,
            'score': self.score,
            'timestamp': self.timestamp,
        }


@dataclass
class CategoryResult:
    category_id: str
    category_name: str
    scores: List[CategoryScore] = field(default_factory=list)
    mean_score: float = 0
    total_responses: int = 0
    expected_responses: int = 0

    def to_dict(self):
        return {
            'categoryId': self.category_id,
            'categoryName': self.category_name,
            'scores': [s.to_dict() for s in self.scores],
            'meanScore': self.mean_score,
            'totalResponses': self.total_responses,
            'expectedResponses': self.expected_responses,
        }


@dataclass
class Session:
    id: str
    name: str
    facilitator_name: str
    created_at: str
    categories: List[Category] = field(default_factory=list)
    current_category_index: int = 0
    members: List[Member] = field(default_factory=list)
    # Keyed by category id, insertion order = first score received
    results: Dict[str, CategoryResult] = field(default_factory=dict)
    is_active: bool = True
    is_completed: bool = False

    @property
    def current_category(self) -> Optional[Category]:
        if 0 <= self.current_category_index < len(self.categories):
            return self.categories[self.current_category_index]
        return None

    def find_member(self, member_id: str) -> Optional[Member]:
        for member in self.members:
            if member.id == member_id:
                return member
        return None

    def has_member_named(self, name: str) -> bool:
        return any(m.name == name for m in self.members)

    def results_to_dict(self):
        return {cid: result.to_dict() for cid, result in self.results.items()}

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'facilitatorName': self.facilitator_name,
            'createdAt': self.created_at,
            'categories': [c.to_dict() for c in self.categories],
            'currentCategoryIndex': self.current_category_index,
            'members': [m.to_dict() for m in self.members],
            'results': self.results_to_dict(),
            'isActive': self.is_active,
            'isCompleted': self.is_completed,
        }
