"""
In-memory user data store.
Keeps the latest financial record and the savings goals per user. Nothing
is persisted; a process restart starts empty.
"""

import itertools
import logging
import threading
from dataclasses import asdict, dataclass
from typing import Optional

logger = logging.getLogger(__name__)


class GoalNotFoundError(LookupError):
    """Raised when a user or savings goal does not exist."""
    pass


@dataclass
class SavingsGoal:
    """User-authored savings target."""

    id: int
    name: str
    target: float
    current: float = 0.0
    deadline: Optional[str] = None

    def update_progress(self, amount: float):
        """Set progress, clamped to the range [0, target]."""
        self.current = max(0.0, min(float(amount), self.target))

    def to_dict(self) -> dict:
        return asdict(self)


class UserStore:
    """Thread-safe map of user id to financial record and savings goals."""

    def __init__(self):
        self._lock = threading.Lock()
        self._financial_data: dict[str, dict] = {}
        self._goals: dict[str, list[SavingsGoal]] = {}
        self._goal_ids = itertools.count(1)

    def save_financial_data(self, user_id: str, record: dict):
        """Replace the user's financial record; uploads never merge."""
        with self._lock:
            self._financial_data[user_id] = record
        logger.info(f"Stored financial data for user '{user_id}'")

    def get_financial_data(self, user_id: str) -> Optional[dict]:
        with self._lock:
            return self._financial_data.get(user_id)

    def add_goal(self, user_id: str, name: str, target: float, deadline: Optional[str] = None) -> SavingsGoal:
        """Create a goal with no progress."""
        with self._lock:
            goal = SavingsGoal(id=next(self._goal_ids), name=name, target=float(target), deadline=deadline)
            self._goals.setdefault(user_id, []).append(goal)
        logger.info(f"Created savings goal {goal.id} '{name}' for user '{user_id}'")
        return goal

    def get_goals(self, user_id: str) -> list[SavingsGoal]:
        with self._lock:
            return list(self._goals.get(user_id, []))

    def update_goal(self, user_id: str, goal_id: int, amount: float) -> SavingsGoal:
        """
        Record progress towards a goal.

        Raises:
            GoalNotFoundError: If the user has no goal with this id
        """
        with self._lock:
            for goal in self._goals.get(user_id, []):
                if goal.id == goal_id:
                    goal.update_progress(amount)
                    logger.info(f"Goal {goal_id} progress for '{user_id}': {goal.current:.2f}/{goal.target:.2f}")
                    return goal
        raise GoalNotFoundError(f"Goal {goal_id} not found for user '{user_id}'")

    def clear(self):
        with self._lock:
            self._financial_data.clear()
            self._goals.clear()
