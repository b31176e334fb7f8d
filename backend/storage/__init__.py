"""
Storage Module - In-memory user data and savings goals.
"""

from .user_store import (
    GoalNotFoundError,
    SavingsGoal,
    UserStore
)

__all__ = [
    'GoalNotFoundError',
    'SavingsGoal',
    'UserStore',
]
