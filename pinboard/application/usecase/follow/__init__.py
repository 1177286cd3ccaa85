"""Follow use cases."""

from .follow_user import FollowStateResponse, FollowUserRequest, FollowUserUseCase
from .unfollow_user import UnfollowUserRequest, UnfollowUserUseCase

__all__ = [
    "FollowStateResponse",
    "FollowUserRequest",
    "FollowUserUseCase",
    "UnfollowUserRequest",
    "UnfollowUserUseCase",
]
