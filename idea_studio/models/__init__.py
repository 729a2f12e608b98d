# Database models package
from .user import User
from .idea import Idea

__all__ = ["User", "Idea"]
