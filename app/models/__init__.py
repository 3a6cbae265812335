"""
Database models package.
"""

from app.models.company import Company
from app.models.user import User
from app.models.job import Job

__all__ = ["Company", "User", "Job"]
