"""
CRUD operations (Create, Read, Update, Delete) for the companies, users and
jobs tables.

This layer keeps the SQL out of the API routes, following the Repository pattern.
"""

from app.crud import company, job, user

__all__ = ["company", "job", "user"]
