"""
API Client Module

Provides the async HTTP client and record types for the JSONPlaceholder API.
"""

from .client import APIClient
from .models import Address, Company, Post, ProfileSummary, User

__all__ = ["APIClient", "Address", "Company", "Post", "ProfileSummary", "User"]
