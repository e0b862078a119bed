"""
Profile Fetcher

Async client for the JSONPlaceholder users/posts API with chained,
awaited and fan-out orchestration of the user -> posts -> count pipeline.
"""

__version__ = "0.1.0"
