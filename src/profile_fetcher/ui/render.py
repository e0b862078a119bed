"""
Rendering Module

Formats users, posts and errors into text for an OutputRegion.
"""

from typing import Optional, Sequence

from ..api import Post, User
from ..config import config
from .controls import OutputRegion


def format_step(number: int, message: str) -> str:
    return f"Step {number}: {message}"


def format_profile(
    user: User,
    posts: Sequence[Post],
    max_posts: Optional[int] = None
) -> str:
    """
    Format a user's profile and their most recent post titles.

    Args:
        user: The fetched user.
        posts: The user's posts.
        max_posts: How many titles to list (uses config default if None).

    Returns:
        Multi-line profile text.
    """
    if max_posts is None:
        max_posts = config.render.max_recent_posts
    lines = [
        user.name,
        f"Username: {user.username}",
        f"Email: {user.email}",
        f"City: {user.address.city}",
        f"Company: {user.company.name}",
        "Recent Posts:",
    ]
    lines.extend(f"  - {post.title}" for post in posts[:max_posts])
    return "\n".join(lines)


def render_profile(user: User, posts: Sequence[Post], output: OutputRegion) -> None:
    """Replace the output region's content with the user's profile."""
    output.replace(format_profile(user, posts))


def render_error(error: Exception, output: OutputRegion) -> None:
    output.replace(f"Error: {error}")


def render_posts(posts: Sequence[Post], output: OutputRegion, heading: str) -> None:
    """Replace the output with a heading and one line per post."""
    lines = [heading]
    lines.extend(f"  [{post.id}] {post.title}" for post in posts)
    output.replace("\n".join(lines))
