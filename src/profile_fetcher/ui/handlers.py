"""
UI Handlers Module

Click handlers that tie the trigger control and output region to the API
client. Each handler disables its control before any request and enables
it again afterwards, whether the request succeeded or not.
"""

import logging
import random
from typing import Any, Optional

from ..api import APIClient
from ..config import config
from ..orchestration import Outcome
from ..orchestration.pipeline import STEP_ERRORS
from .controls import OutputRegion, TriggerControl
from .render import format_profile, format_step, render_error, render_posts


logger = logging.getLogger(__name__)


def validate_user_id(raw: str) -> Optional[int]:
    """
    Parse a typed user id.

    Returns:
        The id if it is an integer within the configured range, else None.
    """
    try:
        user_id = int(str(raw).strip())
    except ValueError:
        return None
    if not config.render.min_user_id <= user_id <= config.render.max_user_id:
        return None
    return user_id


def random_user_id() -> int:
    """Pick a user id in the configured range."""
    return random.randint(config.render.min_user_id, config.render.max_user_id)


async def handle_fetch_click(
    client: APIClient,
    control: TriggerControl,
    user_input: Any,
    output: OutputRegion,
    validate: bool = False
) -> Outcome:
    """
    Fetch a user and their posts, writing progress and the profile to output.

    The typed value is forwarded to the API unchanged unless validate is set,
    in which case an out-of-range id is reported without any request.

    Returns:
        Outcome whose value is (user, posts), or whose error is the failure
        that was displayed.
    """
    outcome = Outcome()
    user_id = user_input

    if validate:
        user_id = validate_user_id(user_input)
        if user_id is None:
            low, high = config.render.min_user_id, config.render.max_user_id
            error = ValueError(f"Please enter a user id between {low} and {high}")
            render_error(error, output)
            outcome.error = error
            return outcome

    control.disable()
    try:
        user = await client.fetch_user(user_id)
        outcome.completed_steps += 1
        output.replace(format_step(1, f"Fetched user: {user.name}"))

        posts = await client.fetch_user_posts(user.id)
        outcome.completed_steps += 1
        output.append(format_step(2, f"Fetched {len(posts)} posts"))

        output.append(format_profile(user, posts))
        outcome.value = (user, posts)
    except STEP_ERRORS as e:
        logger.error(f"Fetching user {user_input!r} failed: {e}")
        render_error(e, output)
        outcome.error = e
    finally:
        control.enable()

    return outcome


async def handle_search_click(
    client: APIClient,
    control: TriggerControl,
    term: str,
    output: OutputRegion
) -> Outcome:
    """Search posts and list the first matches."""
    outcome = Outcome()
    if not term.strip():
        outcome.error = ValueError("Please enter a search term")
        render_error(outcome.error, output)
        return outcome

    control.disable()
    output.replace("Searching...")
    try:
        matches = await client.search_posts(term)
        shown = matches[:config.render.max_search_results]
        render_posts(
            shown,
            output,
            f"Found {len(matches)} posts matching '{term}' (showing {len(shown)})"
        )
        outcome.value = matches
        outcome.completed_steps = 1
    except STEP_ERRORS as e:
        logger.error(f"Search for '{term}' failed: {e}")
        render_error(e, output)
        outcome.error = e
    finally:
        control.enable()

    return outcome


async def handle_create_click(
    client: APIClient,
    control: TriggerControl,
    title: str,
    body: str,
    user_id: Any,
    output: OutputRegion
) -> Outcome:
    """Create a post from the typed title and body."""
    outcome = Outcome()
    if not title.strip() or not body.strip():
        outcome.error = ValueError("Title and body are required")
        render_error(outcome.error, output)
        return outcome

    control.disable()
    try:
        post = await client.create_post(title, body, int(user_id))
        output.replace(
            f"Post created! ID: {post.id}\n"
            f"Title: {post.title}\n"
            f"User: {post.user_id}"
        )
        outcome.value = post
        outcome.completed_steps = 1
    except STEP_ERRORS as e:
        logger.error(f"Creating post failed: {e}")
        render_error(e, output)
        outcome.error = e
    finally:
        control.enable()

    return outcome
