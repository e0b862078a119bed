"""
Orchestration Module

The three ways of running the user -> posts -> count pipeline:

1. run_chained: explicit step chain with one error handler and a final handler
2. show_user_data: ordered awaits inside try/except/finally
3. show_multiple_users: one pipeline per id, run concurrently, fail-fast join

Each is an independent entry point returning an Outcome.
"""

import logging
from typing import Any, Iterable

from ..api import APIClient, ProfileSummary
from .pipeline import STEP_ERRORS, Chain, Outcome, gather_fail_fast


logger = logging.getLogger(__name__)

# fetch user, fetch posts, count posts
PIPELINE_STEPS = 3


async def run_chained(client: APIClient, user_id: Any) -> Outcome:
    """
    Fetch a user, their posts and the post count as a chain of steps.

    Returns:
        Outcome whose value is the post count, or whose error is the first
        failure from any step.
    """
    async def fetch_user(_):
        return await client.fetch_user(user_id)

    async def fetch_posts(user):
        logger.info(f"User found: {user.name}")
        return await client.fetch_user_posts(user.id)

    async def count_posts(posts):
        logger.info(f"Found {len(posts)} posts")
        count = await client.fetch_post_count(posts)
        logger.info(f"Total posts: {count}")
        return count

    chain = (
        Chain(fetch_user)
        .then(fetch_posts)
        .then(count_posts)
        .catch(lambda error: logger.error(f"Error: {error}"))
        .finally_(lambda: logger.info("Process Complete"))
    )
    return await chain.run()


async def show_user_data(client: APIClient, user_id: Any) -> Outcome:
    """
    Same pipeline as run_chained, written as ordered awaits.

    Returns:
        Outcome whose value is the post count.
    """
    outcome = Outcome()
    try:
        user = await client.fetch_user(user_id)
        outcome.completed_steps += 1
        logger.info(f"Welcome {user.name}")

        posts = await client.fetch_user_posts(user.id)
        outcome.completed_steps += 1
        logger.info(f"You have {len(posts)} posts")

        count = await client.fetch_post_count(posts)
        outcome.completed_steps += 1
        logger.info(f"Post count: {count}")

        outcome.value = count
    except STEP_ERRORS as e:
        outcome.error = e
        logger.error(f"Failure due to: {e}")
    finally:
        logger.info("Done")

    return outcome


async def run_pipeline(client: APIClient, user_id: Any) -> ProfileSummary:
    """Fetch user, fetch posts, count posts for a single id."""
    user = await client.fetch_user(user_id)
    posts = await client.fetch_user_posts(user.id)
    count = await client.fetch_post_count(posts)
    return ProfileSummary(name=user.name, post_count=count)


async def show_multiple_users(client: APIClient, user_ids: Iterable[Any]) -> Outcome:
    """
    Run one pipeline per id concurrently and collect the summaries.

    If any pipeline fails the whole run fails: the outcome carries that
    error and an empty result list, and unfinished pipelines are cancelled.

    Returns:
        Outcome whose value is a list of ProfileSummary in input order.
        completed_steps counts steps across all pipelines, and is 0 on
        failure since partial results are discarded.
    """
    user_ids = list(user_ids)
    outcome = Outcome(value=[])
    try:
        results = await gather_fail_fast(
            run_pipeline(client, user_id) for user_id in user_ids
        )
        outcome.value = list(results)
        outcome.completed_steps = PIPELINE_STEPS * len(results)
        logger.info(
            "Users and their post counts: "
            f"{[summary.to_dict() for summary in results]}"
        )
    except STEP_ERRORS as e:
        outcome.error = e
        logger.error(f"Error fetching multiple users: {e}")
    finally:
        logger.info("All fetches complete")

    return outcome
