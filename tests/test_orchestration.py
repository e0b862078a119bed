"""
Tests for Orchestration

Tests for the step chain, the awaited sequence and the fail-fast fan-out,
including their relative timing.
"""

import asyncio
import time
from unittest.mock import Mock

import pytest

from profile_fetcher.api.models import ProfileSummary
from profile_fetcher.errors import InvalidResponseError, NotFoundError
from profile_fetcher.orchestration import (
    PIPELINE_STEPS,
    Chain,
    gather_fail_fast,
    run_chained,
    show_multiple_users,
    show_user_data,
)


STEP_LATENCY = 0.1


class TestChain:
    """Tests for the explicit step chain."""

    def test_passes_values_between_steps(self):
        async def start(_):
            return 1

        async def add_one(value):
            return value + 1

        outcome = asyncio.run(Chain(start).then(add_one).then(add_one).run())

        assert outcome.ok
        assert outcome.value == 3
        assert outcome.completed_steps == 3

    def test_failure_skips_remaining_steps(self):
        later = Mock()

        async def fail(_):
            raise NotFoundError(404)

        async def never(value):
            later(value)

        on_error = Mock()
        on_finally = Mock()
        outcome = asyncio.run(
            Chain(fail).then(never).catch(on_error).finally_(on_finally).run()
        )

        assert not outcome.ok
        assert outcome.value is None
        assert outcome.completed_steps == 0
        later.assert_not_called()
        on_error.assert_called_once_with(outcome.error)
        on_finally.assert_called_once_with()

    def test_finally_runs_on_success(self):
        async def start(_):
            return "ok"

        on_error = Mock()
        on_finally = Mock()
        asyncio.run(Chain(start).catch(on_error).finally_(on_finally).run())

        on_error.assert_not_called()
        on_finally.assert_called_once_with()

    def test_unexpected_errors_propagate(self):
        async def broken(_):
            raise KeyError("bug")

        on_finally = Mock()
        with pytest.raises(KeyError):
            asyncio.run(Chain(broken).finally_(on_finally).run())

        on_finally.assert_called_once_with()


class TestSequentialModes:
    """Tests for run_chained and show_user_data."""

    @pytest.mark.parametrize("mode", [run_chained, show_user_data])
    def test_success_returns_count(self, client, mode):
        outcome = asyncio.run(mode(client, 1))

        assert outcome.ok
        assert outcome.value == 7
        assert outcome.completed_steps == 3

    @pytest.mark.parametrize("mode", [run_chained, show_user_data])
    def test_missing_user_caught_once(self, client, mode):
        outcome = asyncio.run(mode(client, 99))

        assert not outcome.ok
        assert isinstance(outcome.error, NotFoundError)
        assert "404" in str(outcome.error)
        assert outcome.completed_steps == 0

    @pytest.mark.parametrize("mode", [run_chained, show_user_data])
    def test_posts_failure_stops_before_count(self, client, mode):
        client.fetch_post_count = Mock(side_effect=AssertionError("count reached"))

        async def failing_posts(user_id):
            raise NotFoundError(500)

        client.fetch_user_posts = failing_posts

        outcome = asyncio.run(mode(client, 1))

        assert outcome.error.status_code == 500
        assert outcome.completed_steps == 1
        client.fetch_post_count.assert_not_called()

    @pytest.mark.parametrize("mode", [run_chained, show_user_data])
    def test_time_is_sum_of_steps(self, make_client, mode):
        client = make_client(latency=STEP_LATENCY, count_delay=STEP_LATENCY)

        start = time.perf_counter()
        outcome = asyncio.run(mode(client, 1))
        elapsed = time.perf_counter() - start

        assert outcome.ok
        assert elapsed >= 3 * STEP_LATENCY * 0.9

    def test_chained_logs_completion_on_failure(self, client, caplog):
        with caplog.at_level("INFO", logger="profile_fetcher"):
            asyncio.run(run_chained(client, 99))

        messages = [record.getMessage() for record in caplog.records]
        assert any("404" in message for message in messages)
        assert messages[-1] == "Process Complete"

    @pytest.mark.parametrize("mode", [run_chained, show_user_data])
    def test_empty_id_caught_once(self, client, mode):
        outcome = asyncio.run(mode(client, ""))

        assert not outcome.ok
        assert isinstance(outcome.error, InvalidResponseError)
        assert outcome.completed_steps == 0

    @pytest.mark.parametrize("user_id,ok", [(1, True), (99, False), ("", False)])
    def test_awaited_logs_done(self, client, caplog, user_id, ok):
        with caplog.at_level("INFO", logger="profile_fetcher"):
            outcome = asyncio.run(show_user_data(client, user_id))

        messages = [record.getMessage() for record in caplog.records]
        assert outcome.ok is ok
        assert messages[-1] == "Done"
        assert any(message.startswith("Failure due to") for message in messages) is not ok


class TestFanOut:
    """Tests for show_multiple_users and gather_fail_fast."""

    def test_results_in_input_order(self, client):
        outcome = asyncio.run(show_multiple_users(client, [1, 2, 3]))

        assert outcome.ok
        assert outcome.value == [
            ProfileSummary("Leanne Graham", 7),
            ProfileSummary("Ervin Howell", 2),
            ProfileSummary("Clementine Bauch", 4),
        ]

    def test_order_follows_input_not_completion(self, client):
        outcome = asyncio.run(show_multiple_users(client, [3, 1]))

        assert [summary.name for summary in outcome.value] == [
            "Clementine Bauch",
            "Leanne Graham",
        ]

    def test_one_invalid_id_yields_no_results(self, client):
        outcome = asyncio.run(show_multiple_users(client, [1, 99, 3]))

        assert not outcome.ok
        assert outcome.value == []
        assert isinstance(outcome.error, NotFoundError)
        assert outcome.error.status_code == 404

    def test_empty_id_fails_whole_run(self, client):
        outcome = asyncio.run(show_multiple_users(client, [1, "", 2]))

        assert outcome.value == []
        assert isinstance(outcome.error, InvalidResponseError)

    @pytest.mark.parametrize("user_ids,ok", [([1, 2], True), ([1, 99], False)])
    def test_logs_completion(self, client, caplog, user_ids, ok):
        with caplog.at_level("INFO", logger="profile_fetcher"):
            outcome = asyncio.run(show_multiple_users(client, user_ids))

        messages = [record.getMessage() for record in caplog.records]
        assert outcome.ok is ok
        assert messages[-1] == "All fetches complete"
        assert any(
            message.startswith("Error fetching multiple users") for message in messages
        ) is not ok

    def test_counts_every_pipeline_step(self, client):
        outcome = asyncio.run(show_multiple_users(client, [1, 2, 3]))

        assert outcome.completed_steps == 3 * PIPELINE_STEPS

    def test_failure_reports_no_completed_steps(self, client):
        outcome = asyncio.run(show_multiple_users(client, [1, 99]))

        assert outcome.completed_steps == 0

    def test_empty_input(self, client):
        outcome = asyncio.run(show_multiple_users(client, []))

        assert outcome.ok
        assert outcome.value == []

    def test_time_is_max_not_sum(self, make_client):
        client = make_client(latency=STEP_LATENCY, count_delay=STEP_LATENCY)

        start = time.perf_counter()
        outcome = asyncio.run(show_multiple_users(client, [1, 2, 3]))
        elapsed = time.perf_counter() - start

        assert outcome.ok
        single_pipeline = 3 * STEP_LATENCY
        assert elapsed >= single_pipeline * 0.9
        assert elapsed < 2 * single_pipeline

    def test_failure_cancels_unfinished(self):
        cancelled = []

        async def slow():
            try:
                await asyncio.sleep(5)
            except asyncio.CancelledError:
                cancelled.append(True)
                raise

        async def fail():
            await asyncio.sleep(0.01)
            raise NotFoundError(404)

        async def run():
            start = time.perf_counter()
            with pytest.raises(NotFoundError):
                await gather_fail_fast([slow(), fail()])
            return time.perf_counter() - start

        elapsed = asyncio.run(run())

        assert cancelled == [True]
        assert elapsed < 1

    def test_gather_returns_in_order(self):
        async def value_after(value, delay):
            await asyncio.sleep(delay)
            return value

        results = asyncio.run(
            gather_fail_fast([value_after("a", 0.05), value_after("b", 0.0)])
        )

        assert results == ["a", "b"]
