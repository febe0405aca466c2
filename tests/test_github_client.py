import asyncio
import json

import httpx

from contrib_pulse.github_client import (
    CONTRIBUTION_QUERY,
    FetchOutcomeError,
    GitHubClient,
    TransportError,
    parse_calendar,
)

from conftest import RecordingSleep, calendar_payload


def fetch(handler, username="octocat", **kwargs):
    sleep = RecordingSleep()

    async def go():
        client = GitHubClient(
            "test-token",
            sleep=sleep,
            transport=httpx.MockTransport(handler),
            **kwargs,
        )
        try:
            return await client.fetch_contribution_days(username)
        finally:
            await client.close()

    return asyncio.run(go()), sleep


def test_posts_graphql_query_with_bearer_token():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=calendar_payload([("2024-01-05", 2)]))

    result, sleep = fetch(handler)

    assert result.ok
    assert len(seen) == 1
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == "https://api.github.com/graphql"
    assert request.headers["Authorization"] == "Bearer test-token"
    assert json.loads(request.content) == {
        "query": CONTRIBUTION_QUERY,
        "variables": {"userName": "octocat"},
    }
    assert sleep.calls == []


def test_flattens_weeks_in_order():
    days = [(f"2024-01-{n:02d}", n % 3) for n in range(1, 11)]

    def handler(request):
        return httpx.Response(200, json=calendar_payload(days))

    result, _ = fetch(handler)

    assert [(day.date, day.count) for day in result.days] == days
    assert result.total_contributions == sum(count for _, count in days)


def test_retries_with_linear_backoff_then_gives_up():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(502)

    result, sleep = fetch(handler)

    assert len(calls) == 3
    assert sleep.calls == [2.0, 4.0]
    assert not result.ok
    assert result.days == []
    assert isinstance(result.error, FetchOutcomeError)
    assert result.error.username == "octocat"
    assert isinstance(result.error.cause, TransportError)
    assert result.error.cause.status_code == 502


def test_recovers_after_transient_failure():
    responses = iter([httpx.Response(500), httpx.Response(200, json=calendar_payload([("2024-01-05", 1)]))])

    def handler(request):
        return next(responses)

    result, sleep = fetch(handler)

    assert result.ok
    assert sleep.calls == [2.0]
    assert [day.date for day in result.days] == ["2024-01-05"]


def test_network_errors_are_retried():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    result, sleep = fetch(handler, max_retries=2, backoff_seconds=1.5)

    assert sleep.calls == [1.5]
    assert isinstance(result.error.cause, TransportError)
    assert result.error.cause.status_code is None


def test_invalid_json_is_a_transport_error():
    def handler(request):
        return httpx.Response(200, content=b"<html>oops</html>")

    result, sleep = fetch(handler)

    assert not result.ok
    assert sleep.calls == [2.0, 4.0]


def test_unknown_user_counts_as_no_contributions():
    def handler(request):
        return httpx.Response(
            200,
            json={
                "data": {"user": None},
                "errors": [{"type": "NOT_FOUND", "message": "Could not resolve to a User"}],
            },
        )

    result, sleep = fetch(handler, username="nobody")

    assert result.ok
    assert result.days == []
    assert result.total_contributions is None
    assert sleep.calls == []


def test_parse_calendar_tolerates_non_mapping_payload():
    result = parse_calendar("octocat", None)
    assert result.ok
    assert result.days == []


def test_single_attempt_fails_without_sleeping():
    def handler(request):
        return httpx.Response(500)

    result, sleep = fetch(handler, max_retries=1)

    assert sleep.calls == []
    assert isinstance(result.error, FetchOutcomeError)
    assert result.error.cause.status_code == 500
