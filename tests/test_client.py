"""Tests for the PowerSchool client lifecycle and GET requests."""

import asyncio

import httpx
import pytest

from powerschool_client import (
    Credentials,
    Failed,
    Initializing,
    NotReadyError,
    PowerSchoolClient,
    QueryOptions,
    Ready,
    TokenFetchError,
)
from powerschool_client.errors import NOT_READY_MESSAGE, NotFoundError
from powerschool_client.testing import (
    TEST_ACCESS_TOKEN,
    TEST_SECRET,
    TEST_TOKEN_URL,
    create_mock_transport,
    create_test_config,
)


def _token_posts(requests: list[httpx.Request]) -> list[httpx.Request]:
    return [r for r in requests if r.method == "POST" and str(r.url) == TEST_TOKEN_URL]


class TestInitialization:
    """Test the Initializing -> Ready / Failed transition."""

    @pytest.mark.unit
    async def test_starts_initializing(self, schools_config, sent_requests):
        client = PowerSchoolClient(schools_config)

        assert isinstance(client.state, Initializing)
        assert not client.is_ready
        assert sent_requests == []

    @pytest.mark.unit
    async def test_create_returns_ready_client(self, schools_config, sent_requests):
        async with await PowerSchoolClient.create(schools_config) as client:
            assert client.is_ready
            assert isinstance(client.state, Ready)
            assert client.state.transport.headers["Authorization"] == f"Bearer {TEST_ACCESS_TOKEN}"

        assert len(_token_posts(sent_requests)) == 1

    @pytest.mark.unit
    async def test_initialize_twice_fetches_once(self, schools_config, sent_requests):
        client = PowerSchoolClient(schools_config)

        await client.initialize()
        transport = client.state.transport
        await client.initialize()

        assert client.state.transport is transport
        assert len(_token_posts(sent_requests)) == 1
        await client.aclose()

    @pytest.mark.unit
    async def test_concurrent_initialize_fetches_once(self, schools_config, sent_requests):
        client = PowerSchoolClient(schools_config)

        await asyncio.gather(client.initialize(), client.initialize(), client.initialize())

        assert client.is_ready
        assert len(_token_posts(sent_requests)) == 1
        await client.aclose()

    @pytest.mark.unit
    async def test_token_failure_moves_to_failed(self, sent_requests, caplog):
        transport = create_mock_transport(
            token_response=httpx.Response(401, json={"error": "invalid_client"}),
            requests=sent_requests,
        )
        client = PowerSchoolClient(create_test_config(transport))

        with caplog.at_level("ERROR", logger="powerschool_client.client"):
            with pytest.raises(TokenFetchError):
                await client.initialize()

        assert isinstance(client.state, Failed)
        assert client.state.error.status_code == 401
        assert "Failed to obtain PowerSchool access token" in caplog.text

    @pytest.mark.unit
    async def test_failed_client_does_not_retry(self, sent_requests):
        transport = create_mock_transport(token_response=httpx.Response(500), requests=sent_requests)
        client = PowerSchoolClient(create_test_config(transport))

        with pytest.raises(TokenFetchError):
            await client.initialize()
        with pytest.raises(TokenFetchError):
            await client.initialize()

        assert len(_token_posts(sent_requests)) == 1

    @pytest.mark.unit
    async def test_invalid_token_url_moves_to_failed(self, sent_requests, caplog):
        """A malformed token URL fails initialization like any other token error."""
        transport = create_mock_transport(requests=sent_requests)
        credentials = Credentials(secret=TEST_SECRET, token_url="https://exa mple.com:abc/x")
        client = PowerSchoolClient(create_test_config(transport, credentials=credentials))

        with caplog.at_level("ERROR", logger="powerschool_client.client"):
            with pytest.raises(TokenFetchError):
                await client.initialize()

        assert isinstance(client.state, Failed)
        assert "Failed to obtain PowerSchool access token" in caplog.text

        with pytest.raises(TokenFetchError):
            await client.initialize()
        assert isinstance(client.state, Failed)
        assert sent_requests == []

    @pytest.mark.unit
    async def test_async_with_initializes(self, schools_config, sent_requests):
        """Entering the context fetches the token, leaving it closes the transport."""
        async with PowerSchoolClient(schools_config) as client:
            assert client.is_ready
            body = await client.get("ws/v1/district/school")

        assert body["path"] == "/ws/v1/district/school"
        assert len(_token_posts(sent_requests)) == 1

    @pytest.mark.unit
    async def test_async_with_raises_on_token_failure(self):
        transport = create_mock_transport(token_response=httpx.Response(401))

        with pytest.raises(TokenFetchError):
            async with PowerSchoolClient(create_test_config(transport)):
                pass

    @pytest.mark.unit
    async def test_create_raises_on_token_failure(self):
        transport = create_mock_transport(token_response=httpx.Response(403))

        with pytest.raises(TokenFetchError):
            await PowerSchoolClient.create(create_test_config(transport))


class TestGetBeforeReady:
    """get() is gated on readiness."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("resource", "resource_id", "options"),
        [
            ("ws/v1/district/school", None, None),
            ("ws/v1/school", 3, QueryOptions(page_size=5)),
            ("", "", QueryOptions(query="a==1")),
        ],
    )
    async def test_not_ready_regardless_of_arguments(self, schools_config, sent_requests, resource, resource_id, options):
        client = PowerSchoolClient(schools_config)

        with pytest.raises(NotReadyError) as exc_info:
            await client.get(resource, resource_id, options)

        assert str(exc_info.value) == NOT_READY_MESSAGE
        assert sent_requests == []

    @pytest.mark.unit
    async def test_failed_client_not_ready_chains_cause(self):
        transport = create_mock_transport(token_response=httpx.Response(401))
        client = PowerSchoolClient(create_test_config(transport))
        with pytest.raises(TokenFetchError):
            await client.initialize()

        with pytest.raises(NotReadyError) as exc_info:
            await client.get("ws/v1/district/school")

        assert str(exc_info.value) == NOT_READY_MESSAGE
        assert isinstance(exc_info.value.__cause__, TokenFetchError)

    @pytest.mark.unit
    async def test_early_calls_fail_independently(self, schools_config):
        """Calls made before readiness are not queued or replayed."""
        client = PowerSchoolClient(schools_config)

        results = await asyncio.gather(
            client.get("ws/v1/district/school"),
            client.get("ws/v1/district/student"),
            return_exceptions=True,
        )
        await client.initialize()

        assert all(isinstance(result, NotReadyError) for result in results)
        assert client.is_ready
        await client.aclose()


class TestGet:
    """GET requests once ready."""

    @pytest.mark.unit
    async def test_get_without_options_has_no_query_string(self, schools_config, sent_requests):
        async with await PowerSchoolClient.create(schools_config) as client:
            body = await client.get("ws/v1/district/school")

        assert body == {"path": "/ws/v1/district/school", "query": ""}
        request = sent_requests[-1]
        assert request.method == "GET"
        assert request.url.query == b""
        assert request.headers["Authorization"] == f"Bearer {TEST_ACCESS_TOKEN}"

    @pytest.mark.unit
    async def test_get_with_id_and_options(self, schools_config, sent_requests):
        options = QueryOptions(expansions=["school_boundary"], query=["a==1", "b==2"])

        async with await PowerSchoolClient.create(schools_config) as client:
            await client.get("ws/v1/school", 3, options)

        request = sent_requests[-1]
        assert request.url.path == "/ws/v1/school/3"
        assert request.url.params["expansions"] == "school_boundary"
        assert request.url.params["pagesize"] == "1000"
        assert request.url.params["q"] == "a==1;b==2"

    @pytest.mark.unit
    async def test_get_applies_response_transformers(self):
        transport = create_mock_transport(
            lambda request: httpx.Response(200, json={"schools": {"school": [{"id": 1}, {"id": 2}]}})
        )
        config = create_test_config(transport, response_transformers=(lambda body: body["schools"]["school"],))

        async with await PowerSchoolClient.create(config) as client:
            assert await client.get("ws/v1/district/school") == [{"id": 1}, {"id": 2}]

    @pytest.mark.unit
    async def test_get_propagates_http_errors_unmodified(self):
        transport = create_mock_transport(lambda request: httpx.Response(404, json={"msg": "x"}))

        async with await PowerSchoolClient.create(create_test_config(transport)) as client:
            with pytest.raises(NotFoundError) as exc_info:
                await client.get("ws/v1/school", 99)

        assert str(exc_info.value) == "Request failed with status code 404"

        PowerSchoolClient.normalize_error(exc_info.value, "Could not load school 99.")
        assert str(exc_info.value) == 'Could not load school 99.  Request failed with status code 404: {"msg":"x"}.'

    @pytest.mark.unit
    async def test_get_propagates_network_errors(self):
        def api_handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection reset", request=request)

        transport = create_mock_transport(api_handler)

        async with await PowerSchoolClient.create(create_test_config(transport)) as client:
            with pytest.raises(httpx.ConnectError):
                await client.get("ws/v1/district/school")

    @pytest.mark.unit
    async def test_state_cannot_transition_twice(self, schools_config):
        client = await PowerSchoolClient.create(schools_config)

        with pytest.raises(RuntimeError):
            client._transition(Failed(TokenFetchError("late failure")))

        assert client.is_ready
        await client.aclose()
