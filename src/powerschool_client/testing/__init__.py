"""Testing utilities for code built on the PowerSchool client.

Example:
    ```python
    import httpx

    from powerschool_client import PowerSchoolClient
    from powerschool_client.testing import create_mock_transport, create_test_config


    async def test_lists_schools():
        transport = create_mock_transport(lambda request: httpx.Response(200, json={"schools": []}))
        client = await PowerSchoolClient.create(create_test_config(transport))
        assert await client.get("ws/v1/district/school") == {"schools": []}
    ```
"""

from powerschool_client.testing.factories import (
    TEST_ACCESS_TOKEN,
    TEST_BASE_URL,
    TEST_SECRET,
    TEST_TOKEN_URL,
    create_mock_transport,
    create_test_config,
    create_token_payload,
)

__all__ = [
    "TEST_ACCESS_TOKEN",
    "TEST_BASE_URL",
    "TEST_SECRET",
    "TEST_TOKEN_URL",
    "create_mock_transport",
    "create_test_config",
    "create_token_payload",
]
