"""Transport layer for authenticated PowerSchool requests.

Modules:
    factory: Builds a ResourceTransport from an access token
    transformers: The response transform pipeline

Example:
    ```python
    from powerschool_client.transport import create_transport

    transport = create_transport(token, base_url="https://district.powerschool.com")
    ```
"""

from powerschool_client.transport.factory import ResourceTransport, create_transport
from powerschool_client.transport.transformers import (
    ResponseTransformer,
    apply_pipeline,
    build_pipeline,
    parse_json_body,
)

__all__ = [
    "ResourceTransport",
    "ResponseTransformer",
    "apply_pipeline",
    "build_pipeline",
    "create_transport",
    "parse_json_body",
]
