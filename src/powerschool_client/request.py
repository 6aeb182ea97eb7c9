"""Resource path and query string construction.

PowerSchool resource queries take these optional parameters, appended in
this fixed order:

- ``expansions``: additional field sets the API should include,
  ``element1,element2,element3``
- ``extensions``: additional field sets from database extensions
- ``pagesize``: defaults to 1000 whenever an options object is given
- ``q``: a filter expression. Operators: ``==``, ``=gt=``, ``=ge=``,
  ``=lt=``, ``=le=``, ``;`` (AND), ``*`` (end of string wildcard), and
  ``(val1,val2)`` for multiple values of one expression.

Filter expressions are not validated; a malformed ``q`` shows up as a
400 response from the server.

Example:
    ```python
    from powerschool_client.request import QueryOptions, build_resource_path

    build_resource_path(
        "ws/v1/district/student",
        options=QueryOptions(expansions=["addresses"], query=["school_enrollment.enroll_status==A", "name.last_name==S*"]),
    )
    # 'ws/v1/district/student?expansions=addresses&pagesize=1000&q=school_enrollment.enroll_status==A;name.last_name==S*'
    ```
"""

from collections.abc import Sequence
from dataclasses import dataclass

DEFAULT_PAGE_SIZE = 1000

ResourceId = str | int


@dataclass(frozen=True)
class QueryOptions:
    """Optional query parameters for a resource GET.

    Passing any ``QueryOptions`` at all (even an empty one) adds
    ``pagesize`` to the query string; passing none leaves the path bare.
    """

    expansions: Sequence[str] | None = None
    extensions: Sequence[str] | None = None
    query: str | Sequence[str] | None = None
    page_size: int | None = None

    def query_params(self) -> list[str]:
        params = []
        if self.expansions is not None:
            params.append(f"expansions={_join(self.expansions, ',')}")
        if self.extensions is not None:
            params.append(f"extensions={_join(self.extensions, ',')}")
        params.append(f"pagesize={self.page_size or DEFAULT_PAGE_SIZE}")
        if self.query is not None and self.query != "":
            query = self.query if isinstance(self.query, str) else _join(self.query, ";")
            params.append(f"q={query}")
        return params


def _join(values: str | Sequence[str], separator: str) -> str:
    if isinstance(values, str):
        return values
    return separator.join(str(value) for value in values)


@dataclass(frozen=True)
class ResourceQuery:
    """A single logical resource read.

    A falsy ``resource_id`` (``None``, ``0``, ``""``) is treated as absent.
    """

    resource: str
    resource_id: ResourceId | None = None
    options: QueryOptions | None = None

    @property
    def path(self) -> str:
        path = self.resource
        if self.resource_id:
            path += f"/{self.resource_id}"
        if self.options is not None:
            path += "?" + "&".join(self.options.query_params())
        return path


def build_resource_path(
    resource: str,
    resource_id: ResourceId | None = None,
    options: QueryOptions | None = None,
) -> str:
    """Build ``<resource>[/<id>][?<query>]`` for a GET request."""
    return ResourceQuery(resource, resource_id, options).path
