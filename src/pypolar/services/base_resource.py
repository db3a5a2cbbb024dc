from __future__ import annotations
import logging
from typing import (
    Any,
    AsyncIterator,
    Dict,
    Optional,
    Type,
    TypeVar,
    Union,
)
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from pypolar.config.settings import MAX_PAGE_LIMIT
from pypolar.models.base import RequestModel
from pypolar.models.pagination import PaginatedResponse
from pypolar.models.query_builder import QueryBuilder, QueryValue
from pypolar.services.errors import (
    ApiError,
    FieldError,
    TransportError,
    error_from_response,
)
from pypolar.services.paginator import paginate
from pypolar.services.service_result import Result

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)
R = TypeVar("R", bound=RequestModel)


class BaseResource:
    """
    Base class for all resource clients. It handles the common HTTP request
    patterns, decoding and error mapping so every operation returns a Result:
      - 2xx with a body: Result.ok(decoded model)
      - 204 / empty body: Result.ok(None)
      - any other status, transport failures and undecodable bodies: Result.fail
    Cancellation is never caught here and reaches the caller untouched.
    """

    def __init__(self, client: Any):
        self._client = client

    @property
    def session(self):
        return self._client.session

    def query(self) -> QueryBuilder:
        """A fresh, empty query builder for this resource."""
        return QueryBuilder()

    # --- request execution --- #

    async def _make_request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, QueryValue]] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> Result[Any]:
        """
        Make an async HTTP request and map the outcome.

        Returns:
            Result.ok(parsed JSON, or None when the body is empty) on 2xx
            Result.fail(ApiError) on any error
        """
        try:
            resp = await self.session.request(
                method.upper(), path, params=params or None, json=payload
            )
        except TransportError as e:
            logger.warning("%s %s failed: %s", method.upper(), path, e.message)
            return Result.fail(e.to_api_error())
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method.upper(), path, e)
            return Result.fail(ApiError.transport(str(e) or type(e).__name__))

        if not 200 <= resp.status_code < 300:
            error = error_from_response(resp.status_code, resp.text, resp.headers)
            logger.debug(
                "%s %s returned %s: %s", method.upper(), path, resp.status_code, error.message
            )
            return Result.fail(error)

        if resp.status_code == 204 or not resp.content:
            return Result.ok(None)

        try:
            return Result.ok(resp.json())
        except ValueError:
            logger.warning("%s %s returned a body that is not JSON", method.upper(), path)
            return Result.fail(
                ApiError.decode("Response body is not valid JSON", response_body=resp.text)
            )

    # --- parameters --- #

    def _merge_params(
        self,
        builder: Optional[QueryBuilder] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        **filters: Any,
    ) -> Dict[str, QueryValue]:
        """
        Builder output first, then page, limit and explicit filters on top.
        A direct parameter always replaces the builder's value for that name.
        """
        params = builder.to_query_parameters() if builder is not None else {}
        direct = QueryBuilder()
        for name, value in filters.items():
            direct = direct.with_param(name, value)
        if page is not None:
            direct = direct.with_param("page", page)
        if limit is not None:
            direct = direct.with_param("limit", limit)
        params.update(direct.to_query_parameters())
        return params

    def _page_limit(self, limit: Optional[int]) -> int:
        if limit is None:
            limit = getattr(self._client, "default_page_limit", 10)
        return max(1, min(int(limit), MAX_PAGE_LIMIT))

    # --- decoding --- #

    def _decode(self, data: Any, model: Type[M]) -> Result[M]:
        try:
            return Result.ok(model.model_validate(data))
        except ValidationError as e:
            logger.warning("Could not decode %s: %s", model.__name__, e)
            return Result.fail(
                ApiError.decode(f"Could not decode {model.__name__}: {e}", response_body=str(data))
            )

    def _decode_page(
        self, data: Any, model: Type[M], page: int, limit: int
    ) -> Result[PaginatedResponse[M]]:
        if isinstance(data, dict) and isinstance(data.get("pagination"), dict):
            pagination = dict(data["pagination"])
            if pagination.get("page") is None:
                pagination["page"] = page
            if pagination.get("limit") is None:
                pagination["limit"] = limit
            data = {**data, "pagination": pagination}
        return self._decode(data, PaginatedResponse[model])

    def _prepare(
        self,
        request: Union[R, Dict[str, Any]],
        request_model: Type[R],
        partial: bool = False,
    ) -> Result[Dict[str, Any]]:
        """Validate a request locally and turn it into a JSON body."""
        if isinstance(request, request_model):
            return Result.ok(request.to_payload(partial=partial))
        if isinstance(request, BaseModel):
            request = request.model_dump(exclude_unset=partial)
        try:
            validated = request_model.model_validate(request)
        except ValidationError as e:
            details = [
                FieldError(loc=tuple(err["loc"]), msg=err["msg"], type=err["type"])
                for err in e.errors()
            ]
            message = "; ".join(str(d) for d in details) or "Invalid request"
            return Result.fail(ApiError.validation(message, details))
        return Result.ok(validated.to_payload(partial=partial))

    # --- operations shared by the resources --- #

    async def _list(
        self,
        path: str,
        model: Type[M],
        builder: Optional[QueryBuilder] = None,
        page: int = 1,
        limit: Optional[int] = None,
        **filters: Any,
    ) -> Result[PaginatedResponse[M]]:
        page = max(1, int(page))
        limit = self._page_limit(limit)
        params = self._merge_params(builder, page=page, limit=limit, **filters)
        result = await self._make_request("get", path, params=params)
        if result.is_failure:
            return result
        return self._decode_page(result.value, model, page, limit)

    def _list_all(
        self,
        path: str,
        model: Type[M],
        builder: Optional[QueryBuilder] = None,
        **filters: Any,
    ) -> AsyncIterator[Result[M]]:
        # list_all walks from page 1 with the configured page size
        fixed = sorted(name for name in ("page", "limit") if name in filters)
        if fixed:
            return self._failed_stream(
                Result.fail(
                    ApiError.validation(
                        f"list_all does not accept {', '.join(fixed)}",
                        [FieldError(loc=(name,), msg="not allowed") for name in fixed],
                    )
                )
            )

        async def fetch_page(builder, page, limit):
            return await self._list(path, model, builder, page=page, limit=limit, **filters)

        return paginate(
            fetch_page,
            builder,
            limit=getattr(self._client, "list_all_page_size", MAX_PAGE_LIMIT),
            retries=getattr(self._client, "page_retries", 0),
        )

    async def _get(
        self,
        path: str,
        model: Type[M],
        params: Optional[Dict[str, QueryValue]] = None,
    ) -> Result[M]:
        result = await self._make_request("get", path, params=params)
        if result.is_failure:
            return result
        return self._decode(result.value, model)

    async def _send(
        self,
        method: str,
        path: str,
        request: Union[R, Dict[str, Any]],
        request_model: Type[R],
        model: Optional[Type[M]],
        partial: bool = False,
    ) -> Result[Optional[M]]:
        """Validate `request`, send it as JSON and decode the reply into `model`."""
        prepared = self._prepare(request, request_model, partial=partial)
        if prepared.is_failure:
            return prepared
        result = await self._make_request(method, path, payload=prepared.value)
        if result.is_failure:
            return result
        if model is None or result.value is None:
            return Result.ok(None)
        return self._decode(result.value, model)

    async def _delete(self, path: str, model: Type[M]) -> Result[Optional[M]]:
        result = await self._make_request("delete", path)
        if result.is_failure or result.value is None:
            return result
        return self._decode(result.value, model)

    @staticmethod
    def _path(template: str, **identifiers: Any) -> Result[str]:
        """
        Fill `template` with URL-quoted identifiers. A blank identifier is a
        validation failure, so it never turns into a request on another route.
        """
        for name, value in identifiers.items():
            if value is None or not str(value).strip():
                return Result.fail(
                    ApiError.validation(
                        f"{name} must not be empty",
                        [FieldError(loc=(name,), msg="must not be empty")],
                    )
                )
        return Result.ok(
            template.format(
                **{name: quote(str(value), safe="") for name, value in identifiers.items()}
            )
        )

    @staticmethod
    async def _failed_stream(result: Result[Any]) -> AsyncIterator[Result[Any]]:
        """A stream holding one failure, for list_all calls rejected before any request."""
        yield result
