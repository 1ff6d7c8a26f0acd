"""Single-request HTTP helper shared by every REST wrapper.

Each wrapper coroutine builds a Route and calls request() exactly once.
There is no retry, rate-limit handling, or pagination here; a failed
call surfaces as an exception and the caller decides what to do.

Key classes:
    Route: HTTP method plus a path template and its parameters.

Key functions:
    request: Send one authenticated request and decode the JSON reply.
"""

import json as jsonlib
from dataclasses import dataclass
from typing import Any, Dict, Final, Mapping, Optional

import aiohttp
import structlog

from ..exceptions import HTTPException, ResponseDecodeError

logger = structlog.get_logger("discordapi.rest")

BASE_URL: Final[str] = "https://discord.com/api/v9"

_AUTH_SCHEMES = ("Bot ", "Bearer ")


@dataclass(init=False, frozen=True)
class Route:
    """An endpoint: HTTP method, path template, and path parameters.

    ``Route("GET", "/channels/{channel_id}", channel_id="42").url``
    is ``https://discord.com/api/v9/channels/42``.
    """

    method: str
    path: str
    params: Dict[str, Any]

    def __init__(self, method: str, path: str, **params: Any):
        object.__setattr__(self, "method", method)
        object.__setattr__(self, "path", path)
        object.__setattr__(self, "params", dict(sorted(params.items())))

    @property
    def url(self) -> str:
        """The interpolated URL of the route."""
        return BASE_URL + self.path.format_map(self.params)


def authorization_header(token: str) -> str:
    """Return the Authorization value for ``token``.

    Tokens that already carry a ``Bot`` or ``Bearer`` scheme are sent
    as-is; bare tokens are sent as bearer credentials.
    """
    if token.startswith(_AUTH_SCHEMES):
        return token
    return "Bearer " + token


async def request(
    session: aiohttp.ClientSession,
    token: Optional[str],
    route: Route,
    *,
    json: Optional[Any] = None,
    params: Optional[Mapping[str, Any]] = None,
    reason: Optional[str] = None,
    raw: bool = False,
) -> Any:
    """Send one request to ``route`` and return the decoded body.

    Args:
        session: Shared aiohttp session.
        token: Bot token, or None for endpoints authenticated by a
            webhook token embedded in the path.
        route: Endpoint to call.
        json: JSON-serializable request body.
        params: Query string parameters. None values are dropped.
        reason: Audit log reason (``X-Audit-Log-Reason`` header).
        raw: Return the undecoded body bytes instead of parsing JSON
            (image endpoints).

    Returns:
        The decoded JSON body, or None when the body is empty. Bytes
        when ``raw`` is set.

    Raises:
        HTTPException: Discord answered with a non-2xx status.
        ResponseDecodeError: A 2xx body was not valid JSON.
        aiohttp.ClientError: Transport failure, propagated unchanged.
    """
    headers: Dict[str, str] = {}
    if token is not None:
        headers["Authorization"] = authorization_header(token)
    if reason is not None:
        headers["X-Audit-Log-Reason"] = reason

    kwargs: Dict[str, Any] = {"headers": headers}
    if json is not None:
        kwargs["json"] = json
    if params is not None:
        kwargs["params"] = {k: str(v) for k, v in params.items() if v is not None}

    logger.debug("rest_request", method=route.method, path=route.path)

    async with session.request(route.method, route.url, **kwargs) as response:
        body = await response.read()
        status = response.status

    if not 200 <= status < 300:
        text = body.decode("utf-8", errors="replace")
        try:
            data = jsonlib.loads(text)
        except jsonlib.JSONDecodeError:
            data = text
        logger.warning(
            "rest_request_failed",
            method=route.method,
            path=route.path,
            status=status,
        )
        raise HTTPException(code=status, data=data)

    if raw:
        return body
    if not body:
        return None
    text = body.decode("utf-8", errors="replace")
    try:
        return jsonlib.loads(text)
    except jsonlib.JSONDecodeError as e:
        raise ResponseDecodeError(status, text) from e
