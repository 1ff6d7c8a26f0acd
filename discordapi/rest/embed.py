"""Rich embed messages.

Key classes:
    Embed: Pydantic model for the subset of embed fields commands use.

Key functions:
    send_embed_message: Post a single embed to a channel.
"""

from typing import Any, Dict, List, Optional

import aiohttp
from pydantic import BaseModel, Field

from .http import Route, request

DEFAULT_COLOR = 0x3498DB


class EmbedField(BaseModel):
    name: str
    value: str
    inline: bool = False


class Embed(BaseModel):
    """A Discord embed. Unset fields are omitted from the payload."""

    title: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    color: int = DEFAULT_COLOR
    fields: List[EmbedField] = Field(default_factory=list)

    def to_json(self) -> Dict[str, Any]:
        data = self.model_dump(exclude_none=True)
        if not self.fields:
            data.pop("fields", None)
        return data


async def send_embed_message(
    session: aiohttp.ClientSession,
    token: str,
    channel_id: str,
    title: str,
    description: str,
    *,
    color: int = DEFAULT_COLOR,
) -> Any:
    """Post an embed with a title and description.

    Returns:
        The created message object.
    """
    embed = Embed(title=title, description=description, color=color)
    return await request(
        session,
        token,
        Route("POST", "/channels/{channel_id}/messages", channel_id=channel_id),
        json={"embeds": [embed.to_json()]},
    )
