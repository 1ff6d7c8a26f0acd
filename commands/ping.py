"""!ping: liveness check."""

from discordapi.commands import Command
from discordapi.rest import message


class Ping(Command):
    async def execute(self, session, token, channel_id, args):
        await message.send_message(session, token, channel_id, "Pong!")
