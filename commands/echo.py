"""!echo <text>: repeat the text back to the channel."""

from discordapi.commands import Command
from discordapi.rest import errors, message


class Echo(Command):
    async def execute(self, session, token, channel_id, args):
        if not args.strip():
            await errors.send_error_message(session, token, channel_id, "usage: !echo <text>")
            return
        await message.send_message(session, token, channel_id, args)
