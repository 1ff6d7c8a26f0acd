"""!endpoll <message_id>: close a poll in the current channel early."""

from discordapi.commands import Command, parse_arguments
from discordapi.rest import errors, poll


class Endpoll(Command):
    async def execute(self, session, token, channel_id, args):
        words = parse_arguments(args)
        if len(words) != 1:
            await errors.send_error_message(session, token, channel_id, "usage: !endpoll <message_id>")
            return
        await poll.end_poll(session, token, channel_id, words[0])
