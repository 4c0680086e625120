"""Command grammar for chat messages."""

import re
from dataclasses import dataclass

from core.errors import CryptoJackError

BET = "bet"
HIT = "hit"
STAY = "stay"

VERBS = frozenset({BET, HIT, STAY})

# Slack-style user mention at the start of a message, e.g. "<@U024BE7LH>"
_MENTION = re.compile(r"^<@[A-Za-z0-9]+>:?\s*")


class InvalidBetArgument(CryptoJackError):
    """The argument of a bet is missing or not a non-negative integer."""

    message = "Not a valid bet!"


@dataclass(frozen=True)
class Command:
    """A parsed chat command."""

    verb: str
    arg: str | None = None

    @property
    def is_known(self) -> bool:
        """Check if the engine handles this verb."""
        return self.verb in VERBS


def parse_command(text: str) -> Command | None:
    """
    Split a chat message into a verb and an optional argument.

    A leading bot mention is dropped. Returns None for an empty message.
    """
    text = _MENTION.sub("", text.strip())
    parts = text.split(maxsplit=1)
    if not parts:
        return None
    verb = parts[0].lower()
    arg = parts[1].strip() if len(parts) > 1 else None
    return Command(verb=verb, arg=arg or None)


def parse_bet(arg: str | None) -> int:
    """
    Parse the amount of a bet.

    Raises:
        InvalidBetArgument: Missing, non-numeric or negative amount
    """
    if arg is None:
        raise InvalidBetArgument("missing bet amount")
    try:
        amount = int(arg.strip())
    except ValueError:
        raise InvalidBetArgument(f"not a number: {arg!r}") from None
    if amount < 0:
        raise InvalidBetArgument(f"negative bet: {amount}")
    return amount
