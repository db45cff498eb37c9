"""
Conversation scripts.

A script is a list of ``nickname,message`` lines. Parsing it yields the
participants in order of first appearance and the messages in source order.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from chatcomic.assets import AssetProvider, Character


logger = logging.getLogger(__name__)


class ScriptFormatError(Exception):
    """A script line is not in ``nickname,message`` form."""
    pass


@dataclass(eq=False)
class Speaker:
    """A participant in the conversation, identified by nickname."""

    nick: str
    character: Optional[Character] = None

    def __eq__(self, other):
        if not isinstance(other, Speaker):
            return NotImplemented
        return self.nick == other.nick

    def __hash__(self):
        return hash(self.nick)


@dataclass(frozen=True)
class Message:
    """A line of dialogue said by a speaker."""

    speaker: Speaker
    text: str


@dataclass
class Conversation:
    """Participants and messages of a parsed script."""

    participants: Dict[str, Speaker] = field(default_factory=dict)
    messages: List[Message] = field(default_factory=list)

    def assign_characters(
        self,
        assets: AssetProvider,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Give every participant a character.

        Speakers whose nickname matches a loaded character get that
        character, everyone else gets a random one.

        Args:
            assets: Asset provider to take characters from
            rng: Random generator for the fallback choice
        """
        for speaker in self.participants.values():
            if speaker.character is not None:
                continue
            if assets.has_character(speaker.nick):
                speaker.character = assets.get_character(speaker.nick)
            else:
                speaker.character = assets.get_random_character(rng)
                logger.info(
                    f"No character named {speaker.nick!r}, using {speaker.character.name!r}"
                )


def parse_line(line: str, line_number: int = 0) -> Tuple[str, str]:
    """
    Split a script line into nickname and text on the first comma.

    Raises:
        ScriptFormatError: If the line has no comma
    """
    nick, sep, text = line.partition(",")
    if not sep:
        raise ScriptFormatError(
            f"Line {line_number}: expected 'nickname,message', got {line!r}"
        )
    return nick, text


def parse_script(lines: Iterable[str]) -> Conversation:
    """
    Parse script lines into a conversation.

    Empty lines are skipped; a line holding only spaces is malformed.

    Args:
        lines: Lines of the script, with or without line terminators

    Returns:
        Parsed conversation

    Raises:
        ScriptFormatError: If a non-empty line has no comma
    """
    conversation = Conversation()

    for number, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        if not line:
            continue

        nick, text = parse_line(line, number)
        speaker = conversation.participants.get(nick)
        if speaker is None:
            speaker = Speaker(nick)
            conversation.participants[nick] = speaker
        conversation.messages.append(Message(speaker, text))

    logger.debug(
        f"Parsed {len(conversation.messages)} messages from "
        f"{len(conversation.participants)} participants"
    )
    return conversation
