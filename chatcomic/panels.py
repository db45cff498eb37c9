"""
Grouping of conversation messages into comic panels.

Messages are scanned once with a buffer of at most two pending messages.
A panel shows either one speaker alone or two speakers facing each other.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Tuple

from chatcomic.script import Message


# Zoom level of a speaker alone in a panel (close-up)
SINGLE_ZOOM = 1

# Zoom level of two speakers sharing a panel
TWO_SHOT_ZOOM = 2


class Position(Enum):
    """Side of the panel a speaker stands on."""

    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class MessageRole:
    """How one message is rendered within its panel."""

    message: Message
    position: Position
    facing_right: bool
    zoom: int


@dataclass(frozen=True)
class PanelGroup:
    """Messages rendered together in one panel."""

    roles: Tuple[MessageRole, ...]

    @property
    def messages(self) -> List[Message]:
        return [role.message for role in self.roles]

    @property
    def is_single(self) -> bool:
        return len(self.roles) == 1

    def __len__(self) -> int:
        return len(self.roles)


def make_panel(messages: List[Message]) -> PanelGroup:
    """
    Build a panel from one or two buffered messages.

    A lone speaker stands on the left. With two speakers the first stands
    on the left facing right and the second on the right facing left.
    """
    if len(messages) == 1:
        return PanelGroup((MessageRole(messages[0], Position.LEFT, False, SINGLE_ZOOM),))
    if len(messages) == 2:
        first, second = messages
        return PanelGroup((
            MessageRole(first, Position.LEFT, True, TWO_SHOT_ZOOM),
            MessageRole(second, Position.RIGHT, False, TWO_SHOT_ZOOM),
        ))
    raise ValueError(f"A panel holds 1 or 2 messages, got {len(messages)}")


def group_panels(messages: Iterable[Message]) -> List[PanelGroup]:
    """
    Group a message stream into panels.

    A held message is flushed on its own when the same speaker talks
    again; a full buffer of two messages is flushed as a two-speaker panel
    before the next message is buffered.

    Args:
        messages: Messages in conversation order

    Returns:
        Panels in conversation order
    """
    panels = []
    pending = []

    for message in messages:
        if len(pending) == 1 and message.speaker == pending[0].speaker:
            panels.append(make_panel(pending))
            pending = []
        elif len(pending) == 2:
            panels.append(make_panel(pending))
            pending = []
        pending.append(message)

    if pending:
        panels.append(make_panel(pending))

    return panels
