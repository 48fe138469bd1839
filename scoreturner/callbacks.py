"""
Event sink that maps fired gestures to caller-supplied actions.
"""
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .types import GestureEvent, GestureKind, PageCommand, ReaderProto

Action = Callable[[], None]

# Default reader mapping: wink left and nod up go back, everything else advances
GESTURE_PAGE_MAP: Dict[GestureKind, str] = {
    GestureKind.WINK_LEFT: "prev",
    GestureKind.WINK_RIGHT: "next",
    GestureKind.SMILE: "next",
    GestureKind.NOD_UP: "prev",
    GestureKind.NOD_DOWN: "next",
}


@dataclass
class GestureCallbacks:
    """One zero-argument action slot per gesture. Unset slots are ignored."""
    on_wink_left: Optional[Action] = None
    on_wink_right: Optional[Action] = None
    on_smile: Optional[Action] = None
    on_nod_up: Optional[Action] = None
    on_nod_down: Optional[Action] = None

    def action_for(self, kind: GestureKind) -> Optional[Action]:
        return {
            GestureKind.WINK_LEFT: self.on_wink_left,
            GestureKind.WINK_RIGHT: self.on_wink_right,
            GestureKind.SMILE: self.on_smile,
            GestureKind.NOD_UP: self.on_nod_up,
            GestureKind.NOD_DOWN: self.on_nod_down,
        }[kind]

    def dispatch(self, event: GestureEvent) -> None:
        """Invoke the action bound to the event's gesture. Exceptions propagate."""
        action = self.action_for(event.kind)
        if action is not None:
            action()


def gesture_to_page_command(kind: GestureKind) -> PageCommand:
    """Page command the reader performs for a gesture."""
    return PageCommand(direction=GESTURE_PAGE_MAP[kind])


def reader_callbacks(reader: ReaderProto) -> GestureCallbacks:
    """
    Bind every gesture slot to a page turn on the given reader.

    Args:
        reader: Viewer exposing next_page() and prev_page()

    Returns:
        GestureCallbacks using GESTURE_PAGE_MAP
    """
    def turn(kind: GestureKind) -> Action:
        if gesture_to_page_command(kind).direction == "next":
            return reader.next_page
        return reader.prev_page

    return GestureCallbacks(
        on_wink_left=turn(GestureKind.WINK_LEFT),
        on_wink_right=turn(GestureKind.WINK_RIGHT),
        on_smile=turn(GestureKind.SMILE),
        on_nod_up=turn(GestureKind.NOD_UP),
        on_nod_down=turn(GestureKind.NOD_DOWN),
    )
