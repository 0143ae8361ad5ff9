from enum import Enum
from typing import List, Optional, TypedDict
from roster.models.student import Student


class ModalMode(str, Enum):
    CLOSED = "closed"
    OPEN_CREATE = "open_create"
    OPEN_EDIT = "open_edit"


class RosterState(TypedDict):
    """State owned by the roster controller."""
    students: List[Student]  # server order, as of the last successful list
    loading: bool
    modal_open: bool
    editing: bool
    selected: Optional[Student]  # target of edit/delete


def initial_state() -> RosterState:
    return {
        "students": [],
        "loading": False,
        "modal_open": False,
        "editing": False,
        "selected": None
    }


def modal_mode(state: RosterState) -> ModalMode:
    if not state["modal_open"]:
        return ModalMode.CLOSED
    return ModalMode.OPEN_EDIT if state["editing"] else ModalMode.OPEN_CREATE
