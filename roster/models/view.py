from pydantic import BaseModel
from typing import Any, Dict, List, Optional
from roster.controller.notifier import Notification
from roster.controller.state import ModalMode
from roster.forms.validator import FieldError


class RosterRow(BaseModel):
    id: str
    name: str


class ModalView(BaseModel):
    mode: ModalMode
    title: Optional[str] = None
    submit_label: Optional[str] = None
    can_delete: bool = False
    selected_id: Optional[str] = None
    values: Dict[str, Any]
    errors: Dict[str, FieldError]


class RosterView(BaseModel):
    heading: str = "Student List"
    rows: List[RosterRow]
    loading: bool
    modal: ModalView
    notifications: List[Notification]
