"""Roster controller: the only owner of the roster view state.

Every successful create, update or delete is followed by a full refresh from
the server; students are never added, changed or removed locally.
"""
from datetime import datetime
from typing import Any, Dict, Mapping, Optional
from roster.api.errors import RosterServiceError
from roster.api.roster_client import RosterClient
from roster.controller.notifier import Notifier
from roster.controller.state import ModalMode, RosterState, initial_state, modal_mode
from roster.forms.validator import StudentForm
from roster.models.student import Student
from roster.models.view import ModalView, RosterRow, RosterView
from roster.utils.logger import ActivityLogger

MODAL_TITLES = {
    ModalMode.OPEN_CREATE: "Add New Student",
    ModalMode.OPEN_EDIT: "Edit Student",
}
SUBMIT_LABELS = {
    ModalMode.OPEN_CREATE: "Add Student",
    ModalMode.OPEN_EDIT: "Update Student",
}


class ModalStateError(Exception):
    """Raised when an operation is not allowed in the current modal state."""


class ModalClosedError(ModalStateError):
    """Raised when submitting while the modal is closed."""


class NoStudentSelectedError(ModalStateError):
    """Raised when deleting outside the edit modal."""


class RosterController:
    """Coordinates the roster view with the remote student API."""

    def __init__(
        self,
        client: RosterClient,
        notifier: Optional[Notifier] = None,
        form: Optional[StudentForm] = None,
        activity_logger: Optional[ActivityLogger] = None
    ):
        self.client = client
        self.notifier = notifier or Notifier()
        self.form = form or StudentForm()
        self.activity_logger = activity_logger
        self.state: RosterState = initial_state()
        self._refresh_seq = 0
        self._settled_seq = 0  # latest refresh that has finished

    async def refresh(self) -> bool:
        """Reload the roster from the server.

        Only the most recently started refresh may replace the roster or clear
        the loading flag; responses to older requests are discarded.
        """
        self._refresh_seq += 1
        seq = self._refresh_seq
        self.state["loading"] = True
        try:
            students = await self.client.list_students()
        except RosterServiceError as e:
            latest = seq == self._refresh_seq
            self._log("refresh", "error" if latest else "discarded", error=e)
            if latest:
                self.notifier.error("Error fetching students")
            return False
        else:
            if seq != self._refresh_seq:
                self._log("refresh", "discarded")
                return False
            self.state["students"] = list(students)
            self._log("refresh", "success", metadata={"count": len(students)})
            return True
        finally:
            if seq == self._refresh_seq:
                self._settled_seq = seq
                self.state["loading"] = False

    def open_for_create(self):
        self.state["selected"] = None
        self.state["editing"] = False
        self.form.reset()
        self.state["modal_open"] = True

    def open_for_edit(self, student: Student):
        self.state["selected"] = student
        self.state["editing"] = True
        self.form.fill(student.form_values())
        self.state["modal_open"] = True

    def close(self):
        self.state["modal_open"] = False
        self.form.reset()
        self.state["selected"] = None

    async def submit(self, form_values: Optional[Mapping[str, Any]] = None) -> bool:
        """Validate the form and save it as a new or updated student.

        Invalid forms never reach the network. Returns True once the student
        has been saved.
        """
        if not self.state["modal_open"]:
            raise ModalClosedError("The student form is not open")

        result = self.form.handle_submit(form_values)
        if not result.ok:
            self._log("submit", "invalid", metadata={"fields": sorted(result.errors)})
            return False

        selected = self.state["selected"]
        if self.state["editing"] and selected is not None:
            operation, student_id = "update", selected.id
        else:
            operation, student_id = "create", None

        try:
            if operation == "update":
                await self.client.update_student(student_id, result.values)
            else:
                created = await self.client.create_student(result.values)
                student_id = created.id
        except RosterServiceError as e:
            self._log(operation, "error", student_id=student_id, error=e)
            self.notifier.error("Error saving student")
            return False

        self._log(operation, "success", student_id=student_id)
        if operation == "update":
            self.notifier.success("Student updated successfully")
        else:
            self.notifier.success("Student added successfully")
        await self.refresh()
        self.close()
        return True

    async def delete_selected(self) -> bool:
        selected = self.state["selected"]
        if modal_mode(self.state) != ModalMode.OPEN_EDIT or selected is None:
            raise NoStudentSelectedError("No student selected")

        self.state["loading"] = True
        try:
            await self.client.delete_student(selected.id)
        except RosterServiceError as e:
            self._log("delete", "error", student_id=selected.id, error=e)
            self.notifier.error("Error deleting student")
            return False
        else:
            self._log("delete", "success", student_id=selected.id)
            self.notifier.success("Student deleted successfully")
            await self.refresh()
            self.close()
            return True
        finally:
            # A refresh still in flight owns the loading flag
            if self._settled_seq == self._refresh_seq:
                self.state["loading"] = False

    def find_student(self, student_id: str) -> Optional[Student]:
        return next((s for s in self.state["students"] if s.id == student_id), None)

    def view(self, now: Optional[datetime] = None) -> RosterView:
        """Snapshot of everything the page renders."""
        mode = modal_mode(self.state)
        selected = self.state["selected"]
        return RosterView(
            rows=[RosterRow(id=s.id, name=s.name) for s in self.state["students"]],
            loading=self.state["loading"],
            modal=ModalView(
                mode=mode,
                title=MODAL_TITLES.get(mode),
                submit_label=SUBMIT_LABELS.get(mode),
                can_delete=mode == ModalMode.OPEN_EDIT,
                selected_id=selected.id if selected else None,
                values=dict(self.form.values),
                errors=dict(self.form.errors)
            ),
            notifications=self.notifier.active(now)
        )

    def _log(
        self,
        operation: str,
        outcome: str,
        student_id: Optional[str] = None,
        error: Optional[BaseException] = None,
        metadata: Optional[Dict[str, Any]] = None
    ):
        if self.activity_logger is None:
            return
        self.activity_logger.log_operation(
            operation=operation,
            outcome=outcome,
            student_id=student_id,
            error=error,
            metadata=metadata
        )
