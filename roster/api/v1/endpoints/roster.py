from fastapi import APIRouter, Body, Depends, HTTPException, Request
from pydantic import BaseModel
from typing import Any, Dict, Optional
from roster.controller.roster_controller import ModalStateError, RosterController
from roster.forms.validator import FIELDS
from roster.models.view import RosterView

router = APIRouter()


class FieldValue(BaseModel):
    value: Any = None


def get_controller(request: Request) -> RosterController:
    """The controller created for this application in its lifespan."""
    return request.app.state.roster_controller


@router.get("/", response_model=RosterView)
async def get_view(controller: RosterController = Depends(get_controller)):
    """Current roster view"""
    return controller.view()


@router.post("/refresh", response_model=RosterView)
async def refresh(controller: RosterController = Depends(get_controller)):
    """Reload the roster from the student API"""
    await controller.refresh()
    return controller.view()


@router.post("/modal/create", response_model=RosterView)
async def open_for_create(controller: RosterController = Depends(get_controller)):
    """Open an empty form for a new student"""
    controller.open_for_create()
    return controller.view()


@router.post("/modal/edit/{student_id}", response_model=RosterView)
async def open_for_edit(student_id: str, controller: RosterController = Depends(get_controller)):
    """Open the form pre-filled with a listed student"""
    student = controller.find_student(student_id)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")
    controller.open_for_edit(student)
    return controller.view()


@router.post("/modal/close", response_model=RosterView)
async def close(controller: RosterController = Depends(get_controller)):
    """Close the form and clear the selection"""
    controller.close()
    return controller.view()


@router.put("/form/{field}", response_model=RosterView)
async def set_field(field: str, field_value: FieldValue, controller: RosterController = Depends(get_controller)):
    """Set one form field and validate it immediately"""
    if field not in FIELDS:
        raise HTTPException(status_code=404, detail=f"Unknown form field: {field}")
    controller.form.set_value(field, field_value.value)
    return controller.view()


@router.post("/submit", response_model=RosterView)
async def submit(
    form_values: Optional[Dict[str, Any]] = Body(default=None),
    controller: RosterController = Depends(get_controller)
):
    """Save the form as a new or updated student"""
    try:
        await controller.submit(form_values)
    except ModalStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return controller.view()


@router.post("/delete", response_model=RosterView)
async def delete_selected(controller: RosterController = Depends(get_controller)):
    """Delete the selected student"""
    try:
        await controller.delete_selected()
    except ModalStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return controller.view()


@router.delete("/notifications/{notification_id}", response_model=RosterView)
async def dismiss_notification(notification_id: int, controller: RosterController = Depends(get_controller)):
    """Dismiss a notification before it expires"""
    if not controller.notifier.dismiss(notification_id):
        raise HTTPException(status_code=404, detail="Notification not found")
    return controller.view()
