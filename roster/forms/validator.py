"""Client-side validation of the student form.

Validation is purely local: nothing here talks to the network. A field is
missing when it is absent, ``None`` or the empty string; everything else is
checked against the constraints declared on ``StudentFields``.
"""
from enum import Enum
from typing import Any, Dict, Mapping, Optional
from pydantic import BaseModel, ValidationError
from roster.models.student import StudentFields

FIELDS = ("name", "age", "class", "subject")
LABELS = {"name": "Name", "age": "Age", "class": "Class", "subject": "Subject"}
TEXT_FIELDS = ("name", "class", "subject")


class ErrorKind(str, Enum):
    MISSING_FIELD = "missing_field"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    OUT_OF_RANGE = "out_of_range"
    NOT_A_NUMBER = "not_a_number"


class FieldError(BaseModel):
    kind: ErrorKind
    message: str


class ValidationResult(BaseModel):
    values: Optional[StudentFields] = None
    errors: Dict[str, FieldError] = {}

    @property
    def ok(self) -> bool:
        return self.values is not None and not self.errors


def _is_missing(value: Any) -> bool:
    return value is None or value == ""


def _translate(field: str, error: Dict[str, Any]) -> FieldError:
    label = LABELS[field]
    ctx = error.get("ctx", {})
    error_type = error["type"]

    if error_type == "missing":
        return FieldError(kind=ErrorKind.MISSING_FIELD, message=f"{label} is required")
    if error_type == "string_too_short":
        if ctx.get("min_length", 1) <= 1:
            return FieldError(kind=ErrorKind.MISSING_FIELD, message=f"{label} is required")
        return FieldError(
            kind=ErrorKind.TOO_SHORT,
            message=f"{label} must be at least {ctx['min_length']} characters long"
        )
    if error_type == "string_too_long":
        return FieldError(
            kind=ErrorKind.TOO_LONG,
            message=f"{label} must be at most {ctx['max_length']} characters long"
        )
    if error_type == "greater_than_equal":
        return FieldError(kind=ErrorKind.OUT_OF_RANGE, message=f"{label} must be at least {ctx['ge']}")
    if error_type == "less_than_equal":
        return FieldError(kind=ErrorKind.OUT_OF_RANGE, message=f"{label} must be at most {ctx['le']}")
    return FieldError(kind=ErrorKind.NOT_A_NUMBER, message=f"{label} must be a number")


def validate(form_values: Mapping[str, Any]) -> ValidationResult:
    """Validate all four form fields.

    Returns a result holding either the parsed ``StudentFields`` or a mapping
    of field name to the first failure for that field.
    """
    errors: Dict[str, FieldError] = {}
    candidate: Dict[str, Any] = {}

    for field in FIELDS:
        value = form_values.get(field)
        if _is_missing(value):
            errors[field] = FieldError(kind=ErrorKind.MISSING_FIELD, message=f"{LABELS[field]} is required")
        elif field in TEXT_FIELDS:
            candidate[field] = value if isinstance(value, str) else str(value)
        else:
            candidate[field] = value

    try:
        values = StudentFields.model_validate(candidate)
    except ValidationError as e:
        for error in e.errors():
            field = str(error["loc"][0]) if error["loc"] else ""
            if field == "class_name":
                field = "class"
            if field not in LABELS or field in errors:
                continue
            errors[field] = _translate(field, error)
        return ValidationResult(errors=errors)

    if errors:
        return ValidationResult(errors=errors)
    return ValidationResult(values=values)


def validate_field(field: str, value: Any) -> Optional[FieldError]:
    """Validate a single field for immediate feedback."""
    if field not in LABELS:
        raise KeyError(f"Unknown form field: {field}")
    return validate({field: value}).errors.get(field)


class StudentForm:
    """Field values and inline errors of the add/edit modal."""

    def __init__(self):
        self.values: Dict[str, Any] = {}
        self.errors: Dict[str, FieldError] = {}
        self.reset()

    def reset(self):
        self.values = {field: None for field in FIELDS}
        self.errors = {}

    def fill(self, values: Mapping[str, Any]):
        """Replace every field value, e.g. from the student being edited."""
        self.values = {field: values.get(field) for field in FIELDS}
        self.errors = {}

    def set_value(self, field: str, value: Any) -> Optional[FieldError]:
        error = validate_field(field, value)
        self.values[field] = value
        if error:
            self.errors[field] = error
        else:
            self.errors.pop(field, None)
        return error

    def handle_submit(self, values: Optional[Mapping[str, Any]] = None) -> ValidationResult:
        """Merge submitted values into the form and validate the whole form."""
        if values:
            self.values.update({field: values[field] for field in FIELDS if field in values})
        result = validate(self.values)
        self.errors = dict(result.errors)
        return result
