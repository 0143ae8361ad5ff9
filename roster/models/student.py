from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, List, Optional

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 20
AGE_MIN = 1
AGE_MAX = 120


class StudentFields(BaseModel):
    """Editable student attributes, as sent in Create and Update bodies."""
    name: str = Field(min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    age: int = Field(ge=AGE_MIN, le=AGE_MAX)
    class_name: str = Field(alias="class", min_length=1)
    subject: str = Field(min_length=1)

    class Config:
        populate_by_name = True

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class Student(BaseModel):
    """A student record as returned by the remote API.

    Only the server-assigned id is enforced; stored records are not checked
    against the form rules.
    """
    id: str = Field(alias="_id", min_length=1)
    name: str = ""
    age: Optional[Any] = None
    class_name: Optional[Any] = Field(default=None, alias="class")
    subject: Optional[Any] = None

    class Config:
        populate_by_name = True

    @field_validator("name", mode="before")
    @classmethod
    def name_as_text(cls, value: Any) -> str:
        return "" if value is None else str(value)

    def form_values(self) -> Dict[str, Any]:
        """Field values used to pre-fill the edit form."""
        return {
            "name": self.name,
            "age": self.age,
            "class": self.class_name,
            "subject": self.subject,
        }


class StudentList(BaseModel):
    students: List[Student]
