import httpx
from typing import Any, Dict, List, Optional
from urllib.parse import quote
from pydantic import ValidationError
from roster.config import settings
from roster.api.errors import NetworkError, NotFoundError, RosterServiceError, ServerValidationError
from roster.models.student import Student, StudentFields, StudentList


class RosterClient:
    """Client for the remote student REST API.

    Every call is a single request/response: no retries and no backoff. Failures
    are raised as ``RosterServiceError`` subclasses.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = (base_url or settings.roster_api_base).rstrip("/")
        self.timeout = settings.request_timeout if timeout is None else timeout
        self._transport = transport
        self._headers = {
            "Accept": "application/json",
            "Content-Type": "application/json"
        }

    async def list_students(self) -> List[Student]:
        """List all students in the order the server returns them."""
        response = await self._request("GET", "/students")
        try:
            return StudentList(students=response.json()).students
        except (ValueError, ValidationError) as e:
            raise NetworkError(f"Unreadable student list: {e}", response.status_code) from e

    async def create_student(self, fields: StudentFields) -> Student:
        """Create a student; the server assigns its id."""
        response = await self._request("POST", "/students", fields.to_payload())
        return self._parse_student(response)

    async def update_student(self, student_id: str, fields: StudentFields) -> Student:
        """Replace every editable field of an existing student."""
        response = await self._request("PUT", self._student_path(student_id), fields.to_payload())
        return self._parse_student(response)

    async def delete_student(self, student_id: str) -> None:
        """Delete a student. The response body is ignored."""
        await self._request("DELETE", self._student_path(student_id))

    @staticmethod
    def _student_path(student_id: str) -> str:
        return f"/students/{quote(student_id, safe='')}"

    @staticmethod
    def _parse_student(response: httpx.Response) -> Student:
        try:
            return Student(**response.json())
        except (ValueError, TypeError, ValidationError) as e:
            raise NetworkError(f"Unreadable student record: {e}", response.status_code) from e

    async def _request(
        self,
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None
    ) -> httpx.Response:
        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            try:
                response = await client.request(
                    method,
                    f"{self.base_url}{path}",
                    headers=self._headers,
                    json=payload
                )
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise _status_error(method, path, e.response) from e
            except httpx.HTTPError as e:
                raise NetworkError(f"{method} {path} failed: {e}") from e
        return response


def _status_error(method: str, path: str, response: httpx.Response) -> RosterServiceError:
    message = f"{method} {path} returned {response.status_code}: {response.text}"
    if response.status_code == 404:
        return NotFoundError(message, response.status_code)
    if response.status_code in (400, 422):
        return ServerValidationError(message, response.status_code)
    return NetworkError(message, response.status_code)
