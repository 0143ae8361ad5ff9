import itertools
import json

import httpx
import pytest

from roster.api.roster_client import RosterClient
from roster.controller.notifier import Notifier
from roster.controller.roster_controller import RosterController
from roster.utils.logger import ActivityLogger

BASE_URL = "http://roster.test"


class FakeStudentService:
    """In-memory stand-in for the remote student API."""

    def __init__(self, students=None):
        self.students = [dict(s) for s in (students or [])]
        self.calls = []
        self.fail_methods = set()
        self.offline = False
        self._ids = itertools.count(1)

    def handle(self, request: httpx.Request) -> httpx.Response:
        method = request.method
        path = request.url.path
        self.calls.append((method, path))

        if self.offline:
            raise httpx.ConnectError("connection refused", request=request)
        if method in self.fail_methods:
            return httpx.Response(500, json={"message": "Internal Server Error"})

        parts = path.strip("/").split("/")
        if parts == ["students"]:
            if method == "GET":
                return httpx.Response(200, json=self.students)
            if method == "POST":
                body = json.loads(request.content)
                student = {"_id": f"id-{next(self._ids)}", **body}
                self.students.append(student)
                return httpx.Response(201, json=student)

        if len(parts) == 2 and parts[0] == "students":
            student = next((s for s in self.students if s["_id"] == parts[1]), None)
            if student is None:
                return httpx.Response(404, json={"message": "Student not found"})
            if method == "PUT":
                student.update(json.loads(request.content))
                return httpx.Response(200, json=student)
            if method == "DELETE":
                self.students.remove(student)
                return httpx.Response(200, json={"message": "Student deleted"})

        return httpx.Response(405, json={"message": "Method not allowed"})


@pytest.fixture
def service():
    return FakeStudentService([
        {"_id": "abc", "name": "Ada Lovelace", "age": 36, "class": "10A", "subject": "Maths"},
        {"_id": "def", "name": "Alan Turing", "age": 41, "class": "11B", "subject": "Logic"},
    ])


@pytest.fixture
def roster_client(service):
    return RosterClient(base_url=BASE_URL, transport=httpx.MockTransport(service.handle))


@pytest.fixture
def activity_logger(tmp_path):
    return ActivityLogger(log_dir=str(tmp_path / "logs"))


@pytest.fixture
def controller(roster_client, activity_logger):
    return RosterController(
        client=roster_client,
        notifier=Notifier(success_seconds=2.0, error_seconds=4.0),
        activity_logger=activity_logger
    )


@pytest.fixture
def valid_form():
    return {"name": "Grace Hopper", "age": "85", "class": "12C", "subject": "Computing"}
