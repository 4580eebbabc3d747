"""
Shared fixtures for the API tests.

Each test case gets a fresh in-memory SQLite database and fixed settings,
both swapped in through FastAPI's dependency overrides.
"""

import json
import unittest

import requests
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from enrollhub.core.config import Settings, get_settings
from enrollhub.core.database import Base, get_db
from enrollhub.main import app
from enrollhub.models import course, student  # noqa: F401
from enrollhub.services import group_service

ADMIN = ("admin", "s3cret")

GATEWAY = "http://gateway.test/api/default"


def make_settings(**overrides) -> Settings:
    values = dict(
        database_url="sqlite://",
        whatsapp_api_endpoint=f"{GATEWAY}/groups",
        whatsapp_api_key="test-key",
        admin_username=ADMIN[0],
        admin_password=ADMIN[1],
    )
    values.update(overrides)
    return Settings(**values)


def fake_response(status_code: int = 200, body=None) -> requests.Response:
    """A real requests.Response carrying ``body`` (dicts/lists as JSON, str as-is)."""
    response = requests.Response()
    response.status_code = status_code
    if body is None:
        content = b""
    elif isinstance(body, str):
        content = body.encode("utf-8")
    else:
        content = json.dumps(body).encode("utf-8")
    response._content = content
    response.encoding = "utf-8"
    response.reason = "OK" if status_code < 400 else "Error"
    return response


class ApiTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
        )
        Base.metadata.create_all(bind=self.engine)
        TestingSession = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)

        def override_get_db():
            db = TestingSession()
            try:
                yield db
            finally:
                db.close()

        self.settings = make_settings()
        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_settings] = lambda: self.settings
        group_service.clear_groups_cache()

        self.client = TestClient(app)
        self.client.auth = ADMIN

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        Base.metadata.drop_all(bind=self.engine)
        self.engine.dispose()

    # -- helpers ------------------------------------------------------------

    def create_course(self, name="Intro to Python", sessions=None, chat_id=None) -> dict:
        body = {"courseName": name}
        if chat_id is not None:
            body["chatId"] = chat_id
        else:
            body["sessions"] = sessions or [{"startTime": "8:00", "endTime": "9:00"}]
        response = self.client.post("/api/courses", json=body)
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()["data"]

    def student_payload(self, course_id: str, **overrides) -> dict:
        payload = {
            "name": "Amina Yusuf",
            "email": "amina@example.com",
            "university": "Mogadishu University",
            "phoneNumber": "612345678",
            "courseId": course_id,
            "selectedSessions": [{"startTime": "8:00", "endTime": "9:00"}],
        }
        payload.update(overrides)
        return payload

    def create_student(self, course_id: str, **overrides) -> dict:
        response = self.client.post("/api/students", json=self.student_payload(course_id, **overrides))
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()["data"]
