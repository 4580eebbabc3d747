"""
API tests for /api/students.

Contract:
- email is trimmed, lower-cased and unique
- the course must exist at registration time and offer every selected session
- deleting a course leaves its students orphaned but listed
"""

import unittest
import uuid

from tests.helpers import ApiTestCase


class TestStudentApi(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.course = self.create_course(
            name="Intro to Python",
            sessions=[{"startTime": "8:00", "endTime": "9:00"}, {"startTime": "14:00", "endTime": "15:30"}],
        )

    def test_create_and_list_joined_with_course(self) -> None:
        created = self.create_student(self.course["id"], email="  Amina@Example.com ")
        self.assertEqual(created["email"], "amina@example.com")
        self.assertEqual(created["phoneNumber"], "612345678")

        body = self.client.get("/api/students").json()
        self.assertTrue(body["success"])
        self.assertEqual(len(body["data"]), 1)
        listed = body["data"][0]
        self.assertEqual(listed["courseId"], self.course["id"])
        self.assertEqual(listed["course"]["courseName"], "Intro to Python")
        self.assertEqual(listed["selectedSessions"], [{"startTime": "8:00", "endTime": "9:00"}])

    def test_invalid_email_rejected(self) -> None:
        for bad in ("amina", "amina@example", "am ina@example.com"):
            with self.subTest(email=bad):
                response = self.client.post("/api/students", json=self.student_payload(self.course["id"], email=bad))
                self.assertEqual(response.status_code, 400)
                self.assertEqual(
                    response.json(), {"success": False, "error": "Please enter a valid email address"}
                )

    def test_duplicate_email_is_conflict(self) -> None:
        self.create_student(self.course["id"], email="Amina@Example.com")
        response = self.client.post(
            "/api/students", json=self.student_payload(self.course["id"], email="amina@example.com")
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "A student with this email already exists")

    def test_empty_sessions_rejected(self) -> None:
        response = self.client.post(
            "/api/students", json=self.student_payload(self.course["id"], selectedSessions=[])
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "At least one session must be selected")

    def test_unknown_course_rejected(self) -> None:
        response = self.client.post("/api/students", json=self.student_payload(str(uuid.uuid4())))
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Selected course does not exist")

    def test_session_not_offered_rejected(self) -> None:
        response = self.client.post(
            "/api/students",
            json=self.student_payload(self.course["id"], selectedSessions=[{"startTime": "20:00", "endTime": "21:00"}]),
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json(),
            {"success": False, "error": "Session 20:00-21:00 is not offered by the selected course"},
        )
        self.assertEqual(self.client.get("/api/students").json()["data"], [])

    def test_group_linked_course_rejected(self) -> None:
        group = self.create_course(name="Study group", chat_id="120363025@g.us")
        response = self.client.post("/api/students", json=self.student_payload(group["id"]))
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Selected course has no sessions")

    def test_update_checks_sessions_against_course(self) -> None:
        student = self.create_student(self.course["id"])
        other = self.create_course(name="Algebra", sessions=[{"startTime": "10:00", "endTime": "11:00"}])

        response = self.client.put(f"/api/students/{student['id']}", json={"courseId": other["id"]})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Session 8:00-9:00 is not offered by the selected course")

        response = self.client.put(
            f"/api/students/{student['id']}",
            json={"selectedSessions": [{"startTime": "10:00", "endTime": "11:00"}]},
        )
        self.assertEqual(response.status_code, 400)

        response = self.client.put(
            f"/api/students/{student['id']}",
            json={"courseId": other["id"], "selectedSessions": [{"startTime": "10:00", "endTime": "11:00"}]},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["courseId"], other["id"])

    def test_orphaned_after_course_delete(self) -> None:
        student = self.create_student(self.course["id"])
        self.assertEqual(self.client.delete(f"/api/courses/{self.course['id']}").status_code, 200)

        listed = self.client.get("/api/students").json()["data"]
        self.assertEqual([s["id"] for s in listed], [student["id"]])
        self.assertEqual(listed[0]["courseId"], self.course["id"])
        self.assertIsNone(listed[0]["course"])

    def test_sessions_are_a_snapshot(self) -> None:
        student = self.create_student(self.course["id"])
        self.client.put(
            f"/api/courses/{self.course['id']}",
            json={"sessions": [{"startTime": "18:00", "endTime": "19:00"}]},
        )
        listed = self.client.get("/api/students").json()["data"][0]
        self.assertEqual(listed["selectedSessions"], student["selectedSessions"])
        self.assertEqual(listed["course"]["sessions"], [{"startTime": "18:00", "endTime": "19:00"}])

    def test_partial_update(self) -> None:
        student = self.create_student(self.course["id"])
        response = self.client.put(f"/api/students/{student['id']}", json={"university": "SIMAD"})
        self.assertEqual(response.status_code, 200)
        updated = response.json()["data"]
        self.assertEqual(updated["university"], "SIMAD")
        self.assertEqual(updated["name"], student["name"])
        self.assertEqual(updated["email"], student["email"])

    def test_update_validates_supplied_fields(self) -> None:
        student = self.create_student(self.course["id"])
        response = self.client.put(f"/api/students/{student['id']}", json={"email": "nope"})
        self.assertEqual(response.status_code, 400)
        response = self.client.put(f"/api/students/{student['id']}", json={})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "At least one field is required")

    def test_update_to_taken_email_is_conflict(self) -> None:
        self.create_student(self.course["id"], email="first@example.com")
        second = self.create_student(self.course["id"], email="second@example.com")
        response = self.client.put(f"/api/students/{second['id']}", json={"email": "FIRST@example.com"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "A student with this email already exists")

    def test_update_and_delete_unknown_student(self) -> None:
        missing = str(uuid.uuid4())
        response = self.client.put(f"/api/students/{missing}", json={"name": "X"})
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"success": False, "error": "Student not found"})
        response = self.client.delete(f"/api/students/{missing}")
        self.assertEqual(response.status_code, 404)

    def test_delete(self) -> None:
        student = self.create_student(self.course["id"])
        response = self.client.delete(f"/api/students/{student['id']}")
        self.assertEqual(response.json(), {"success": True, "message": "Student deleted successfully"})
        self.assertEqual(self.client.get("/api/students").json()["data"], [])

    def test_students_require_credentials(self) -> None:
        self.client.auth = None
        self.assertEqual(self.client.get("/api/students").status_code, 401)


if __name__ == "__main__":
    unittest.main()
