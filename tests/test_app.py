"""
Tests for the application object itself: startup and the health check.
"""

import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient

from enrollhub.main import app


class TestApp(unittest.TestCase):
    @patch("enrollhub.main.init_db")
    def test_tables_created_on_startup(self, init_db) -> None:
        with TestClient(app) as client:
            init_db.assert_called_once_with()
            response = client.get("/ping")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"message": "EnrollHub backend is alive!"})


if __name__ == "__main__":
    unittest.main()
