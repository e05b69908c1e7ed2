"""Tests for the health and root endpoints."""

import unittest
from unittest.mock import patch, MagicMock

from fastapi.testclient import TestClient
from pymongo.errors import PyMongoError

from api.main import app, SERVICE_NAME, VERSION


class TestHealth(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(app)

    @patch('api.routes.health.get_mongodb_client')
    def test_healthy_when_mongodb_pings(self, mock_get_client):
        mock_get_client.return_value = MagicMock()

        response = self.client.get("/health")

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["status"], "healthy")
        self.assertEqual(data["services"]["mongodb"]["status"], "healthy")

    @patch('api.routes.health.get_mongodb_client')
    def test_degraded_when_mongodb_missing(self, mock_get_client):
        mock_get_client.return_value = None

        response = self.client.get("/health")

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()["status"], "degraded")

    @patch('api.routes.health.get_mongodb_client')
    def test_degraded_when_ping_fails(self, mock_get_client):
        mock_client = MagicMock()
        mock_client.admin.command.side_effect = PyMongoError("no primary")
        mock_get_client.return_value = mock_client

        response = self.client.get("/health")

        self.assertEqual(response.status_code, 503)
        self.assertIn("no primary", response.json()["services"]["mongodb"]["message"])


class TestRoot(unittest.TestCase):

    def test_root_reports_service_and_version(self):
        response = TestClient(app).get("/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {
            "service": SERVICE_NAME,
            "version": VERSION,
            "status": "running",
        })


if __name__ == '__main__':
    unittest.main()
