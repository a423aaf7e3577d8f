import os
import unittest
from unittest import mock

from config import Settings


class SettingsTestCase(unittest.TestCase):
    """Settings resolution between explicit arguments and the environment."""

    @mock.patch.dict(os.environ, {"SESSION_TTL_HOURS": "5", "DATABASE_NAME": "from_env"})
    def test_environment_fills_missing_arguments(self):
        settings = Settings()
        self.assertEqual(settings.session_ttl_hours, 5)
        self.assertEqual(settings.session_ttl_seconds, 5 * 60 * 60)
        self.assertEqual(settings.database_name, "from_env")

    @mock.patch.dict(os.environ, {"SESSION_TTL_HOURS": "5", "DATABASE_NAME": "from_env", "COOKIE_SECURE": "true"})
    def test_explicit_falsy_arguments_are_kept(self):
        settings = Settings(session_ttl_hours=0, database_name="", cookie_secure=False)
        self.assertEqual(settings.session_ttl_hours, 0)
        self.assertEqual(settings.database_name, "")
        self.assertFalse(settings.cookie_secure)
