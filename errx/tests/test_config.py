import os
import unittest
from unittest import mock

from pydantic import ValidationError

from errx.core.config import Settings


class TestSettings(unittest.TestCase):
    def test_defaults(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            s = Settings(_env_file=None)
        self.assertEqual(s.DEFAULT_HTTP_CODE, 500)
        self.assertEqual(s.DEFAULT_ERROR_CODE, "internal_error")
        self.assertFalse(s.EXPOSE_CAUSE)
        self.assertEqual(s.REQUEST_ID_HEADER, "X-Request-ID")

    def test_env_prefix(self):
        env = {"ERRX_DEFAULT_HTTP_CODE": "503", "ERRX_EXPOSE_CAUSE": "true", "ERRX_LOG_LEVEL": "debug"}
        with mock.patch.dict(os.environ, env, clear=True):
            s = Settings(_env_file=None)
        self.assertEqual(s.DEFAULT_HTTP_CODE, 503)
        self.assertTrue(s.EXPOSE_CAUSE)
        self.assertEqual(s.LOG_LEVEL, "DEBUG")

    def test_rejects_non_error_status(self):
        with self.assertRaises(ValidationError):
            Settings(_env_file=None, DEFAULT_HTTP_CODE=200)


if __name__ == "__main__":
    unittest.main()
