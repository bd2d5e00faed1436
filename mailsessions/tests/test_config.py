import os
import unittest
from unittest.mock import patch

from mailsessions import config


class ConfigHelperTests(unittest.TestCase):
    def test_env_choice_accepts_known_values_case_insensitively(self) -> None:
        with patch.dict(os.environ, {"MAILSESSIONS_TEST_ORDER": " Legacy "}):
            self.assertEqual(config._env_choice("MAILSESSIONS_TEST_ORDER", config.DURATION_ORDERS, "elapsed"), "legacy")

    def test_env_choice_falls_back_on_unknown_or_missing(self) -> None:
        with patch.dict(os.environ, {"MAILSESSIONS_TEST_ORDER": "backwards"}):
            self.assertEqual(config._env_choice("MAILSESSIONS_TEST_ORDER", config.DURATION_ORDERS, "elapsed"), "elapsed")
        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual(config._env_choice("MAILSESSIONS_TEST_ORDER", config.TIMESTAMP_ERROR_POLICIES, "abort"), "abort")

    def test_env_int_and_bool(self) -> None:
        with patch.dict(os.environ, {"MAILSESSIONS_TEST_PORT": "9000", "MAILSESSIONS_TEST_FLAG": "yes"}):
            self.assertEqual(config._env_int("MAILSESSIONS_TEST_PORT", 8000), 9000)
            self.assertTrue(config._env_bool("MAILSESSIONS_TEST_FLAG"))
        with patch.dict(os.environ, {"MAILSESSIONS_TEST_PORT": "eighty"}):
            self.assertEqual(config._env_int("MAILSESSIONS_TEST_PORT", 8000), 8000)


if __name__ == "__main__":
    unittest.main()
