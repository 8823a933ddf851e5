from unittest import TestCase, mock
import logging
import unittest
import numpy as np

import tapegrad as tg
from tapegrad import ConfigurationError, Settings
from tapegrad.infrastructure import _config
from tapegrad.infrastructure._logging import PACKAGE_LOGGER_NAME, get_logger


class _RestoreSettings:
    def setUp(self) -> None:
        self._saved = tg.get_settings()

    def tearDown(self) -> None:
        tg.configure(dtype=self._saved.dtype, log_level=self._saved.log_level)


class TestSettings(_RestoreSettings, TestCase):
    def test_defaults(self):
        s = Settings()
        self.assertEqual(s.dtype, "float32")
        self.assertEqual(s.log_level, "WARNING")
        self.assertEqual(s.np_dtype, np.dtype(np.float32))
        self.assertEqual(s.log_level_value, logging.WARNING)

    def test_settings_are_frozen(self):
        with self.assertRaises(Exception):
            Settings().dtype = "float64"

    def test_invalid_values_raise(self):
        with self.assertRaises(ConfigurationError):
            Settings(dtype="int8")
        with self.assertRaises(ConfigurationError):
            Settings(log_level="LOUD")

    def test_log_level_is_normalized(self):
        self.assertEqual(Settings(log_level="debug").log_level, "DEBUG")

    def test_integer_log_level_is_stored_by_name(self):
        self.assertEqual(Settings(log_level=logging.DEBUG).log_level, "DEBUG")
        s = tg.configure(log_level=10)
        self.assertEqual(s.log_level, "DEBUG")
        self.assertEqual(logging.getLogger(PACKAGE_LOGGER_NAME).level, logging.DEBUG)

    def test_non_level_values_raise_configuration_error(self):
        for bad in (17, True, None, 1.5, ["DEBUG"]):
            with self.subTest(log_level=bad):
                with self.assertRaises(ConfigurationError):
                    Settings(log_level=bad)
        current = tg.get_settings()
        with self.assertRaises(ConfigurationError):
            tg.configure(log_level=None)
        self.assertIs(tg.get_settings(), current)

    def test_settings_from_env(self):
        env = {"TAPEGRAD_DTYPE": "float64", "TAPEGRAD_LOG_LEVEL": "info"}
        with mock.patch.dict("os.environ", env):
            s = _config.settings_from_env()
        self.assertEqual(s.dtype, "float64")
        self.assertEqual(s.log_level, "INFO")

    def test_settings_from_env_rejects_bad_dtype(self):
        with mock.patch.dict("os.environ", {"TAPEGRAD_DTYPE": "complex64"}):
            with self.assertRaises(ConfigurationError):
                _config.settings_from_env()

    def test_configure_changes_dtype_of_new_values(self):
        before = tg.variable([1.0])
        tg.configure(dtype="float64")
        after = tg.variable([1.0])
        self.assertEqual(before.dtype, np.float32)
        self.assertEqual(after.dtype, np.float64)
        self.assertEqual(tg.constant([1, 2]).dtype, np.float64)

    def test_configure_rejects_unknown_field(self):
        with self.assertRaises(ConfigurationError):
            tg.configure(device="cuda")

    def test_configure_invalid_value_keeps_previous_settings(self):
        current = tg.get_settings()
        with self.assertRaises(ConfigurationError):
            tg.configure(dtype="float128x")
        self.assertIs(tg.get_settings(), current)


class TestLogging(_RestoreSettings, TestCase):
    def test_module_loggers_are_children_of_package_logger(self):
        self.assertEqual(get_logger("tapegrad.graph").name, "tapegrad.graph")
        self.assertEqual(get_logger("elsewhere").name, "tapegrad.elsewhere")

    def test_package_logger_has_single_handler(self):
        get_logger("a")
        get_logger("b")
        self.assertEqual(len(logging.getLogger(PACKAGE_LOGGER_NAME).handlers), 1)

    def test_configure_applies_log_level(self):
        tg.configure(log_level="DEBUG")
        self.assertEqual(logging.getLogger(PACKAGE_LOGGER_NAME).level, logging.DEBUG)
        tg.configure(log_level="ERROR")
        self.assertEqual(logging.getLogger(PACKAGE_LOGGER_NAME).level, logging.ERROR)

    def test_graph_activity_is_logged_at_debug(self):
        tg.configure(log_level="DEBUG")
        with self.assertLogs(PACKAGE_LOGGER_NAME, level="DEBUG") as logs:
            x = tg.variable([1.0])
            y = tg.variable([2.0])
            z = x * y
            z.backward()
            z.reset()
            z.freeze().unfreeze()
        output = "\n".join(logs.output)
        self.assertIn("created", output)
        self.assertIn("merged tapes", output)
        self.assertIn("backward from node", output)
        self.assertIn("reset", output)
        self.assertIn("freeze", output)
        self.assertIn("unfreeze", output)


if __name__ == "__main__":
    unittest.main()
