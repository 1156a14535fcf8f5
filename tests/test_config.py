import tempfile
import unittest
from pathlib import Path

from pydantic import ValidationError

from iptv_filter.exceptions import ConfigurationError
from iptv_filter.models.config import (
    DEFAULT_MASTER_URL,
    DEFAULT_OUTPUT_PATH,
    FilterConfig,
)
from iptv_filter.storage.config_manager import ConfigManager


class FilterConfigTests(unittest.TestCase):
    def test_defaults(self):
        config = FilterConfig()
        self.assertEqual(DEFAULT_MASTER_URL, config.master_url)
        self.assertEqual(DEFAULT_OUTPUT_PATH, config.output_path)
        self.assertEqual(12, config.max_concurrent)
        self.assertEqual(9.0, config.timeout)
        self.assertEqual(8191, config.range_bytes)
        self.assertFalse(config.preserve_completion_order)
        self.assertTrue(config.user_agent.startswith("iptv-filter/"))

    def test_concurrency_is_clamped(self):
        self.assertEqual(12, FilterConfig(max_concurrent=64).max_concurrent)
        self.assertEqual(3, FilterConfig(max_concurrent=3).max_concurrent)

    def test_invalid_values(self):
        for bad in (
            {"max_concurrent": 0},
            {"timeout": 0},
            {"master_timeout": -1},
            {"range_bytes": 0},
            {"master_url": "ftp://mirror.test/index.m3u"},
            {"master_url": "not a url"},
            {"output_path": "   "},
        ):
            with self.subTest(bad=bad), self.assertRaises(ValidationError):
                FilterConfig(**bad)


class ConfigManagerTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.config_file = Path(self._tmp.name) / "iptv-filter" / "config.ini"

    def tearDown(self):
        self._tmp.cleanup()

    def write(self, text: str) -> None:
        self.config_file.parent.mkdir(parents=True, exist_ok=True)
        self.config_file.write_text(text, encoding="utf-8")

    def test_missing_file_uses_defaults(self):
        config = ConfigManager(self.config_file).load_config()
        self.assertEqual(FilterConfig().model_dump(exclude={"config_path"}),
                         config.model_dump(exclude={"config_path"}))

    def test_file_values_and_cli_overrides(self):
        self.write(
            "[DEFAULT]\n"
            "master_url = https://mirror.test/all.m3u\n"
            "max_concurrent = 4\n"
            "timeout = 2.5\n"
            "preserve_completion_order = yes\n"
        )
        config = ConfigManager(self.config_file).load_config({"max_concurrent": 6})
        self.assertEqual("https://mirror.test/all.m3u", config.master_url)
        self.assertEqual(6, config.max_concurrent)
        self.assertEqual(2.5, config.timeout)
        self.assertTrue(config.preserve_completion_order)
        self.assertEqual(str(self.config_file.parent), config.config_path)

    def test_invalid_number_raises_configuration_error(self):
        self.write("[DEFAULT]\nmax_concurrent = many\n")
        with self.assertRaises(ConfigurationError):
            ConfigManager(self.config_file).load_config()

    def test_validation_failure_raises_configuration_error(self):
        self.write("[DEFAULT]\ntimeout = -3\n")
        with self.assertRaises(ConfigurationError):
            ConfigManager(self.config_file).load_config()

    def test_unparseable_file_raises_configuration_error(self):
        self.write("this is not ini\n")
        with self.assertRaises(ConfigurationError):
            ConfigManager(self.config_file).load_config()

    def test_saved_defaults_load_back(self):
        manager = ConfigManager(self.config_file)
        manager.save_new_config({"timeout": 4.0})
        config = ConfigManager(self.config_file).load_config()
        self.assertEqual(4.0, config.timeout)
        self.assertEqual(DEFAULT_MASTER_URL, config.master_url)
        self.assertIn("range_bytes = 8191", self.config_file.read_text(encoding="utf-8"))


if __name__ == "__main__":
    unittest.main()
