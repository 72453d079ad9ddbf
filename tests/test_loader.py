import os
import sys
import unittest

# Add src to path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
src_path = os.path.join(project_root, "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from settings.exceptions import ConfigError
from settings.loader import DEFAULT_SNAPLEN, load_config, parse_config

EXAMPLE_CONFIG = os.path.join(project_root, "capana.conf.yml")


class ConfigLoaderTests(unittest.TestCase):
    def test_example_config_loads(self):
        config = load_config(EXAMPLE_CONFIG)
        self.assertEqual(config.config.snaplen, 1500)
        self.assertFalse(config.config.promiscuous)
        self.assertEqual(config.capture[0], {"Ether": ["src", "dst", "type"]})

    def test_sections_are_case_insensitive(self):
        config = parse_config({
            "CONFIG": {"SnapLen": 96, "Promiscuous": True, "PrintStats": True, "Output": "out.csv"},
            "policy": {"Unmatched": "drop"},
            "Plugins": [{"name": "geoip"}],
            "capture": [{"IP": ["src"]}],
        })
        self.assertEqual(config.config.snaplen, 96)
        self.assertTrue(config.config.promiscuous)
        self.assertTrue(config.config.print_stats)
        self.assertEqual(config.config.output, "out.csv")
        self.assertEqual(config.policy.unmatched, "drop")
        self.assertEqual(config.plugins, [{"name": "geoip"}])
        self.assertEqual(config.capture, [{"IP": ["src"]}])

    def test_empty_document_uses_defaults(self):
        config = parse_config(None)
        self.assertEqual(config.config.snaplen, DEFAULT_SNAPLEN)
        self.assertEqual(config.config.output, "")
        self.assertEqual(config.capture, [])

    def test_wrong_shapes_are_rejected(self):
        for data in (
            ["not", "a", "mapping"],
            {"Config": ["snaplen"]},
            {"Config": {"snaplen": "big"}},
            {"Config": {"snaplen": True}},
            {"Capture": {"IP": ["src"]}},
        ):
            with self.subTest(data=data):
                with self.assertRaises(ConfigError):
                    parse_config(data)

    def test_missing_file(self):
        with self.assertRaises(ConfigError):
            load_config(os.path.join(project_root, "does-not-exist.yml"))

    def test_describe_lists_every_section(self):
        lines = parse_config({"Config": {"snaplen": 64}}).describe()
        self.assertIn("config: snaplen: 64", lines)
        self.assertIn("config: promiscuous: false", lines)
        self.assertTrue(any(line.startswith("policy: filter:") for line in lines))
        self.assertTrue(any(line.startswith("plugins:") for line in lines))
        self.assertTrue(any(line.startswith("capture:") for line in lines))


if __name__ == "__main__":
    unittest.main()
