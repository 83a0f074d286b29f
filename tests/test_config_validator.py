"""Unit tests for JSON Schema configuration validation."""

import tempfile
import unittest
from pathlib import Path

from configs.validator import validate_config, validate_config_file
from exceptions import ConfigValidationError, InvalidConfigError


class TestConfigValidator(unittest.TestCase):
    """Test schema validation and default filling."""

    def setUp(self):
        """Set up a minimal valid configuration."""
        self.config = {
            "camera": {"horizontal_fov_deg": 90.0, "vertical_fov_deg": 60.0},
            "rig": {"x_offset": 0.1, "y_offset": -1.0, "z_offset": 1.4},
        }

    def test_valid_config_passes_and_fills_defaults(self):
        validate_config(self.config)

        self.assertEqual(self.config["camera"]["width"], 1280)
        self.assertIsNone(self.config["tracking"]["max_misses"])
        self.assertEqual(self.config["depth"]["method"], "constant")

    def test_explicit_values_are_kept(self):
        self.config["tracking"] = {"max_misses": 4, "max_match_distance_px": 80}
        validate_config(self.config)

        self.assertEqual(self.config["tracking"]["max_misses"], 4)
        self.assertEqual(self.config["tracking"]["max_match_distance_px"], 80)

    def test_missing_fov_is_caught(self):
        del self.config["camera"]["vertical_fov_deg"]

        with self.assertRaises(ConfigValidationError) as ctx:
            validate_config(self.config)
        self.assertTrue(any("vertical_fov_deg" in e for e in ctx.exception.validation_errors))

    def test_negative_max_misses_is_caught(self):
        self.config["tracking"] = {"max_misses": -2}

        with self.assertRaises(ConfigValidationError) as ctx:
            validate_config(self.config)
        self.assertTrue(any("tracking" in e for e in ctx.exception.validation_errors))

    def test_unknown_depth_method_is_caught(self):
        self.config["depth"] = {"method": "lidar"}

        with self.assertRaises(ConfigValidationError):
            validate_config(self.config)

    def test_box_height_requires_object_height(self):
        self.config["depth"] = {"method": "box_height"}

        with self.assertRaises(ConfigValidationError):
            validate_config(self.config)

    def test_stereo_requires_baseline(self):
        self.config["depth"] = {"method": "stereo"}

        with self.assertRaises(ConfigValidationError):
            validate_config(self.config)

    def test_string_offset_is_caught(self):
        self.config["rig"]["x_offset"] = "left"

        with self.assertRaises(ConfigValidationError):
            validate_config(self.config)


class TestConfigFileValidation(unittest.TestCase):
    """Test reading and validating configuration files."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.path = Path(self.tmpdir.name) / "config.yaml"

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_file_is_parsed_and_defaults_filled(self):
        self.path.write_text("camera: {horizontal_fov_deg: 80, vertical_fov_deg: 50}\nrig: {}\n")

        data = validate_config_file(self.path)

        self.assertEqual(data["camera"]["height"], 720)
        self.assertEqual(data["rig"]["z_offset"], 0.0)
        self.assertEqual(data["depth"]["method"], "constant")

    def test_missing_file_is_invalid(self):
        with self.assertRaises(InvalidConfigError):
            validate_config_file(self.path)

    def test_malformed_yaml_is_invalid(self):
        self.path.write_text("rig: {x_offset: [1,\n")

        with self.assertRaises(InvalidConfigError):
            validate_config_file(self.path)

    def test_empty_file_fails_schema(self):
        self.path.write_text("")

        with self.assertRaises(ConfigValidationError):
            validate_config_file(self.path)


if __name__ == "__main__":
    unittest.main()
