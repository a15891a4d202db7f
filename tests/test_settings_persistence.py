"""Unit tests for profile persistence."""

import json
import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from linemark import settings_persistence
from linemark.formatter_collection import FieldFormatParams, FormatterCollection
from linemark.settings_persistence import SettingsPersistence, get_persistence


PROFILE = {
    "Line1Column": {
        "field_type": "Line1Column",
        "columns": [{"left_margin": "  ", "field_length": 20, "justify": "Left",
                     "date_time_format": "", "right_margin": ""}],
        "terminator": "\n",
        "max_line_length": 72,
        "auto_wrap": True,
    },
}


class TestSettingsPersistence(unittest.TestCase):
    """Test saving and loading standard parameter profiles."""

    def setUp(self):
        """Set up a persistence instance in a temporary directory."""
        self.temp_dir = tempfile.mkdtemp()
        self.persistence = SettingsPersistence(Path(self.temp_dir))

    def tearDown(self):
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def test_save_and_load_profile(self):
        self.assertTrue(self.persistence.save_profile("report", PROFILE))
        self.assertEqual(self.persistence.load_profile("report"), PROFILE)

    def test_load_returns_a_copy(self):
        self.persistence.save_profile("report", PROFILE)
        loaded = self.persistence.load_profile("report")
        loaded["Line1Column"]["max_line_length"] = 10
        self.assertEqual(self.persistence.load_profile("report"), PROFILE)

    def test_load_nonexistent_profile(self):
        self.assertEqual(self.persistence.load_profile("missing"), {})
        self.assertEqual(self.persistence.load_profile(None), {})

    def test_save_without_name(self):
        self.assertFalse(self.persistence.save_profile(None, PROFILE))
        self.assertFalse(self.persistence.save_profile("", PROFILE))
        self.assertFalse(self.persistence.profiles_file.exists())

    def test_invalid_profile_is_not_saved(self):
        bad = {"Line2Column": {"field_type": "Line2Column", "columns": []}}
        with self.assertLogs("linemark.settings_persistence", level="WARNING"):
            self.assertFalse(self.persistence.save_profile("bad", bad))
        self.assertEqual(self.persistence.list_profiles(), [])

    def test_persists_across_instances(self):
        self.persistence.save_profile("b", PROFILE)
        self.persistence.save_profile("a", {})
        fresh = SettingsPersistence(Path(self.temp_dir))
        self.assertEqual(fresh.list_profiles(), ["a", "b"])
        self.assertEqual(fresh.load_profile("b"), PROFILE)

    def test_delete_profile(self):
        self.persistence.save_profile("report", PROFILE)
        self.assertTrue(self.persistence.delete_profile("report"))
        self.assertFalse(self.persistence.delete_profile("report"))
        self.assertEqual(self.persistence.list_profiles(), [])

    def test_corrupt_file(self):
        """Test that a corrupted profiles file is ignored with a warning."""
        self.persistence.profiles_file.write_text("{ not json", encoding="utf-8")
        with self.assertLogs("linemark.settings_persistence", level="WARNING"):
            self.assertEqual(self.persistence.list_profiles(), [])

    def test_non_dict_file(self):
        self.persistence.profiles_file.write_text(json.dumps([1, 2]), encoding="utf-8")
        with self.assertLogs("linemark.settings_persistence", level="WARNING"):
            self.assertEqual(self.persistence.load_profile("x"), {})

    def test_atomic_save_leaves_no_temp_file(self):
        self.persistence.save_profile("report", PROFILE)
        self.assertEqual(os.listdir(self.temp_dir), ["profiles.json"])

    def test_write_failure_returns_false(self):
        with patch("builtins.open", side_effect=OSError("disk full")):
            with self.assertLogs("linemark.settings_persistence", level="WARNING"):
                self.assertFalse(self.persistence.save_profile("report", PROFILE))
        self.persistence.clear_cache()
        self.assertEqual(self.persistence.list_profiles(), [])

    def test_collection_params_round_trip(self):
        formatter = FormatterCollection()
        formatter.set_std_params_line_2col(FieldFormatParams(field_length=8),
                                           FieldFormatParams(field_length=4, justify="Right"))
        self.assertTrue(self.persistence.save_collection_params("table", formatter))

        restored = FormatterCollection()
        self.assertTrue(self.persistence.load_collection_params("table", restored))
        self.assertEqual(restored.export_std_params(), formatter.export_std_params())
        restored.add_line_2col("ab", 1)
        self.assertEqual(restored.build_text(), "ab      " + "   1" + "\n")

    def test_load_missing_collection_params(self):
        formatter = FormatterCollection()
        formatter.set_std_params_line_1col(field_length=3)
        self.assertFalse(self.persistence.load_collection_params("missing", formatter))
        self.assertEqual(formatter.std_params_length(), 1)

    def test_load_invalid_stored_profile(self):
        """A hand-edited invalid profile is rejected and logged."""
        data = {"broken": {"Line1Column": {"field_type": "Line1Column", "columns": []}}}
        self.persistence.profiles_file.write_text(json.dumps(data), encoding="utf-8")
        formatter = FormatterCollection()
        with self.assertLogs("linemark.settings_persistence", level="WARNING"):
            self.assertFalse(self.persistence.load_collection_params("broken", formatter))
        self.assertEqual(formatter.std_params_length(), 0)


class TestDefaultLocation(unittest.TestCase):
    """Test the default config directory and the shared instance."""

    def test_default_dir_uses_platformdirs(self):
        with patch("platformdirs.user_config_dir", return_value="/tmp/linemark-config") as m:
            persistence = SettingsPersistence()
        m.assert_called_once_with("linemark", "linemark")
        self.assertEqual(persistence.profiles_file,
                         Path("/tmp/linemark-config") / "profiles.json")

    def test_get_persistence_is_shared(self):
        with patch.object(settings_persistence, "_persistence", None):
            first = get_persistence()
            self.assertIs(first, get_persistence())


if __name__ == '__main__':
    unittest.main()
