"""Named profiles of standard format parameters, persisted between runs.

A profile is the exported standard parameter table of a FormatterCollection:
a mapping from field type name to line format parameters. Profiles are
stored together in one JSON file in the user's config directory.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import platformdirs

from .errors import TextLayoutError
from .formatter_collection import FormatterCollection

logger = logging.getLogger(__name__)

Profile = Dict[str, Dict[str, Any]]


class SettingsPersistence:
    """Loads and saves standard parameter profiles.

    I/O problems are logged as warnings; loads then return empty results and
    saves return False.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        if config_dir is None:
            config_dir = Path(platformdirs.user_config_dir("linemark", "linemark"))
        self._config_dir = Path(config_dir)
        self._profiles_file = self._config_dir / "profiles.json"
        self._profiles_cache: Optional[Dict[str, Profile]] = None

    @property
    def profiles_file(self) -> Path:
        return self._profiles_file

    def _ensure_config_dir(self) -> None:
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Could not create config directory {self._config_dir}: {e}")

    def _load_all_profiles(self) -> Dict[str, Profile]:
        if self._profiles_cache is not None:
            return self._profiles_cache

        if not self._profiles_file.exists():
            self._profiles_cache = {}
            return self._profiles_cache

        try:
            with open(self._profiles_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load profiles from {self._profiles_file}: {e}")
            self._profiles_cache = {}
            return self._profiles_cache

        if not isinstance(data, dict):
            logger.warning("Profiles file has invalid format (not a dict), ignoring")
            data = {}
        self._profiles_cache = data
        return self._profiles_cache

    def _save_all_profiles(self, profiles: Dict[str, Profile]) -> bool:
        """Write every profile atomically (temp file + rename)."""
        self._ensure_config_dir()
        temp_file = self._profiles_file.with_suffix('.tmp')

        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(profiles, f, indent=2)
            temp_file.replace(self._profiles_file)
            self._profiles_cache = profiles
            return True
        except OSError as e:
            logger.warning(f"Could not save profiles to {self._profiles_file}: {e}")
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError as cleanup_error:
                logger.warning(f"Could not remove {temp_file}: {cleanup_error}")
            return False

    def list_profiles(self) -> List[str]:
        return sorted(self._load_all_profiles())

    def load_profile(self, name: Optional[str]) -> Profile:
        """Return a copy of the named profile, or an empty dict if there is none."""
        if name is None:
            return {}
        profile = self._load_all_profiles().get(name, {})
        if not isinstance(profile, dict):
            logger.warning(f"Profile {name!r} is not a dict, ignoring")
            return {}
        return json.loads(json.dumps(profile))

    def save_profile(self, name: Optional[str], profile: Profile) -> bool:
        if not name:
            return False
        if not self.validate_profile(profile):
            logger.warning(f"Profile {name!r} holds invalid parameters, not saving")
            return False
        profiles = dict(self._load_all_profiles())
        profiles[name] = profile
        return self._save_all_profiles(profiles)

    def delete_profile(self, name: str) -> bool:
        profiles = dict(self._load_all_profiles())
        if name not in profiles:
            return False
        del profiles[name]
        return self._save_all_profiles(profiles)

    def validate_profile(self, profile: Any) -> bool:
        """True if ``profile`` would import cleanly into a FormatterCollection."""
        if not isinstance(profile, dict):
            return False
        try:
            FormatterCollection().import_std_params(profile)
        except TextLayoutError:
            return False
        return True

    def save_collection_params(self, name: str, collection: FormatterCollection) -> bool:
        return self.save_profile(name, collection.export_std_params())

    def load_collection_params(self, name: str, collection: FormatterCollection) -> bool:
        """Import the named profile into ``collection``'s standard table.

        Returns False, leaving the table untouched, if the profile is missing
        or invalid.
        """
        profile = self.load_profile(name)
        if not profile:
            return False
        try:
            collection.import_std_params(profile)
        except TextLayoutError as e:
            logger.warning(f"Profile {name!r} could not be imported: {e}")
            return False
        return True

    def clear_cache(self) -> None:
        self._profiles_cache = None


_persistence: Optional[SettingsPersistence] = None


def get_persistence() -> SettingsPersistence:
    """Return the process-wide SettingsPersistence instance."""
    global _persistence
    if _persistence is None:
        _persistence = SettingsPersistence()
    return _persistence
