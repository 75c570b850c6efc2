"""Active register profile, shared by the CLI and receipt rendering."""

import logging
from typing import Optional, Union

from .profile_loader import RegisterProfile, get_default_profile, load_profile

logger = logging.getLogger(__name__)

_active: Optional[RegisterProfile] = None


def set_profile(profile: Union[str, RegisterProfile] = "default") -> RegisterProfile:
    """Make a profile the active one.

    Args:
        profile: Profile name under configs/profiles, or a RegisterProfile

    Raises:
        FileNotFoundError: If the named profile doesn't exist
        ValueError: If the named profile is invalid
    """
    global _active
    _active = profile if isinstance(profile, RegisterProfile) else load_profile(profile)
    logger.debug("Active register profile: %s", _active.name)
    return _active


def get_profile() -> RegisterProfile:
    """Active profile; the default profile until set_profile() is called."""
    global _active
    if _active is None:
        _active = get_default_profile()
    return _active


def reset_profile() -> None:
    global _active
    _active = None
