"""Environment-defaults augmentation."""

from __future__ import annotations

from .catalog import get_profile
from .models import DataAccessChoice


def augment_env(env_content: str, choice: DataAccessChoice) -> str:
    """Append the connection-string variable for *choice* to ``.env`` content.

    ``NONE`` returns the content unchanged.  The generated module carries its
    own fallback, so the project still starts if the line is removed.
    """
    if choice == DataAccessChoice.NONE:
        return env_content

    if env_content and not env_content.endswith("\n"):
        env_content += "\n"
    return f"{env_content}{get_profile(choice).env_line}\n"
