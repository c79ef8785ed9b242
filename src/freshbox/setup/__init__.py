"""Optional extra setup steps."""

from freshbox.setup.karabiner import setup_karabiner
from freshbox.setup.kaku import setup_kaku
from freshbox.setup.workspace import setup_dev_workspace
from freshbox.setup.zed import setup_zed_theme

__all__ = [
    "setup_dev_workspace",
    "setup_karabiner",
    "setup_kaku",
    "setup_zed_theme",
]
