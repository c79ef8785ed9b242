"""
Kaku terminal: config file and zsh plugins.

The Kaku app itself is installed by the Apps page (brew tw93/tap/kakuku).
"""

import logging
from pathlib import Path

from freshbox.installer.commands import CommandRunner, run_checked, run_command
from freshbox.storage.paths import ensure_directory, get_kaku_config_dir

logger = logging.getLogger(__name__)

ZSH_PLUGINS = {
    "zsh-autosuggestions": "https://github.com/zsh-users/zsh-autosuggestions.git",
    "zsh-completions": "https://github.com/zsh-users/zsh-completions.git",
    "zsh-syntax-highlighting": "https://github.com/zsh-users/zsh-syntax-highlighting.git",
    "zsh-z": "https://github.com/agkozak/zsh-z.git",
}

KAKU_LUA = """\
local wezterm = require 'wezterm'

local function resolve_bundled_config()
  local candidates = {
    wezterm.executable_dir:gsub('MacOS/?$', 'Resources') .. '/kaku.lua',
    wezterm.executable_dir .. '/../../assets/macos/Kaku.app/Contents/Resources/kaku.lua',
    '/Applications/Kaku.app/Contents/Resources/kaku.lua',
    (os.getenv('HOME') or '') .. '/Applications/Kaku.app/Contents/Resources/kaku.lua',
  }
  for _, path in ipairs(candidates) do
    local f = io.open(path, 'r')
    if f then
      f:close()
      return path
    end
  end
  return nil
end

local config = {}
local bundled = resolve_bundled_config()

if bundled then
  local ok, loaded = pcall(dofile, bundled)
  if ok and type(loaded) == 'table' then
    config = loaded
  else
    wezterm.log_error('Kaku: failed to load bundled defaults from ' .. bundled)
  end
else
  wezterm.log_error('Kaku: bundled defaults not found')
end

return config
"""


def setup_kaku(runner: CommandRunner = run_command, kaku_dir: Path | None = None) -> list[str]:
    """
    Write ``kaku.lua`` and clone missing zsh plugins.

    Returns:
        Names of the plugins cloned by this call.
    """
    kaku_dir = kaku_dir or get_kaku_config_dir()
    plugin_dir = ensure_directory(kaku_dir / "zsh" / "plugins")

    (kaku_dir / "kaku.lua").write_text(KAKU_LUA, encoding="utf-8")

    cloned: list[str] = []
    for name, repo in ZSH_PLUGINS.items():
        dest = plugin_dir / name
        if dest.exists():
            continue
        run_checked("git", "clone", "--depth", "1", "--quiet", repo, str(dest), runner=runner)
        cloned.append(name)

    logger.info(f"Kaku configured in {kaku_dir} ({len(cloned)} plugin(s) cloned)")
    return cloned
