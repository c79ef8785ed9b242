"""
Developer workspace: ~/Developer folder layout and Finder preferences.
"""

import logging
from pathlib import Path

from freshbox.installer.commands import CommandRunner, run_command
from freshbox.storage.paths import ensure_directory, get_developer_dir

logger = logging.getLogger(__name__)

WORKSPACE_DIRS: dict[str, str] = {
    "opensource": "Personal open-source projects maintained in public.",
    "boundless": "Company projects.",
    "freelance": "Freelance and contract work, one folder per client.",
    "freelance/_template": "Starting layout copied for each new client project.",
    "playground": "Learning, demos, tutorials and experiments.",
    "design": "UI mockups, icons and other assets.",
    "notes": "Technical notes, docs and blog drafts.",
    "scripts": "Automation scripts, CLI tools and dotfiles.",
    "archive": "Finished or unmaintained projects.",
}

ROOT_README = """\
# ~/Developer

Workspace for every project, asset and tool on this Mac.

```
~/Developer/
├── opensource/      personal open-source projects
├── boundless/       company projects
├── freelance/       client work
├── playground/      learning, demos, experiments
├── design/          mockups, icons, assets
├── notes/           notes, docs, drafts
├── scripts/         automation and CLI tools
└── archive/         finished or retired projects
```

## Conventions

1. Put each new project in the folder matching its type, never in the root.
2. Use kebab-case folder names, e.g. `my-awesome-project`.
3. Move inactive projects to `archive/`.
4. Client work lives in `freelance/<client>/<project>`.
5. Throwaway code goes to `playground/`.
"""


def finder_commands(developer_dir: Path) -> list[tuple[str, ...]]:
    """``defaults write`` invocations applied to Finder."""
    return [
        ("write", "com.apple.finder", "AppleShowAllFiles", "-bool", "true"),
        ("write", "NSGlobalDomain", "AppleShowAllExtensions", "-bool", "true"),
        ("write", "com.apple.finder", "ShowPathbar", "-bool", "true"),
        ("write", "com.apple.finder", "ShowStatusBar", "-bool", "true"),
        ("write", "com.apple.finder", "FXPreferredViewStyle", "-string", "Nlsv"),
        ("write", "com.apple.finder", "FXDefaultSearchScope", "-string", "SCcf"),
        ("write", "com.apple.finder", "FXEnableExtensionChangeWarning", "-bool", "false"),
        ("write", "com.apple.finder", "NewWindowTarget", "-string", "PfLo"),
        ("write", "com.apple.finder", "NewWindowTargetPath", "-string", f"file://{developer_dir}/"),
    ]


def setup_dev_workspace(runner: CommandRunner = run_command, root: Path | None = None) -> Path:
    """
    Create the workspace tree with READMEs and configure Finder.

    Existing READMEs are left alone. Finder preference failures are logged
    and do not fail the step.
    """
    root = root or get_developer_dir()
    for subdir, description in WORKSPACE_DIRS.items():
        directory = ensure_directory(root / subdir)
        readme = directory / "README.md"
        if not readme.exists():
            readme.write_text(f"# {subdir}\n\n{description}\n", encoding="utf-8")

    root_readme = root / "README.md"
    if not root_readme.exists():
        root_readme.write_text(ROOT_README, encoding="utf-8")

    for args in finder_commands(root):
        result = runner("defaults", *args)
        if not result.success:
            logger.warning(f"defaults {' '.join(args)} failed: {result.output}")
    runner("killall", "Finder")

    logger.info(f"Developer workspace ready at {root}")
    return root
