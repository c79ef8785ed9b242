"""
UI text for English and Chinese.
"""

from enum import Enum


class Language(str, Enum):
    EN = "en"
    ZH = "zh"

    @property
    def label(self) -> str:
        return {"en": "English", "zh": "简体中文"}[self.value]


TEXTS: dict[Language, dict[str, str]] = {
    Language.EN: {
        "page_welcome": "Welcome",
        "page_tools": "Dev Tools",
        "page_apps": "Apps",
        "page_node_versions": "Node.js",
        "page_ai_tools": "AI Tools",
        "page_codex_config": "Codex Config",
        "page_claude_config": "Claude Config",
        "page_mcp": "MCP",
        "page_extras": "Extras",
        "page_system_defaults": "Defaults",
        "page_installing": "Installing",
        "page_done": "Done",
        "lang_title": "Language / 语言",
        "lang_prompt": "Select your language / 选择语言",
        "welcome_title": "Welcome to freshbox!",
        "welcome_desc": "This tool will help you set up your new Mac with:",
        "welcome_tools": "Development tools (brew, git, java, python, rust, go...)",
        "welcome_fnm": "Node.js version management via fnm",
        "welcome_apps": "Applications (Chrome, Zed, IINA, Kaku, Karabiner)",
        "welcome_ai": "AI tools (Codex, Claude Code) with full config",
        "welcome_mcp": "MCP servers (Playwright, Context7, and more)",
        "welcome_system": "System defaults + Zed theme, Kaku setup, dev workspace",
        "welcome_start": "Press Enter to get started",
        "welcome_quit": "q to quit",
        "title_tools": "Development Tools",
        "title_apps": "Applications",
        "title_ai_tools": "AI Tools",
        "title_node_versions": "Select Node.js Versions to Install",
        "node_hint": "fnm will be installed first, then these versions.",
        "node_fallback_hint": "Showing common major versions:",
        "title_codex_config": "Codex Configuration",
        "title_claude_config": "Claude Code Configuration",
        "title_mcp": "MCP Servers",
        "title_mcp_desc": "Select MCP servers to configure for your AI tools",
        "title_extras": "Extra Setup",
        "title_extras_desc": "Optional configurations to enhance your workflow",
        "extra_zed_theme": "Zed Catppuccin Blur Theme",
        "extra_zed_theme_desc": "Catppuccin blur theme with an icy blue tint, follows light/dark mode",
        "extra_kaku_init": "Kaku Terminal Setup",
        "extra_kaku_init_desc": "Kaku config + zsh plugins (autosuggestions, completions, syntax-highlighting, z)",
        "extra_karabiner_kaku": "Karabiner ⌃⌥⌘T → Kaku",
        "extra_karabiner_kaku_desc": "Ctrl+Option+Cmd+T opens Kaku in Finder's current folder",
        "extra_dev_workspace": "Developer Workspace",
        "extra_dev_workspace_desc": "~/Developer folder layout + Finder (hidden files, path bar, list view)",
        "title_system_defaults": "System Defaults",
        "default_browser_chrome": "Default Browser → Google Chrome",
        "default_browser_chrome_desc": "Set Chrome as system default browser",
        "default_editor_zed": "Default Editor → Zed",
        "default_editor_zed_desc": "Set Zed as global code editor",
        "default_player_iina": "Default Player → IINA",
        "default_player_iina_desc": "Set IINA as default media player",
        "cfg_model": "Model",
        "cfg_think_level": "Thinking Level",
        "cfg_base_url": "Base URL",
        "cfg_api_key": "API Key",
        "installed": "installed",
        "title_installing": "Installing...",
        "install_prepare": "Preparing installation...",
        "install_more_above": "... {count} more above",
        "install_next_up": "Next up:",
        "title_done": "All done!",
        "done_msg": "Your Mac is set up and ready to go.",
        "done_errors": "{count} task(s) failed.",
        "done_log": "Full log: {path}",
        "done_exit": "Press Enter or q to exit.",
        "footer_nav": "↑/↓ navigate • space toggle • a all • n none • tab next • shift+tab back • q quit",
        "footer_form": "↑/↓ switch field • enter confirm • esc back",
        "footer_lang": "↑/↓ choose • enter confirm • q quit",
    },
    Language.ZH: {
        "page_welcome": "欢迎",
        "page_tools": "开发工具",
        "page_apps": "应用程序",
        "page_node_versions": "Node.js",
        "page_ai_tools": "AI 工具",
        "page_codex_config": "Codex 配置",
        "page_claude_config": "Claude 配置",
        "page_mcp": "MCP",
        "page_extras": "额外配置",
        "page_system_defaults": "系统默认",
        "page_installing": "安装中",
        "page_done": "完成",
        "lang_title": "Language / 语言",
        "lang_prompt": "Select your language / 选择语言",
        "welcome_title": "欢迎使用 freshbox！",
        "welcome_desc": "这个工具将帮助你配置新 Mac：",
        "welcome_tools": "开发工具（brew、git、java、python、rust、go...）",
        "welcome_fnm": "通过 fnm 管理 Node.js 多版本",
        "welcome_apps": "常用应用（Chrome、Zed、IINA、Kaku、Karabiner）",
        "welcome_ai": "AI 工具（Codex、Claude Code）完整配置",
        "welcome_mcp": "MCP 服务（Playwright、Context7 等）",
        "welcome_system": "系统默认设置 + Zed 主题、Kaku 配置、开发工作区",
        "welcome_start": "按 Enter 开始",
        "welcome_quit": "q 退出",
        "title_tools": "开发工具",
        "title_apps": "应用程序",
        "title_ai_tools": "AI 工具",
        "title_node_versions": "选择要安装的 Node.js 版本",
        "node_hint": "fnm 将先被安装，然后安装这些版本。",
        "node_fallback_hint": "显示常用主版本：",
        "title_codex_config": "Codex 配置",
        "title_claude_config": "Claude Code 配置",
        "title_mcp": "MCP 服务",
        "title_mcp_desc": "选择要为 AI 工具配置的 MCP 服务",
        "title_extras": "额外配置",
        "title_extras_desc": "可选的工作流增强配置",
        "extra_zed_theme": "Zed Catppuccin Blur 主题",
        "extra_zed_theme_desc": "冰蓝色调的 catppuccin-blur 主题，自动跟随系统明暗模式",
        "extra_kaku_init": "Kaku 终端初始化",
        "extra_kaku_init_desc": "Kaku 配置 + zsh 插件（自动补全、语法高亮、目录跳转等）",
        "extra_karabiner_kaku": "Karabiner ⌃⌥⌘T → Kaku",
        "extra_karabiner_kaku_desc": "Ctrl+Option+Cmd+T 在 Finder 当前目录打开 Kaku",
        "extra_dev_workspace": "开发工作区",
        "extra_dev_workspace_desc": "创建 ~/Developer 目录结构 + 配置 Finder（隐藏文件、路径栏、列表视图）",
        "title_system_defaults": "系统默认设置",
        "default_browser_chrome": "默认浏览器 → Google Chrome",
        "default_browser_chrome_desc": "将 Chrome 设为系统默认浏览器",
        "default_editor_zed": "默认编辑器 → Zed",
        "default_editor_zed_desc": "将 Zed 设为全局代码编辑器",
        "default_player_iina": "默认播放器 → IINA",
        "default_player_iina_desc": "将 IINA 设为默认媒体播放器",
        "cfg_model": "模型",
        "cfg_think_level": "思考级别",
        "cfg_base_url": "接口地址",
        "cfg_api_key": "API 密钥",
        "installed": "已安装",
        "title_installing": "安装中...",
        "install_prepare": "正在准备安装...",
        "install_more_above": "... 上方还有 {count} 项",
        "install_next_up": "接下来：",
        "title_done": "全部完成！",
        "done_msg": "你的 Mac 已配置完成，准备就绪。",
        "done_errors": "{count} 个任务失败。",
        "done_log": "完整日志：{path}",
        "done_exit": "按 Enter 或 q 退出。",
        "footer_nav": "↑/↓ 导航 • 空格 切换 • a 全选 • n 全不选 • tab 下一步 • shift+tab 上一步 • q 退出",
        "footer_form": "↑/↓ 切换字段 • enter 确认 • esc 返回",
        "footer_lang": "↑/↓ 选择 • enter 确认 • q 退出",
    },
}


def get_text(language: Language, key: str, **values: object) -> str:
    """
    Look up a UI string, falling back to English and then to the key itself.

    Args:
        language: UI language.
        key: Text key.
        **values: Values formatted into the string.
    """
    text = TEXTS[language].get(key) or TEXTS[Language.EN].get(key, key)
    return text.format(**values) if values else text
