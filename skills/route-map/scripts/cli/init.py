from __future__ import annotations

from pathlib import Path
from typing import List

from _fs import write_text_if_absent
from utils import ToolState, progress, run_cmd

PLAYWRIGHT_CONFIG = "playwright.config.ts"
PLAYWRIGHT_INSTALL = ("npx", "playwright", "install")

PLAYWRIGHT_CONFIG_TEXT = """import { defineConfig } from "@playwright/test";

export default defineConfig({
  testDir: "./tests",
  timeout: 30_000,
  retries: 0,
  use: {
    headless: true,
    viewport: { width: 1280, height: 720 },
    actionTimeout: 5_000,
    ignoreHTTPSErrors: true,
  },
});
"""


def install_browsers(cwd: Path, warnings: List[str], tools: ToolState) -> bool:
    progress("Installing Playwright browsers...")
    result = run_cmd(list(PLAYWRIGHT_INSTALL), cwd=cwd, warnings=warnings, tools=tools, capture=False)
    if result is None:
        return False
    if result.returncode != 0:
        warnings.append(f"{' '.join(PLAYWRIGHT_INSTALL)} exited with {result.returncode}")
        return False
    progress("Installed Playwright browsers", done=True)
    return True


def init_project(cwd: Path, warnings: List[str], tools: ToolState) -> int:
    """Install browsers, then scaffold playwright.config.ts unless one exists."""
    if not install_browsers(cwd, warnings, tools):
        return 1
    written = write_text_if_absent(cwd, PLAYWRIGHT_CONFIG, PLAYWRIGHT_CONFIG_TEXT)
    if written is None:
        warnings.append(f"{PLAYWRIGHT_CONFIG} already exists, skipping")
    else:
        progress(f"Wrote {written}", done=True)
    return 0
