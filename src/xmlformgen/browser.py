"""
Open rendered forms in a web browser.
"""

import subprocess
import sys
import webbrowser
from pathlib import Path
from typing import Optional


def path_to_url(filepath: str) -> str:
    """Convert a local file path to an absolute file:// URL."""
    return Path(filepath).resolve().as_uri()


def launch_browser(url: str, browser_path: Optional[str] = None) -> bool:
    """
    Launch web browser to open URL.

    Args:
        url: URL to open
        browser_path: Optional path to browser executable (None = system default)

    Returns:
        True if successful, False otherwise
    """
    if browser_path:
        return _launch_custom_browser(url, browser_path)
    return _launch_default_browser(url)


def _launch_default_browser(url: str) -> bool:
    try:
        return webbrowser.open(url)
    except webbrowser.Error as e:
        print(f'Warning: webbrowser.open() failed: {e}', file=sys.stderr)
        return False


def _launch_custom_browser(url: str, browser_path: str) -> bool:
    """Run a specific browser executable, without a shell."""
    try:
        subprocess.Popen([browser_path, url])
        return True
    except OSError as e:
        print(f'Warning: Failed to launch {browser_path}: {e}', file=sys.stderr)
        return False
