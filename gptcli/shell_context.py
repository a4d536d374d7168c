import logging
import ntpath
import os
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import psutil

logger = logging.getLogger(__name__)


class Platform(Enum):
    """Host platform families the tool knows how to phrase prompts for."""
    WINDOWS = "windows"
    DARWIN = "darwin"
    LINUX = "linux"
    OTHER = "other"


@dataclass(frozen=True)
class ShellContext:
    """The platform and the name of the shell that invoked the tool."""
    platform: Platform
    shell_name: str


def detect_platform(identifier: Optional[str] = None) -> Platform:
    """Map a ``sys.platform`` style identifier onto a Platform."""
    identifier = sys.platform if identifier is None else identifier
    if identifier in ("win32", "cygwin"):
        return Platform.WINDOWS
    if identifier == "darwin":
        return Platform.DARWIN
    if identifier.startswith("linux"):
        return Platform.LINUX
    return Platform.OTHER


def normalize_shell_name(name: str) -> str:
    """
    Strip the directory and the login shell marker from a process name.

    ``/bin/-zsh`` becomes ``zsh``; ``C:\\Windows\\System32\\cmd.exe`` becomes ``cmd.exe``.
    The ``.exe`` suffix is kept since the Windows launchers are matched with it.
    """
    name = ntpath.basename(os.path.basename(name.strip()))
    return name.lstrip("-")


def parent_process_name() -> str:
    """Return the executable name of the parent process, or "" when unknown."""
    try:
        return normalize_shell_name(psutil.Process(os.getppid()).name())
    except (psutil.Error, OSError) as e:
        logger.debug(f"Could not determine the parent process name: {e}")
        return ""


def resolve() -> ShellContext:
    """Resolve the shell context of the current process. Never raises."""
    return ShellContext(platform=detect_platform(), shell_name=parent_process_name())
