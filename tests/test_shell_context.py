import unittest
from unittest.mock import MagicMock, patch

import psutil

from gptcli import shell_context
from gptcli.shell_context import Platform, ShellContext


class TestDetectPlatform(unittest.TestCase):

    def test_known_platforms(self):
        self.assertEqual(shell_context.detect_platform("win32"), Platform.WINDOWS)
        self.assertEqual(shell_context.detect_platform("darwin"), Platform.DARWIN)
        self.assertEqual(shell_context.detect_platform("linux"), Platform.LINUX)

    def test_unknown_platform_is_other(self):
        self.assertEqual(shell_context.detect_platform("freebsd13"), Platform.OTHER)


class TestShellName(unittest.TestCase):

    def test_normalize_strips_path_and_login_marker(self):
        self.assertEqual(shell_context.normalize_shell_name("/bin/zsh"), "zsh")
        self.assertEqual(shell_context.normalize_shell_name("-bash"), "bash")
        self.assertEqual(
            shell_context.normalize_shell_name("C:\\Windows\\System32\\cmd.exe"), "cmd.exe"
        )

    def test_normalize_keeps_exe_suffix(self):
        self.assertEqual(shell_context.normalize_shell_name("powershell.exe"), "powershell.exe")

    @patch("gptcli.shell_context.psutil.Process")
    def test_parent_process_name(self, mock_process):
        mock_process.return_value.name.return_value = "zsh"

        self.assertEqual(shell_context.parent_process_name(), "zsh")

    @patch("gptcli.shell_context.psutil.Process")
    def test_detection_failure_degrades_to_empty_name(self, mock_process):
        mock_process.side_effect = psutil.NoSuchProcess(1234)

        self.assertEqual(shell_context.parent_process_name(), "")

    @patch("gptcli.shell_context.psutil.Process")
    def test_access_denied_degrades_to_empty_name(self, mock_process):
        mock_process.return_value.name.side_effect = psutil.AccessDenied(1234)

        self.assertEqual(shell_context.parent_process_name(), "")


class TestResolve(unittest.TestCase):

    @patch("gptcli.shell_context.parent_process_name", return_value="bash")
    @patch("gptcli.shell_context.sys")
    def test_resolve(self, mock_sys, _mock_name):
        mock_sys.platform = "linux"

        self.assertEqual(shell_context.resolve(), ShellContext(Platform.LINUX, "bash"))

    @patch("gptcli.shell_context.logger")
    @patch("gptcli.shell_context.parent_process_name", return_value="zsh")
    def test_resolve_logs_nothing_before_logging_is_set_up(self, _mock_name, mock_logger):
        shell_context.resolve()

        mock_logger.debug.assert_not_called()

    @patch("gptcli.shell_context.psutil.Process", side_effect=psutil.NoSuchProcess(1))
    def test_resolve_never_raises(self, _mock_process):
        ctx = shell_context.resolve()

        self.assertEqual(ctx.shell_name, "")


if __name__ == "__main__":
    unittest.main()
