import io
import subprocess
import unittest
from unittest.mock import MagicMock, patch

from rich.console import Console

from gptcli.errors import ExecutionError, UnsupportedShellError
from gptcli.executor import CommandExecutor, Launcher, is_confirmed, resolve_launcher
from gptcli.response import TranslationResult
from gptcli.shell_context import Platform, ShellContext


def _console():
    return Console(file=io.StringIO(), width=200, color_system=None)


class TestLauncherTable(unittest.TestCase):
    """Test cases for mapping a shell context onto a launcher."""

    def test_known_pairs(self):
        cases = [
            (Platform.WINDOWS, "powershell.exe", ["powershell.exe", "-c", "dir"]),
            (Platform.WINDOWS, "cmd.exe", ["cmd.exe", "/C", "dir"]),
            (Platform.DARWIN, "zsh", ["zsh", "-c", "dir"]),
            (Platform.DARWIN, "bash", ["bash", "-c", "dir"]),
            (Platform.LINUX, "zsh", ["zsh", "-c", "dir"]),
            (Platform.LINUX, "bash", ["bash", "-c", "dir"]),
            (Platform.OTHER, "zsh", ["zsh", "-c", "dir"]),
            (Platform.OTHER, "bash", ["bash", "-c", "dir"]),
        ]
        for platform, shell, argv in cases:
            with self.subTest(platform=platform, shell=shell):
                launcher = resolve_launcher(ShellContext(platform, shell))
                self.assertEqual(launcher.argv("dir"), argv)

    def test_unknown_pairs(self):
        cases = [
            (Platform.LINUX, "fish"),
            (Platform.LINUX, ""),
            (Platform.LINUX, "powershell.exe"),
            (Platform.WINDOWS, "bash"),
            (Platform.WINDOWS, "pwsh.exe"),
            (Platform.DARWIN, "sh"),
        ]
        for platform, shell in cases:
            with self.subTest(platform=platform, shell=shell):
                with self.assertRaises(UnsupportedShellError) as ctx:
                    resolve_launcher(ShellContext(platform, shell))
                self.assertEqual(ctx.exception.platform, platform.value)
                self.assertEqual(ctx.exception.shell_name, shell)

    def test_unsupported_shell_message_names_platform_and_shell(self):
        with self.assertRaises(UnsupportedShellError) as ctx:
            resolve_launcher(ShellContext(Platform.LINUX, "fish"))
        self.assertEqual(str(ctx.exception), "Error: unsupported shell fish on linux")

    def test_command_is_a_single_argument(self):
        command = "find . -name '*.txt' | xargs grep -l \"hello world\""

        self.assertEqual(Launcher("bash", "-c").argv(command), ["bash", "-c", command])


class TestConfirmation(unittest.TestCase):

    def test_only_exact_y_confirms(self):
        self.assertTrue(is_confirmed("y"))
        for answer in ("", "Y", "yes", " y", "y ", "n", "no", "yy"):
            with self.subTest(answer=answer):
                self.assertFalse(is_confirmed(answer))


class TestCommandExecutor(unittest.TestCase):
    """Test cases for the CommandExecutor class."""

    def setUp(self):
        """Set up test fixtures."""
        self.executor = CommandExecutor()
        self.console = _console()
        self.result = TranslationResult(command="find . -type f -size +42k", total_tokens=100)
        self.ctx = ShellContext(Platform.DARWIN, "zsh")

    @patch("gptcli.executor.subprocess.run")
    def test_execute_command_inherits_output_streams(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0)

        self.assertEqual(self.executor.execute_command(["bash", "-c", "echo hi"]), 0)

        args, kwargs = mock_run.call_args
        self.assertEqual(args[0], ["bash", "-c", "echo hi"])
        self.assertEqual(kwargs["stdin"], subprocess.DEVNULL)
        self.assertNotIn("stdout", kwargs)
        self.assertNotIn("stderr", kwargs)
        self.assertNotIn("capture_output", kwargs)
        self.assertNotIn("shell", kwargs)

    @patch("gptcli.executor.subprocess.run")
    def test_execute_command_failure(self, mock_run):
        mock_run.return_value = MagicMock(returncode=2)

        with self.assertRaises(ExecutionError) as ctx:
            self.executor.execute_command(["bash", "-c", "false"])
        self.assertEqual(ctx.exception.returncode, 2)

    @patch("gptcli.executor.subprocess.run")
    def test_execute_command_launch_failure(self, mock_run):
        mock_run.side_effect = FileNotFoundError(2, "No such file or directory", "zsh")

        with self.assertRaises(ExecutionError):
            self.executor.execute_command(["zsh", "-c", "ls"])

    @patch("gptcli.executor.subprocess.run")
    def test_confirmed_run(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0)

        outcome = self.executor.confirm_and_run(self.result, self.ctx, console=self.console, ask=lambda: "y")

        self.assertTrue(outcome.executed)
        self.assertEqual(outcome.returncode, 0)
        self.assertEqual(mock_run.call_args[0][0], ["zsh", "-c", "find . -type f -size +42k"])
        output = self.console.file.getvalue()
        self.assertIn("Looks insanely complicated? Don't panic. The answer is ...", output)
        self.assertIn("number of tokens used (total_tokens): 100", output)
        self.assertIn("find . -type f -size +42k", output)

    @patch("gptcli.executor.subprocess.run")
    def test_declined_run_spawns_nothing(self, mock_run):
        for answer in ("", "Y", "yes", "n"):
            with self.subTest(answer=answer):
                outcome = self.executor.confirm_and_run(
                    self.result, self.ctx, console=self.console, ask=lambda: answer
                )
                self.assertFalse(outcome.executed)
                self.assertIsNone(outcome.error)
        mock_run.assert_not_called()

    @patch("gptcli.executor.subprocess.run")
    def test_unsupported_shell_after_confirmation(self, mock_run):
        ctx = ShellContext(Platform.LINUX, "fish")

        with self.assertRaises(UnsupportedShellError):
            self.executor.confirm_and_run(self.result, ctx, console=self.console, ask=lambda: "y")
        mock_run.assert_not_called()

    @patch("gptcli.executor.subprocess.run")
    def test_failing_child_is_reported_not_raised(self, mock_run):
        mock_run.return_value = MagicMock(returncode=1)

        outcome = self.executor.confirm_and_run(self.result, self.ctx, console=self.console, ask=lambda: "y")

        self.assertTrue(outcome.executed)
        self.assertEqual(outcome.returncode, 1)
        self.assertIn("exit status 1", outcome.error)
        self.assertIn("exit status 1", self.console.file.getvalue())

    def test_command_with_brackets_is_printed_as_is(self):
        result = TranslationResult(command="echo [bold]hi[/bold]", total_tokens=7)

        self.executor.confirm_and_run(result, self.ctx, console=self.console, ask=lambda: "n")

        self.assertIn("echo [bold]hi[/bold]", self.console.file.getvalue())


if __name__ == "__main__":
    unittest.main()
