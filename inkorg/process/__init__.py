from .launcher import ExitStatus, Launch, ProcessLauncher, ShellLaunch, ShellProcessLauncher

__all__ = ["ExitStatus", "Launch", "ProcessLauncher", "ShellLaunch", "ShellProcessLauncher"]
