"""
Mock probe — universal test double for host access.

Simulates a host from canned command output and file contents, so
collectors, the platform resolver and the dependency workflow can be
exercised without touching the real machine.
"""

from __future__ import annotations

from collect_inventory.adapters.base import Probe


class MockProbe(Probe):
    """Canned host.

    Commands are keyed by their space-joined argv (``"uname -sr"``).
    Anything not configured behaves like a missing command or file.
    """

    def __init__(
        self,
        *,
        system: str = "Linux",
        commands: dict[str, str] | None = None,
        files: dict[str, str] | None = None,
        tools: set[str] | None = None,
        root: bool = False,
        node: str = "mockhost",
        machine: str = "x86_64",
        cpu_count: int | None = 4,
        physical_memory: int = 0,
    ):
        self._system = system
        self._commands = dict(commands or {})
        self._files = dict(files or {})
        self._tools = set(tools or ())
        self._root = root
        self._node = node
        self._machine = machine
        self._cpu_count = cpu_count
        self._physical_memory = physical_memory
        self._call_log: list[list[str]] = []

    @property
    def call_log(self) -> list[list[str]]:
        """Every command this mock has been asked to run."""
        return self._call_log

    def set_command(self, cmd: str, output: str) -> None:
        """Set canned stdout for a command line."""
        self._commands[cmd] = output

    def set_file(self, path: str, content: str) -> None:
        self._files[path] = content

    def add_tool(self, tool: str) -> None:
        self._tools.add(tool)

    def remove_tool(self, tool: str) -> None:
        self._tools.discard(tool)

    def run(self, cmd: list[str]) -> str | None:
        self._call_log.append(list(cmd))
        output = self._commands.get(" ".join(cmd))
        if output is None:
            return None
        return output.strip() or None

    def read(self, path: str) -> str | None:
        content = self._files.get(path)
        if content is None:
            return None
        return content.replace("\x00", "").strip() or None

    def which(self, tool: str) -> bool:
        return tool in self._tools

    def is_root(self) -> bool:
        return self._root

    def node(self) -> str:
        return self._node

    def system(self) -> str:
        return self._system

    def machine(self) -> str:
        return self._machine

    def cpu_count(self) -> int | None:
        return self._cpu_count

    def physical_memory(self) -> int:
        return self._physical_memory

    def reset(self) -> None:
        """Clear the call log."""
        self._call_log.clear()
