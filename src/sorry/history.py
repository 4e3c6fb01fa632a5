"""Shell history lookup and parsing for zsh and bash."""

import logging
import os
import re
from collections.abc import Iterable, Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_COUNT = 10
SELF_COMMAND = "sorry"

ZSH_MARKER = ": "
# bash writes these when HISTTIMEFORMAT is set
_BASH_TIMESTAMP = re.compile(r"^#\d+$")


def _expand_home(value: str, home: Path) -> Path:
    if value == "~":
        return home
    if value.startswith("~/"):
        return home / value[2:]
    return Path(value)


def history_candidates(shell: str, home: Path, zdotdir: str | None = None) -> list[Path]:
    """Candidate history files for the given $SHELL value, most likely first."""
    zsh_history = home / ".zsh_history"
    zhistory = home / ".zhistory"
    bash_history = home / ".bash_history"
    # /etc/zshrc on macOS sets HISTFILE=${ZDOTDIR:-$HOME}/.zsh_history
    zdot_history = _expand_home(zdotdir, home) / ".zsh_history" if zdotdir else None

    name = Path(shell).name if shell else ""
    if "zsh" in name:
        candidates = [zsh_history, zhistory, zdot_history]
    elif "bash" in name:
        candidates = [bash_history]
    else:
        candidates = [zsh_history, bash_history, zhistory, zdot_history]
    return [c for c in candidates if c is not None]


def locate_history_file(
    environ: Mapping[str, str] | None = None, home: Path | None = None
) -> Path | None:
    """Find the active shell's history file, or None if nothing exists."""
    env = os.environ if environ is None else environ
    home = home or Path.home()

    histfile = env.get("HISTFILE")
    if histfile:
        path = _expand_home(histfile, home)
        if path.is_file():
            return path
        logger.debug("HISTFILE %s does not exist", path)

    for candidate in history_candidates(env.get("SHELL", ""), home, env.get("ZDOTDIR")):
        if candidate.is_file():
            return candidate
    return None


def parse_zsh_history(text: str) -> list[str]:
    """Parse a zsh history file.

    With EXTENDED_HISTORY each entry starts with ``: <start>:<elapsed>;`` and
    multi-line commands spill onto following lines that lack the marker. A
    file without any marker line is the plain format: one command per line.
    """
    lines = text.splitlines()
    if not any(line.startswith(ZSH_MARKER) for line in lines):
        return _plain_lines(lines)

    commands: list[str] = []
    current: list[str] | None = None

    def flush() -> None:
        if current is not None:
            cmd = "\n".join(current).strip()
            if cmd:
                commands.append(cmd)

    for line in lines:
        if line.startswith(ZSH_MARKER):
            flush()
            _header, sep, cmd = line.partition(";")
            # a marker with no ';' is malformed; drop it and anything continuing it
            current = [cmd] if sep else None
        elif not line.strip():
            continue
        elif current is not None:
            current.append(line)
        else:
            logger.debug("Skipping orphan zsh history line: %r", line)
    flush()
    return commands


def parse_bash_history(text: str) -> list[str]:
    """Parse a bash history file: one command per line."""
    return [
        cmd for cmd in _plain_lines(text.splitlines()) if not _BASH_TIMESTAMP.match(cmd)
    ]


def _plain_lines(lines: Iterable[str]) -> list[str]:
    return [line.strip() for line in lines if line.strip()]


def is_self_invocation(cmd: str) -> bool:
    return cmd.startswith(SELF_COMMAND)


def last_commands(commands: Iterable[str], count: int = DEFAULT_COUNT) -> list[str]:
    """Drop our own invocations and keep the newest `count`, oldest first."""
    kept = [cmd for cmd in commands if not is_self_invocation(cmd)]
    if count <= 0:
        return []
    return kept[-count:]


def _is_zsh(path: Path, shell: str | None, content: str) -> bool:
    # extended-history markers settle it regardless of file or shell name
    if any(line.startswith(ZSH_MARKER) for line in content.splitlines()):
        return True
    if shell:
        return "zsh" in Path(shell).name
    return "zsh" in path.name or path.name == ".zhistory"


def read_commands(
    count: int = DEFAULT_COUNT,
    path: Path | None = None,
    shell: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> list[str]:
    """Return the last `count` commands from the shell history file.

    Any lookup or read failure gives an empty list so the caller can carry
    on without history context.
    """
    env = os.environ if environ is None else environ
    shell = shell or env.get("SHELL")
    history_path = path or locate_history_file(env)
    if history_path is None:
        logger.debug("No shell history file found")
        return []

    try:
        content = history_path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.debug("Could not read history %s: %s", history_path, e)
        return []

    if _is_zsh(history_path, shell, content):
        commands = parse_zsh_history(content)
    else:
        commands = parse_bash_history(content)
    logger.debug("Parsed %d commands from %s", len(commands), history_path)
    return last_commands(commands, count)


def commands_from_text(text: str, count: int = DEFAULT_COUNT) -> list[str]:
    """Commands handed over by a shell wrapper, newline separated."""
    return last_commands(_plain_lines(text.splitlines()), count)
