"""Shell functions that hand in-memory history over to sorry.

Install with ``eval "$(sorry --init zsh)"`` in ~/.zshrc or
``eval "$(sorry --init bash)"`` in ~/.bashrc. An optional leading number
overrides how many commands are sent: ``sorry 5 why did this fail``.
"""

ZSH_FUNCTION = """\
# sorry: zsh integration
setopt INC_APPEND_HISTORY SHARE_HISTORY

sorry() {
  local count=10
  if [[ "$1" =~ '^[0-9]+$' ]]; then
    count="$1"
    shift
  fi
  # newest last; the running `sorry` line is not in the list yet
  local last_cmds
  last_cmds=$(fc -ln -$count)
  command sorry --shell zsh --count "$count" --last-commands "$last_cmds" "$@"
}
"""

BASH_FUNCTION = """\
# sorry: bash integration
export PROMPT_COMMAND='history -a; history -n; '"$PROMPT_COMMAND"

sorry() {
  local count=10
  if [[ "$1" =~ ^[0-9]+$ ]]; then
    count="$1"
    shift
  fi
  # `history N+1` ends with this very `sorry` line, so drop it
  local last_cmds
  last_cmds=$(
    history "$((count + 1))" \\
      | head -n "$count" \\
      | sed 's/^[ ]*[0-9]\\+[ ]*//'
  )
  command sorry --shell bash --count "$count" --last-commands "$last_cmds" "$@"
}
"""

WRAPPERS: dict[str, str] = {
    "zsh": ZSH_FUNCTION,
    "bash": BASH_FUNCTION,
}

SHELL_NAMES = sorted(WRAPPERS.keys())


def wrapper_script(shell: str) -> str:
    """Return the shell function for `shell`. Raises ValueError for other shells."""
    try:
        return WRAPPERS[shell.lower()]
    except KeyError:
        raise ValueError(
            f"Unsupported shell '{shell}'. Options: {', '.join(SHELL_NAMES)}"
        ) from None
