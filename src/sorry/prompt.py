"""Prompt assembly: system prompt, history context and the chat messages."""

from sorry.moods import Mood

HISTORY_HEADER = "Here are my last terminal commands:"
QUESTION_LABEL = "My question/problem: "


def format_history_context(commands: list[str]) -> str:
    """Render commands as a numbered, fenced block. Empty input gives ""."""
    if not commands:
        return ""
    numbered = "".join(f"{i}. {cmd}\n" for i, cmd in enumerate(commands, start=1))
    return f"{HISTORY_HEADER}\n```\n{numbered}```\n\n"


def build_user_message(prompt: str, commands: list[str]) -> str:
    context = format_history_context(commands)
    if not context:
        return prompt
    return f"{context}{QUESTION_LABEL}{prompt}"


def system_prompt(mood: Mood | None) -> str:
    return (mood or Mood.default()).system_prompt()


def build_messages(system: str, user: str) -> list[dict]:
    """The two-message conversation in OpenAI chat format."""
    return [
        {"role": "system", "content": system},
        {"role": "user", "content": user},
    ]
