"""Tests for moods and prompt assembly."""

import pytest

from sorry.moods import BASE_PROMPT, MOOD_NAMES, Mood
from sorry.prompt import (
    build_messages,
    build_user_message,
    format_history_context,
    system_prompt,
)


def test_empty_history_context():
    assert format_history_context([]) == ""


def test_history_context_numbers_in_order():
    context = format_history_context(["git add .", "git commit", "git push"])
    numbered = [line for line in context.splitlines() if line[:1].isdigit()]
    assert numbered == ["1. git add .", "2. git commit", "3. git push"]
    assert context.startswith("Here are my last terminal commands:\n```\n")
    assert context.endswith("```\n\n")


def test_user_message_without_history_is_the_prompt():
    assert build_user_message("why did push fail", []) == "why did push fail"


def test_user_message_with_history():
    message = build_user_message("why did push fail", ["git push"])
    assert message == (
        "Here are my last terminal commands:\n```\n1. git push\n```\n\n"
        "My question/problem: why did push fail"
    )


@pytest.mark.parametrize("mood", Mood.all())
def test_system_prompt_is_base_plus_personality(mood):
    prompt = system_prompt(mood)
    assert prompt == BASE_PROMPT + mood.personality
    assert "PERSONALITY:" in prompt


def test_system_prompt_defaults_to_princess():
    assert system_prompt(None) == Mood.PRINCESS.system_prompt()


def test_moods_have_distinct_personalities():
    assert len({m.personality for m in Mood.all()}) == 3


def test_mood_from_index():
    assert Mood.from_index(1) is Mood.PRINCESS
    assert Mood.from_index(2) is Mood.BRO
    assert Mood.from_index(3) is Mood.BITCH
    assert Mood.from_index(0) is None
    assert Mood.from_index(4) is None


def test_mood_parse():
    assert Mood.parse("Bro") is Mood.BRO
    assert Mood.parse("grumpy") is None
    assert Mood.parse(None) is None


def test_mood_names_in_menu_order():
    assert MOOD_NAMES == ["princess", "bro", "bitch"]
    assert Mood.BRO.display_name == "Treat me like a bro"


def test_build_messages():
    assert build_messages("sys", "user") == [
        {"role": "system", "content": "sys"},
        {"role": "user", "content": "user"},
    ]


def test_personality_blocks_follow_the_rules_on_a_new_line():
    for mood in Mood.all():
        assert mood.personality.startswith("\nPERSONALITY:\n")
    assert "You're likely talking to a girl." in Mood.PRINCESS.personality
    assert 'Keep it casual - "no worries dude"' in Mood.BRO.personality
    assert 'call them "idiot", "dumbass", "genius"' in Mood.BITCH.personality
