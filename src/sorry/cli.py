"""Entry point: click CLI, configuration actions and the prompt round trip."""

import logging
from pathlib import Path

import click

from sorry.client import send_prompt
from sorry.config import (
    PROVIDER_NAMES,
    Config,
    ProviderConfig,
    default_model,
    default_providers,
    load_config,
    save_config,
)
from sorry.errors import EmptyApiKeyInput, EmptyPromptInput, InvalidApiKeyInput, SorryError
from sorry.history import DEFAULT_COUNT, commands_from_text, read_commands
from sorry.moods import MOOD_NAMES, Mood
from sorry.render import (
    console,
    render_answer,
    render_config,
    render_error,
    render_heading,
    render_mood_menu,
    render_success,
)
from sorry.shell_init import SHELL_NAMES, wrapper_script

log = logging.getLogger(__name__)


def configure_provider(name: str, config_path: Path | None = None) -> Config:
    """Prompt for an API key and model, store them and make `name` active."""
    config = load_config(config_path)
    if not config.providers:
        config.providers = default_providers()

    render_heading(f"Configuring {name}")

    api_key = click.prompt("Enter API key", default="", show_default=False, hide_input=True).strip()
    if not api_key:
        raise EmptyApiKeyInput()
    if not api_key.isascii():
        raise InvalidApiKeyInput()

    model = click.prompt("Enter model name", default=default_model(name)).strip()
    if not model:
        model = default_model(name)

    provider = config.providers.setdefault(name, ProviderConfig.for_provider(name))
    provider.api_key = api_key
    provider.model = model
    config.provider = name

    save_config(config, config_path)
    console.print()
    render_success(f"Configured {name} with model '{model}'")
    return config


def configure_behaviour(config_path: Path | None = None) -> Config:
    """Let the user pick a mood. Invalid input leaves the stored mood alone."""
    config = load_config(config_path)

    render_heading("Configure sorry's behaviour")
    console.print("Choose a mood:\n")
    render_mood_menu(config.active_mood())

    choice = click.prompt(
        f"Select mood [1-{len(Mood.all())}]", default="", show_default=False
    ).strip()

    mood = Mood.from_index(int(choice)) if choice.isdigit() else None
    if mood is None:
        console.print("Invalid selection, mood unchanged.")
        return config

    config.mood = mood
    save_config(config, config_path)
    console.print()
    render_success(f"Mood set to: {mood.display_name}")
    return config


def gather_commands(count: int, shell: str | None, last_commands: str | None) -> list[str]:
    """History handed over by a shell wrapper wins over reading the history file."""
    if last_commands is not None:
        log.debug("Using %s history passed on the command line", shell or "shell")
        return commands_from_text(last_commands, count)
    return read_commands(count, shell=shell)


def ask(
    prompt: str,
    config: Config,
    count: int = DEFAULT_COUNT,
    shell: str | None = None,
    last_commands: str | None = None,
    provider_override: str | None = None,
    mood_override: str | None = None,
) -> str:
    if not prompt.strip():
        raise EmptyPromptInput()

    name, provider = config.active_provider(provider_override)
    mood = Mood.parse(mood_override) if mood_override else config.active_mood()
    commands = gather_commands(count, shell, last_commands)
    log.debug("provider=%s model=%s mood=%s history=%d", name, provider.model, mood, len(commands))

    return send_prompt(prompt, provider, mood, commands)


@click.command(
    context_settings={
        "ignore_unknown_options": True,
        "allow_interspersed_args": False,
        "help_option_names": ["-h", "--help"],
    }
)
@click.option("--config-openai", is_flag=True, help="Configure OpenAI (interactive setup).")
@click.option("--config-groq", is_flag=True, help="Configure Groq (interactive setup).")
@click.option("--behaviour", is_flag=True, help="Configure sorry's behaviour/mood.")
@click.option("--show-config", is_flag=True, help="Show current configuration (without revealing keys).")
@click.option("--shell", default=None, help="Shell type (bash/zsh) the history comes from.")
@click.option("--last-commands", default=None, help="Last commands from shell history (newline-separated).")
@click.option("-n", "--count", default=DEFAULT_COUNT, show_default=True, type=click.IntRange(min=0), help="Number of recent commands to send as context.")
@click.option("--provider", "provider_override", default=None, type=click.Choice(PROVIDER_NAMES, case_sensitive=False), help="Use this provider instead of the active one.")
@click.option("--mood", "mood_override", default=None, type=click.Choice(MOOD_NAMES, case_sensitive=False), help="Use this mood instead of the configured one.")
@click.option("--config", "config_path", default=None, type=click.Path(dir_okay=False, path_type=Path), help="Path to config file (default: <config dir>/sorry/config.json).")
@click.option("--init", "init_shell", default=None, type=click.Choice(SHELL_NAMES, case_sensitive=False), help="Print the shell function to eval in your shell rc file.")
@click.option("-d", "--debug", is_flag=True, help="Enable debug logging.")
@click.version_option(package_name="sorry", prog_name="sorry")
@click.argument("words", nargs=-1, type=click.UNPROCESSED)
def main(
    config_openai: bool,
    config_groq: bool,
    behaviour: bool,
    show_config: bool,
    shell: str | None,
    last_commands: str | None,
    count: int,
    provider_override: str | None,
    mood_override: str | None,
    config_path: Path | None,
    init_shell: str | None,
    debug: bool,
    words: tuple[str, ...],
) -> None:
    """Send your mistakes to an LLM and get help."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(name)s %(levelname)s: %(message)s",
    )

    try:
        if config_openai:
            configure_provider("openai", config_path)
        elif config_groq:
            configure_provider("groq", config_path)
        elif behaviour:
            configure_behaviour(config_path)
        elif show_config:
            render_config(load_config(config_path))
        elif init_shell:
            click.echo(wrapper_script(init_shell), nl=False)
        else:
            answer = ask(
                " ".join(words),
                load_config(config_path),
                count=count,
                shell=shell,
                last_commands=last_commands,
                provider_override=provider_override,
                mood_override=mood_override,
            )
            render_answer(answer)
    except SorryError as e:
        render_error(str(e))
        raise SystemExit(1)


if __name__ == "__main__":
    main()
