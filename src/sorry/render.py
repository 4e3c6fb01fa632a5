"""Rich-based rendering for answers, configuration and errors."""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from sorry.config import Config
from sorry.moods import Mood

console = Console()
err_console = Console(stderr=True)

ACCENT = "magenta"
ERROR = "bold red"
SUCCESS = "green"


def render_answer(text: str) -> None:
    """Print the model's reply verbatim; it is plain text, not markup."""
    console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)


def render_error(msg: str) -> None:
    err_console.print(Text.assemble(("Error:", ERROR), " ", msg), soft_wrap=True)


def render_success(msg: str) -> None:
    console.print(Text.assemble(("✓ ", SUCCESS), msg))


def render_heading(msg: str) -> None:
    console.print()
    console.print(Text(msg, style=f"bold {ACCENT}"))
    console.print()


def render_mood_menu(current: Mood) -> None:
    for i, mood in enumerate(Mood.all(), start=1):
        line = Text(f"  {i}. {mood.display_name}")
        if mood == current:
            line.append(" (current)", style="dim")
        console.print(line)
    console.print()


def render_config(config: Config) -> None:
    """Show the active mood and provider. The API key itself is never printed."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold")
    table.add_column()

    table.add_row("Mood", config.active_mood().display_name)

    if config.provider is None:
        table.add_row("Provider", Text("not configured", style="dim"))
        console.print()
        console.print(table)
        console.print(
            "\n[dim]Run 'sorry --config-openai' or 'sorry --config-groq' to set up.[/dim]"
        )
        return

    table.add_row("Provider", config.provider)
    pc = config.get_provider(config.provider)
    if pc is None:
        table.add_row("", Text("not found in config", style=ERROR))
    else:
        key_status = "configured (hidden)" if pc.api_key else "not set"
        table.add_row("Base URL", pc.base_url)
        table.add_row("Model", pc.model)
        table.add_row("API Key", key_status)
    console.print()
    console.print(table)
    console.print()
