#!/usr/bin/env python3
"""
PPQ Assistant
Ask a chat model a question, print the answer, then pick one of the code
blocks it contains and run it locally.

Usage:
    ppq-assistant "list the ten largest files in this directory"
    ppq-assistant --model gpt-4o "print the current date in ruby"
    ppq-assistant -- --help is part of this prompt
"""

import asyncio
from typing import List, Optional

import click
import typer
from rich.console import Console
from rich.markup import escape

from client import AIClient
from config import AVAILABLE_MODELS, get_config_path, load_config
from errors import AssistantError, ChildSpawnError, UnsupportedLanguage
from executor import execute_snippet
from selector import can_select, render_snippets, select_snippet
from snippets import extract_code_snippets, recent_snippets

# Console setup
console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    add_completion=False,
    rich_markup_mode=None,
    help="Send a prompt to a chat model and run a code block from the answer.",
)


def build_prompt(tokens: Optional[List[str]]) -> str:
    """Join the positional prompt words with single spaces"""
    return " ".join(tokens or [])


def report_error(error: AssistantError) -> None:
    err_console.print(f"[red]Error: {escape(error.message)}[/red]")
    if error.hint:
        err_console.print(f"[yellow]Tip: {escape(error.hint)}[/yellow]")


def debug(message: str, verbose: bool) -> None:
    if verbose:
        err_console.print(f"[dim]{escape(message)}[/dim]")


async def run_assistant(prompt: str, model: Optional[str] = None, verbose: bool = False) -> None:
    """
    Fetch the answer, show it, and offer its code blocks for execution.

    Raises:
        ConfigMissing, ConfigParseError, TransportError: Fatal, nothing has run yet
    """
    debug(f"Config: {get_config_path()}", verbose)
    config = load_config()
    model = model or config.default_model
    debug(f"Endpoint: {config.api_url}  Model: {model}  Token: {config.masked_token()}", verbose)

    ai_client = AIClient(config)
    response = await ai_client.send_message(prompt, model)

    # The answer is shown exactly as received, fences included
    console.print(response, markup=False, highlight=False, emoji=False, soft_wrap=True)

    snippets = extract_code_snippets(response)
    debug(f"Executable snippets: {len(snippets)}", verbose)
    if not snippets:
        console.print("\n[yellow]No executable code snippets found.[/yellow]")
        return

    if not can_select():
        render_snippets(recent_snippets(snippets), console)
        console.print("[dim]stdin is not a terminal; skipping snippet selection.[/dim]")
        return

    chosen = select_snippet(snippets, console)
    if chosen is None:
        debug("Selection cancelled", verbose)
        return

    try:
        outcome = await execute_snippet(chosen, console)
        debug(f"Exit code: {outcome.exit_code}", verbose)
    except (UnsupportedLanguage, ChildSpawnError) as e:
        # Best effort: a snippet that cannot run does not fail the program
        report_error(e)


@app.command()
def main(
    prompt: Optional[List[str]] = typer.Argument(
        None,
        metavar="PROMPT...",
        help="Prompt text. Put it after -- to pass words that start with --.",
        show_default=False,
    ),
    model: Optional[str] = typer.Option(
        None,
        "--model",
        click_type=click.Choice(AVAILABLE_MODELS),
        help="Model to use. When omitted, default_model from the config file is used "
             "(claude-3.7-sonnet unless the config sets another one).",
        show_default=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print diagnostics to stderr."),
) -> None:
    """Send PROMPT to the chat API and offer the returned code blocks for execution."""
    text = build_prompt(prompt)
    if not text:
        err_console.print("[red]Error: No prompt provided[/red]")
        return

    try:
        asyncio.run(run_assistant(text, model, verbose))
    except AssistantError as e:
        report_error(e)
        raise typer.Exit(code=1)
    except KeyboardInterrupt:
        err_console.print("\nInterrupted")
        raise typer.Exit(code=130)


if __name__ == "__main__":
    app()
