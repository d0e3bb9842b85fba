"""
PPQ Assistant Snippet Executor
Runs a chosen snippet through its interpreter with the terminal's own
stdout/stderr and reports how it exited.
"""

import asyncio
from dataclasses import dataclass
from typing import Optional

from rich.console import Console

from errors import ChildSpawnError
from languages import find_language
from snippets import CodeSnippet


@dataclass(frozen=True)
class ExecutionOutcome:
    success: bool
    exit_code: Optional[int] = None


async def execute_snippet(snippet: CodeSnippet, console: Optional[Console] = None) -> ExecutionOutcome:
    """
    Execute a snippet and wait for the interpreter to exit.

    The code is passed as the final command-line argument after the
    language's flags. Output is streamed live, not captured.

    Args:
        snippet: Snippet to run (any snippet, not only extracted ones)
        console: Where status lines are printed

    Returns:
        ExecutionOutcome; a nonzero exit is reported, never raised

    Raises:
        UnsupportedLanguage: If the snippet's tag does not resolve
        ChildSpawnError: If the interpreter cannot be started
    """
    console = console or Console()
    language = find_language(snippet.language)
    command = language.command(snippet.code)

    console.print(f"\n[bold green]Executing {language.name} snippet...[/bold green]\n")

    try:
        proc = await asyncio.create_subprocess_exec(*command)
    except OSError as e:
        raise ChildSpawnError(language.interpreter, e.strerror or str(e))
    except ValueError as e:
        # e.g. "embedded null byte" in the code argument
        raise ChildSpawnError(language.interpreter, str(e))

    returncode = await proc.wait()
    # Negative return codes mean the child was killed by a signal
    exit_code = returncode if returncode is not None and returncode >= 0 else None
    outcome = ExecutionOutcome(success=exit_code == 0, exit_code=exit_code)

    if outcome.success:
        console.print("\n[bold green]Execution completed successfully.[/bold green]\n")
    else:
        status = exit_code if exit_code is not None else -1
        console.print(f"\n[bold red]Execution failed with status: {status}[/bold red]\n")
    return outcome
