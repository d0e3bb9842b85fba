import io

import pytest
from rich.console import Console

import executor
from errors import ChildSpawnError, UnsupportedLanguage
from executor import ExecutionOutcome, execute_snippet
from languages import LanguageDescriptor
from snippets import CodeSnippet


class FakeProcess:
    def __init__(self, returncode):
        self.returncode = returncode

    async def wait(self):
        return self.returncode


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=120)


@pytest.fixture
def spawned(monkeypatch):
    """Record create_subprocess_exec calls and answer with a scripted exit code"""
    calls = {"args": None, "kwargs": None, "returncode": 0}

    async def fake_exec(*args, **kwargs):
        calls["args"] = list(args)
        calls["kwargs"] = kwargs
        return FakeProcess(calls["returncode"])

    monkeypatch.setattr(executor.asyncio, "create_subprocess_exec", fake_exec)
    return calls


@pytest.mark.asyncio
async def test_php_invocation_and_success(spawned, console):
    snippet = CodeSnippet("php", "echo 'hi';\necho PHP_EOL;")

    outcome = await execute_snippet(snippet, console)

    assert spawned["args"] == ["php", "-r", "echo 'hi';\necho PHP_EOL;"]
    # stdout/stderr are inherited, never piped
    assert "stdout" not in spawned["kwargs"]
    assert "stderr" not in spawned["kwargs"]
    assert outcome == ExecutionOutcome(success=True, exit_code=0)
    output = console.file.getvalue()
    assert "Executing PHP snippet..." in output
    assert "Execution completed successfully." in output


@pytest.mark.asyncio
async def test_nonzero_exit_is_reported_not_raised(spawned, console):
    spawned["returncode"] = 2

    outcome = await execute_snippet(CodeSnippet("php", "exit(2);"), console)

    assert outcome == ExecutionOutcome(success=False, exit_code=2)
    assert "Execution failed with status: 2" in console.file.getvalue()


@pytest.mark.asyncio
async def test_signal_exit_has_no_code(spawned, console):
    spawned["returncode"] = -9

    outcome = await execute_snippet(CodeSnippet("bash", "kill -9 $$"), console)

    assert outcome.success is False
    assert outcome.exit_code is None
    assert "Execution failed with status: -1" in console.file.getvalue()


@pytest.mark.asyncio
async def test_unsupported_language_raises_before_spawning(spawned, console):
    with pytest.raises(UnsupportedLanguage):
        await execute_snippet(CodeSnippet("rust", "fn main() {}"), console)
    assert spawned["args"] is None


@pytest.mark.asyncio
async def test_missing_interpreter_raises_spawn_error(monkeypatch, console):
    missing = LanguageDescriptor("Ghost", frozenset({"sh"}), "ppq-no-such-interpreter", ("-c",))
    monkeypatch.setattr(executor, "find_language", lambda tag: missing)

    with pytest.raises(ChildSpawnError) as exc:
        await execute_snippet(CodeSnippet("sh", "true"), console)

    assert exc.value.interpreter == "ppq-no-such-interpreter"
    assert exc.value.hint


@pytest.mark.asyncio
async def test_real_bash_exit_status(console):
    ok = await execute_snippet(CodeSnippet("sh", "true"), console)
    failed = await execute_snippet(CodeSnippet("bash", "echo partial\nexit 3"), console)

    assert ok.success and ok.exit_code == 0
    assert not failed.success and failed.exit_code == 3


@pytest.mark.asyncio
async def test_interpreter_missing_from_path(monkeypatch, tmp_path, console):
    monkeypatch.setenv("PATH", str(tmp_path))

    with pytest.raises(ChildSpawnError) as exc:
        await execute_snippet(CodeSnippet("ruby", "puts 1"), console)

    assert exc.value.interpreter == "ruby"


@pytest.mark.asyncio
async def test_null_byte_in_code_is_a_spawn_error(console):
    with pytest.raises(ChildSpawnError) as exc:
        await execute_snippet(CodeSnippet("bash", "echo a\x00b"), console)

    assert exc.value.interpreter == "bash"
    assert "null" in exc.value.message
