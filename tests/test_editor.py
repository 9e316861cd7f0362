import pytest
from prompt_toolkit.input import create_pipe_input
from prompt_toolkit.output import DummyOutput

from went.editor import PromptToolkitEditor


@pytest.mark.asyncio
async def test_reads_line_and_records_history(tmp_path):
    history = tmp_path / "history"
    with create_pipe_input() as pipe:
        editor = PromptToolkitEditor(
            str(history), "[bob.bob] ", input=pipe, output=DummyOutput()
        )
        try:
            pipe.send_text("/join #test\r")
            assert await editor.read_line() == "/join #test"
            editor.set_prompt("[bob.#test] ")
        finally:
            editor.close()
    assert "+/join #test" in history.read_text(encoding="utf-8")


@pytest.mark.asyncio
async def test_end_of_input_raises_eof():
    with create_pipe_input() as pipe:
        editor = PromptToolkitEditor(input=pipe, output=DummyOutput())
        try:
            pipe.send_text("\x04")
            with pytest.raises(EOFError):
                await editor.read_line()
        finally:
            editor.close()
