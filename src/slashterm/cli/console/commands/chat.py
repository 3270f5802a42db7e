"""Chat and thinking-mode commands."""

from ..command_registry import BaseCommand
from ..context import CommandContext
from ..io import IO
from ..parser import Flags

NOT_LOADED_HINT = "zsh: no llm loaded\n\t run /download then /load"


def with_thinking_switch(prompt: str, thinking: bool) -> str:
    """Append the model's soft switch for thinking output."""
    return f"{prompt} /think" if thinking else f"{prompt} /no_think"


class StreamPrinter:
    """
    Stream callback that prints only what is new.

    The chat action reports the cumulative text on every update; this
    prints the suffix since the previous update, through ``io.write`` when
    the sink has it and ``io.println`` otherwise.
    """

    def __init__(self, io: IO) -> None:
        self._io = io
        self._write = getattr(io, "write", None)
        self._seen = 0

    @property
    def streamed(self) -> bool:
        return self._seen > 0

    def __call__(self, current: str) -> None:
        delta = current[self._seen:]
        self._seen = len(current)
        if not delta:
            return
        if self._write is not None:
            self._write(delta)
        else:
            self._io.println(delta)

    def abort(self) -> None:
        """Close a partially streamed line so later output starts fresh."""
        if self.streamed and self._write is not None:
            self._write("\n")

    def finish(self, result: str) -> None:
        """Terminate the streamed line, or print the result if nothing streamed."""
        if not self.streamed:
            if result:
                self._io.println(result)
        elif self._write is not None:
            self._write("\n")


class ChatCommand(BaseCommand):
    name = "chat"
    summary = "Send a message to the model"
    usage = "/chat <message>"
    examples = ["/chat hello there", '/chat "what can you do?"']

    async def run(self, args: list[str], flags: Flags, io: IO, ctx: CommandContext) -> None:
        state = ctx.get_state()
        if not state.loaded:
            io.println(NOT_LOADED_HINT)
            return

        prompt = " ".join(args).strip()
        if not prompt:
            io.println(f"usage: {self.usage}")
            return

        printer = StreamPrinter(io)
        try:
            result = await ctx.actions.chat(with_thinking_switch(prompt, state.thinking), printer)
        except BaseException:
            printer.abort()
            raise
        printer.finish(result)


class ThinkCommand(BaseCommand):
    name = "think"
    summary = "Enable model thinking output for future prompts"
    usage = "/think"
    examples = ["/think"]

    def run(self, args: list[str], flags: Flags, io: IO, ctx: CommandContext) -> None:
        if ctx.get_state().thinking:
            io.println("thinking is already enabled.")
            return
        ctx.actions.set_thinking(True)
        io.println("thinking enabled. future prompts will include /think.")


class NoThinkCommand(BaseCommand):
    name = "no_think"
    aliases = ("nothink",)
    summary = "Disable model thinking output for future prompts"
    usage = "/no_think"
    examples = ["/no_think"]

    def run(self, args: list[str], flags: Flags, io: IO, ctx: CommandContext) -> None:
        if not ctx.get_state().thinking:
            io.println("thinking is already disabled.")
            return
        ctx.actions.set_thinking(False)
        io.println("thinking disabled. future prompts will include /no_think.")
