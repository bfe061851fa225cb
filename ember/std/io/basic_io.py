import builtins
import sys


class BasicIO:
    """Console collaborator behind the `print` and `input` built-ins.

    Streams are looked up when used rather than stored, so redirecting
    `sys.stdout` / `sys.stdin` (as pytest's capture does) is honoured.
    """

    def write_line(self, text: str) -> None:
        print(text, file=sys.stdout)

    def read_line(self, prompt: str = '') -> str:
        try:
            return builtins.input(prompt)
        except EOFError:
            return ''
