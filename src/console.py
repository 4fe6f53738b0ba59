import sys


class InputClosed(EOFError):
    """Raised when the operator's input stream has no more lines."""


class Console:
    """Line-oriented operator console (one prompt line, one answer line)."""

    def __init__(self, stdin=None, stdout=None):
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout

    def write(self, text=""):
        """Write one line to the operator."""
        print(text, file=self.stdout)

    def read_line(self, prompt):
        """Show a prompt and return the next input line without its newline."""
        self.write(prompt)
        line = self.stdin.readline()
        if line == "":
            raise InputClosed("operator input closed")
        return line.rstrip("\r\n")
