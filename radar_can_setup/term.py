import sys

RED = "\033[0;31m"
GREEN = "\033[0;32m"
YELLOW = "\033[1;33m"
BLUE = "\033[0;34m"
NC = "\033[0m"  # no color


def paint(text: str, color: str, stream=None) -> str:
    """Wrap text in an ANSI color, only when the stream is a terminal."""
    stream = stream if stream is not None else sys.stdout
    isatty = getattr(stream, "isatty", None)
    if isatty is None or not isatty():
        return text
    return f"{color}{text}{NC}"
