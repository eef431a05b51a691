"""
Coloured terminal output for the profiler CLI.

Library code never prints; only the click commands use these helpers.
"""

import shutil

from colorama import Fore, Style


class PrettyOutput:
    """Static helpers that print status lines, summaries and tables."""

    PRIMARY = Fore.CYAN
    SUCCESS = Fore.GREEN
    WARNING = Fore.YELLOW
    ERROR = Fore.RED
    HEADER = Fore.WHITE + Style.BRIGHT
    DIM = Style.DIM
    RESET = Style.RESET_ALL

    CHECK = "✓"
    CROSS = "✗"
    ARROW = "→"
    WARN = "⚠"
    MAGNIFY = "🔍"

    MAX_RULE_WIDTH = 80

    @staticmethod
    def _status(color, symbol, message, indent=0):
        print(f"{' ' * indent}{color}{symbol}{PrettyOutput.RESET} {message}")

    @staticmethod
    def section(text):
        """Print a heading framed by horizontal rules."""
        width = min(shutil.get_terminal_size().columns, PrettyOutput.MAX_RULE_WIDTH)
        rule = "─" * width
        print(f"\n{PrettyOutput.HEADER}{rule}\n{PrettyOutput.ARROW} {text}\n{rule}{PrettyOutput.RESET}\n")

    @staticmethod
    def success(message, indent=0):
        PrettyOutput._status(PrettyOutput.SUCCESS, PrettyOutput.CHECK, message, indent)

    @staticmethod
    def error(message, indent=0):
        PrettyOutput._status(PrettyOutput.ERROR, PrettyOutput.CROSS, message, indent)

    @staticmethod
    def warning(message, indent=0):
        PrettyOutput._status(PrettyOutput.WARNING, PrettyOutput.WARN, message, indent)

    @staticmethod
    def blank_line():
        print()

    @staticmethod
    def task_start(message):
        """Announce a long-running step."""
        print(f"\n{PrettyOutput.MAGNIFY} {PrettyOutput.HEADER}{message}{PrettyOutput.RESET}")

    @staticmethod
    def task_complete(message, duration=None):
        """Report a finished step, with its duration when known."""
        if duration is not None:
            message = f"{message} {PrettyOutput.DIM}({duration:.1f}s){PrettyOutput.RESET}"
        PrettyOutput.success(message)

    @staticmethod
    def metric(label, value, indent=2):
        print(f"{' ' * indent}{PrettyOutput.DIM}{label}:{PrettyOutput.RESET} "
              f"{PrettyOutput.PRIMARY}{value}{PrettyOutput.RESET}")

    @staticmethod
    def output_file(label, path, indent=2):
        """Print where an output file was written."""
        print(f"{' ' * indent}{PrettyOutput.ARROW} {PrettyOutput.DIM}{label}:{PrettyOutput.RESET} {path}")

    @staticmethod
    def profile_summary(rows, cols, delimiter, duration):
        """
        Print the one-line summary of a profile.

        Args:
            rows: Number of data rows
            cols: Number of columns
            delimiter: Detected delimiter
            duration: Profiling time in seconds
        """
        parts = [
            f"{PrettyOutput.PRIMARY}{rows:,}{PrettyOutput.RESET} rows",
            f"{PrettyOutput.PRIMARY}{cols}{PrettyOutput.RESET} cols",
            f"delimiter {PrettyOutput.PRIMARY}{delimiter!r}{PrettyOutput.RESET}",
            f"{PrettyOutput.DIM}{duration:.1f}s{PrettyOutput.RESET}",
        ]
        print(f"\n{PrettyOutput.CHECK} {' │ '.join(parts)}")

    @staticmethod
    def compact_table(headers, rows):
        """
        Print rows under a header, each column padded to its widest cell.

        Args:
            headers: Column titles
            rows: Sequence of row tuples, one cell per header
        """
        widths = [
            max([len(str(header))] + [len(str(row[i])) for row in rows])
            for i, header in enumerate(headers)
        ]

        header_line = "  ".join(f"{h:<{widths[i]}}" for i, h in enumerate(headers))
        print(f"  {PrettyOutput.HEADER}{header_line}{PrettyOutput.RESET}")
        print(f"  {PrettyOutput.DIM}{'─' * len(header_line)}{PrettyOutput.RESET}")
        for row in rows:
            print("  " + "  ".join(f"{str(v):<{widths[i]}}" for i, v in enumerate(row)))
