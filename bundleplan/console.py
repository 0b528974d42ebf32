# Kept apart from logging.py: console output is for humans running the CLI,
# logging is for structured build logs
from rich.console import Console

CONSOLE = Console()
ERROR_CONSOLE = Console(stderr=True)
