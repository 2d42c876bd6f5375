# Argwire — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instance used for help rendering."""
from rich.console import Console

console = Console(highlight=False)
