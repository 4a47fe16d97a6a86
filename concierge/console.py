# Concierge CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instance for Concierge CLI applications."""
from rich.console import Console

from concierge.themes import get_theme

console = Console(theme=get_theme(), soft_wrap=True)
