from gpu_blacklist.tui.renderers import BlacklistConsoleUI

__all__ = ["BlacklistConsoleUI"]
