"""DeskForge: create and edit ``.desktop`` launchers from the terminal."""

__version__ = "1.0.0"
