"""Campaigns: directories of game and editor data with a properties file."""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

CAMPAIGNS_DIR = Path("Campaigns")
PROPERTIES_FILENAME = "campaign.properties"
GAME_DATA_DIR = "game_data"
EDITOR_DATA_DIR = "editor_data"
AREAS_FILENAME = "areas.dat"


def _property_value(line: str) -> str:
    # The value starts two characters after the first '=' ("key = value").
    return line[line.find("=") + 2:]


def list_campaign_directories(campaigns_dir: str | Path = CAMPAIGNS_DIR) -> list[str]:
    """Return the names of the campaign directories, sorted."""
    return sorted(entry.name for entry in Path(campaigns_dir).iterdir() if entry.is_dir())


class Campaign:
    """The campaign being edited: its properties and whether it is loaded."""

    def __init__(self, campaigns_dir: str | Path = CAMPAIGNS_DIR, out: TextIO | None = None) -> None:
        self.campaigns_dir = Path(campaigns_dir)
        self.directory = ""
        self.name = ""
        self.author = ""
        self.description = ""
        self._loaded = False
        self._dirty = False
        self._out = out

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def path(self) -> Path:
        return self.campaigns_dir / self.directory

    def _say(self, text: str) -> None:
        print(text, file=self._out)

    def _describe(self, heading: str) -> None:
        self._say(heading)
        self._say(f"\tDirectory: {self.directory}")
        self._say(f"\tName: {self.name}")
        self._say(f"\tAuthor: {self.author}")
        self._say(f"\tDescription: {self.description}")

    def _write_properties(self) -> None:
        (self.path / PROPERTIES_FILENAME).write_text(
            f"name = {self.name}\nauthor = {self.author}\ndescription = {self.description}\n",
            encoding="utf-8",
        )

    def set_properties(self, directory: str, name: str, author: str, description: str) -> None:
        """Set the campaign's directory and properties."""
        self.directory = directory
        self.name = name
        self.author = author
        self.description = description
        if self._loaded:
            self._dirty = True

    def create(self) -> None:
        """Create the campaign's directories and files from the current properties."""
        missing = [label for label, value in (("Directory", self.directory), ("Name", self.name)) if not value]
        if missing:
            raise ValueError(f"Required fields are empty: {', '.join(missing)}")

        self._describe("Creating campaign: ")
        self.path.mkdir(parents=True, exist_ok=True)
        self._write_properties()

        game_data = self.path / GAME_DATA_DIR
        game_data.mkdir(exist_ok=True)
        (self.path / EDITOR_DATA_DIR).mkdir(exist_ok=True)
        (game_data / AREAS_FILENAME).write_bytes(b"")

    def open(self, directory: str) -> None:
        """Load the campaign stored in the given directory."""
        properties = self.campaigns_dir / directory / PROPERTIES_FILENAME
        lines = properties.read_text(encoding="utf-8").split("\n")
        if len(lines) < 3:
            raise ValueError(f"malformed campaign properties in {properties}")
        name, author, description = (_property_value(line) for line in lines[:3])

        self.directory = directory
        self.name = name
        self.author = author
        self.description = description
        self._describe("Loaded campaign:")
        self._loaded = True
        self._dirty = False

    def close(self) -> None:
        """Close the loaded campaign; does nothing if none is loaded."""
        if not self._loaded:
            return
        self._say("Closed campaign.")
        self._loaded = False
        self._dirty = False

    def save(self) -> None:
        """Write the loaded campaign's properties back to disk."""
        if not self._loaded:
            return
        self._write_properties()
        self._dirty = False

    def loaded_directory(self) -> Path | None:
        """Return the loaded campaign's directory, or None if none is loaded."""
        return self.path if self._loaded else None

    def has_unsaved_changes(self) -> bool:
        """Return whether the loaded campaign changed since it was opened or saved."""
        return self._loaded and self._dirty