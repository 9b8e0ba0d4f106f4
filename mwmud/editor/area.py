"""Areas of a campaign and the editor widget that organises them."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from mwmud.editor.campaign import Campaign
from mwmud.editor.refidtree import RefIdTree


@dataclass
class Area:
    """An area of the game world."""

    id: str = ""
    name: str = ""


class AreaWidget:
    """Holds the grouping of a campaign's areas as a reference-id tree."""

    AREAS_REFIDTREE_PATH = Path("editor_data") / "areas.groups"

    def __init__(self, campaign: Campaign) -> None:
        self.tree_view = RefIdTree()
        self.tree_path: Path | None = None
        directory = campaign.loaded_directory()
        if directory is not None:
            self.tree_path = directory / self.AREAS_REFIDTREE_PATH
            if self.tree_path.is_file():
                self.tree_view.load(self.tree_path)