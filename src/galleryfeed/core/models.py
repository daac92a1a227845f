"""Pydantic models shared by the scanner and the Gallery Feed API.

Models
------
ImageEntry
    One discovered image: its path relative to the gallery directory and
    whether it came from the base directory or the featured subdirectory.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

EntryType = Literal["regular", "featured"]


class ImageEntry(BaseModel):
    """A single image in the listing.

    Attributes:
        src: Path relative to the gallery directory.  ``"<filename>"`` for
            regular images, ``"featured/<filename>"`` for featured ones.
        type: Provenance tag, ``"regular"`` or ``"featured"``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    src: str = Field(..., description="Image path relative to the gallery directory.")
    type: EntryType = Field(..., description="Either 'regular' or 'featured'.")
