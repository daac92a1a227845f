"""Gallery directory scanning.

The gallery is two flat directories on disk:

- the base gallery directory, holding *regular* images
- a ``featured/`` subdirectory inside it, holding *featured* images

Each listing scans both directories non-recursively, tags every image with
its origin, concatenates regular-then-featured and shuffles the result.
Nothing is cached; every call reflects the directory contents at that moment.

A directory that is missing or cannot be read lists as empty.  The scanner
never raises for filesystem problems so the HTTP layer can always answer with
a (possibly empty) JSON array.
"""

from __future__ import annotations

import logging
import os
import random
from collections.abc import Iterable
from pathlib import Path

from galleryfeed.core.models import EntryType, ImageEntry

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS: tuple[str, ...] = ("jpg", "jpeg", "png", "gif")

# Both the featured directory name and the src prefix of featured entries.
FEATURED_SUBDIR = "featured"


def is_image_name(name: str, extensions: Iterable[str] = IMAGE_EXTENSIONS) -> bool:
    """Return ``True`` if *name* ends in one of *extensions*.

    The extension is everything after the last dot, compared in lowercase.
    A name without a dot has no extension.

    Args:
        name: Bare file name (no directory part).
        extensions: Lowercase extensions without the leading dot.

    Returns:
        Whether the name looks like an image file.
    """
    if "." not in name:
        return False
    ext = name.rsplit(".", 1)[1].lower()
    return ext in extensions


def _is_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        return False


def _is_utf8(name: str) -> bool:
    # os.listdir surrogate-escapes undecodable bytes; such names cannot go into JSON.
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def scan_directory(
    directory: Path,
    entry_type: EntryType,
    *,
    prefix: str = "",
    extensions: Iterable[str] = IMAGE_EXTENSIONS,
) -> list[ImageEntry]:
    """Scan one directory (non-recursively) for image files.

    Names are visited in sorted order so the unshuffled sequence is stable.
    Subdirectories are skipped even when their name carries an image
    extension, as are names that are not valid UTF-8.

    Args:
        directory: Directory to scan.
        entry_type: Tag applied to every entry found.
        prefix: String prepended to each file name to form ``src``.
        extensions: Lowercase extensions without the leading dot.

    Returns:
        One :class:`ImageEntry` per image file, or an empty list if the
        directory is missing or unreadable.
    """
    exts = frozenset(ext.lower() for ext in extensions)

    try:
        names = sorted(os.listdir(directory))
    except FileNotFoundError:
        logger.debug(f"Gallery directory not found, skipping: {directory}")
        return []
    except OSError as e:
        # NotADirectoryError and PermissionError both land here.
        logger.debug(f"Gallery directory unreadable, skipping: {directory} ({e})")
        return []

    entries: list[ImageEntry] = []
    for name in names:
        if not is_image_name(name, exts):
            continue
        if not _is_utf8(name):
            logger.debug(f"Skipping undecodable file name in {directory}: {name!r}")
            continue
        if not _is_file(directory / name):
            continue
        entries.append(ImageEntry(src=f"{prefix}{name}", type=entry_type))

    return entries


def list_images(
    base_dir: Path | str,
    *,
    extensions: Iterable[str] = IMAGE_EXTENSIONS,
    rng: random.Random | None = None,
) -> list[ImageEntry]:
    """List regular and featured gallery images in random order.

    Duplicate file names across the two directories are kept as separate
    entries.

    Args:
        base_dir: Base gallery directory.
        extensions: Lowercase extensions without the leading dot.
        rng: Random generator used for the shuffle.  Defaults to the
            module-level generator, which is seeded from the OS.

    Returns:
        Uniformly shuffled list of regular and featured entries.
    """
    base_dir = Path(base_dir)
    exts = tuple(extensions)

    images = scan_directory(base_dir, "regular", extensions=exts)
    images += scan_directory(
        base_dir / FEATURED_SUBDIR,
        "featured",
        prefix=f"{FEATURED_SUBDIR}/",
        extensions=exts,
    )

    (rng or random).shuffle(images)
    return images
