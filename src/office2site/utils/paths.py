#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Resolution of archive-internal references."""

from __future__ import annotations

from office2site.exceptions import PathResolutionError


def resolve_archive_path(base_path: str, target: str) -> str:
    """Resolve a relationship target against the entry that references it.

    The directory of ``base_path`` is joined with ``target`` and the segments
    are folded left to right: ``..`` drops the previous segment, ``.`` and
    empty segments are skipped. Targets starting with ``/`` are taken from the
    archive root.

    Parameters
    ----------
    base_path : str
        Archive entry holding the reference (e.g. ``ppt/slides/slide1.xml``)
    target : str
        Relative or root-anchored reference (e.g. ``../media/image1.png``)

    Returns
    -------
    str
        Archive-internal path without a leading slash

    Raises
    ------
    PathResolutionError
        If the reference climbs above the archive root.

    Examples
    --------
    >>> resolve_archive_path("ppt/slides/slide1.xml", "../media/image1.png")
    'ppt/media/image1.png'

    """
    if target.startswith("/"):
        joined = target
    else:
        directory = base_path.rsplit("/", 1)[0] if "/" in base_path else ""
        joined = f"{directory}/{target}" if directory else target

    segments: list[str] = []
    for segment in joined.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if not segments:
                raise PathResolutionError(base_path, target)
            segments.pop()
            continue
        segments.append(segment)
    return "/".join(segments)
