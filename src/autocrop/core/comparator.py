"""Deciding whether two consecutive line hashes mark a border."""

from .hashing import LineHash
from .settings import DEFAULT_SETTINGS, HashProfile, ScanSettings


def hash_distance(previous: LineHash, current: LineHash) -> int:
    """Number of differing bits across the base and contrast hashes."""
    distance = previous.base.distance(current.base)
    if previous.contrast is not None and current.contrast is not None:
        distance += previous.contrast.distance(current.contrast)
    return distance


def lines_differ(
    previous: LineHash,
    current: LineHash,
    settings: ScanSettings = DEFAULT_SETTINGS,
) -> bool:
    """Return True if the change from ``previous`` to ``current`` is a border.

    A fully uniform previous line reacts to the first differing bit; a line
    that already mixes light and dark windows needs a larger distance so scan
    noise does not end the margin early.
    """
    distance = hash_distance(previous, current)

    if previous.profile is HashProfile.SIMPLE:
        return distance >= settings.simple_min_distance
    if previous.is_saturated:
        return distance >= settings.saturated_min_distance
    return distance >= settings.mixed_min_distance
