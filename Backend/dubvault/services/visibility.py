from typing import Iterable, List, Optional

from dubvault.models.track import TrackStatus


def is_visible(track, viewer_id: Optional[object] = None) -> bool:
    """Approved tracks are public; anything else is only shown to its owner."""
    if track.status == TrackStatus.APPROVED.value:
        return True
    if viewer_id is None or track.owner_id is None:
        return False
    return str(track.owner_id) == str(viewer_id)


def visible_tracks(tracks: Iterable, viewer_id: Optional[object] = None) -> List:
    """
    Tracks the viewer may see, in their original order.
    A viewer_id of None means an anonymous request.
    """
    seen = set()
    result = []
    for track in tracks:
        if track.id in seen or not is_visible(track, viewer_id):
            continue
        seen.add(track.id)
        result.append(track)
    return result
