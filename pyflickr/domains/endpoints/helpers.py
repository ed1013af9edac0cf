"""Convenience calls built on more than one endpoint invocation."""

from typing import Any, Callable, Dict, Iterable, List, Optional

from pyflickr.domains.endpoints.transforms import join_csv

CallFn = Callable[..., Any]

ORIGINAL_SIZE_LABEL = "Original"


def _area(size: Dict[str, Any]) -> int:
    try:
        return int(size.get("width", 0)) * int(size.get("height", 0))
    except (TypeError, ValueError):
        return 0


def get_largest_size(call: CallFn, photo_id: Any) -> Optional[Dict[str, Any]]:
    """Largest available size of a photo.

    The original is preferred whenever the caller may see it; otherwise the
    size with the largest pixel area wins. Returns None if the photo has no
    sizes or does not exist.
    """
    sizes = call("photos.getSizes", photo_id)
    if not sizes or not sizes.get("size"):
        return None

    candidates = sizes["size"]
    for size in candidates:
        if size.get("label") == ORIGINAL_SIZE_LABEL:
            return size
    return max(candidates, key=_area)


def get_sets(call: CallFn, photo_ids: Iterable[Any], user_id: Optional[str] = None) -> List[Dict[str, Any]]:
    """Photosets that contain any of ``photo_ids``.

    ``photosets.getList`` marks matching sets via ``has_requested_photos``
    and pages at 500 sets, so every page is fetched.
    """
    ids = [str(i) for i in photo_ids]
    wanted = set(ids)
    ids_param = join_csv(ids)

    found: List[Dict[str, Any]] = []
    page = 1
    while True:
        result = call("photosets.getList", user_id, page, photo_ids=ids_param)
        if not result or "photoset" not in result:
            break

        for photoset in result["photoset"]:
            requested = photoset.get("has_requested_photos") or []
            if isinstance(requested, (str, int)):
                requested = [requested]
            if wanted.intersection(str(r) for r in requested):
                found.append(photoset)

        pages = int(result.get("pages", 1) or 1)
        if page >= pages:
            break
        page += 1
    return found
