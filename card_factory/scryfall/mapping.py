"""Scryfall wire format -> local records.

This is the only module that knows Scryfall field names. Every lookup is
tolerant of missing keys: an absent attribute maps to None (or an empty
set) rather than raising.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from card_factory.models import ArtVersionRecord, CardRecord, NotFound

ERROR_OBJECT = "error"
NOT_FOUND_CODE = "not_found"
AMBIGUOUS_TYPE = "ambiguous"


def is_error_object(raw: Any) -> bool:
    """Return True for Scryfall's error envelope (``{"object": "error"}``)."""
    return isinstance(raw, dict) and raw.get("object") == ERROR_OBJECT


def is_not_found_error(raw: Dict[str, Any], status_code: int) -> bool:
    """Decide whether an error envelope means "no such card".

    Scryfall answers a failed fuzzy match with a 404 envelope. Some
    deployments wrap errors in a 200 response, so a 2xx envelope counts too.
    Any other status is only a not-found when the envelope says so.
    """
    if not is_error_object(raw):
        return False
    if 200 <= status_code < 300 or status_code == 404:
        return True
    return raw.get("code") == NOT_FOUND_CODE


def parse_not_found(raw: Dict[str, Any], query: str) -> NotFound:
    return NotFound(
        query=query,
        details=_text(raw.get("details")) or "",
        ambiguous=raw.get("type") == AMBIGUOUS_TYPE,
    )


def parse_card(raw: Dict[str, Any], image_size: str = "normal") -> CardRecord:
    """Parse a Scryfall card object into a CardRecord."""
    image_uris = _image_uris(raw)
    return CardRecord(
        name=_text(raw.get("name")) or "",
        mana_cost=_text(raw.get("mana_cost")),
        type_line=_text(raw.get("type_line")),
        oracle_text=_text(raw.get("oracle_text")),
        power=_text(raw.get("power")),
        toughness=_text(raw.get("toughness")),
        colors=frozenset(c for c in (raw.get("colors") or []) if isinstance(c, str)),
        image_url=_pick_image(image_uris, image_size),
    )


def parse_art_version(raw: Dict[str, Any], image_size: str = "normal") -> ArtVersionRecord:
    """Parse one print from a search page into an ArtVersionRecord."""
    image_uris = _image_uris(raw)
    return ArtVersionRecord(
        image_url=_pick_image(image_uris, image_size),
        art_crop_url=_text(image_uris.get("art_crop")),
        set_name=_text(raw.get("set_name")),
        set_code=_text(raw.get("set")),
        collector_number=_text(raw.get("collector_number")),
        artist=_text(raw.get("artist")),
    )


def parse_art_page(raw: Dict[str, Any], image_size: str = "normal") -> List[ArtVersionRecord]:
    """Map a search page's ``data`` list, dropping prints without images."""
    versions: List[ArtVersionRecord] = []
    for item in raw.get("data") or []:
        if not isinstance(item, dict):
            continue
        version = parse_art_version(item, image_size)
        if version.has_image:
            versions.append(version)
    return versions


def next_page_url(raw: Dict[str, Any]) -> Optional[str]:
    """Return the literal next-page URL, or None when the listing is exhausted."""
    if not raw.get("has_more"):
        return None
    return _text(raw.get("next_page")) or None


def _image_uris(raw: Dict[str, Any]) -> Dict[str, Any]:
    # Double-faced cards carry images on each face instead of the top level
    image_uris = raw.get("image_uris")
    if isinstance(image_uris, dict) and image_uris:
        return image_uris
    faces = raw.get("card_faces")
    if isinstance(faces, list) and faces and isinstance(faces[0], dict):
        face_uris = faces[0].get("image_uris")
        if isinstance(face_uris, dict):
            return face_uris
    return {}


def _pick_image(image_uris: Dict[str, Any], image_size: str) -> Optional[str]:
    return _text(image_uris.get(image_size)) or _text(image_uris.get("normal"))


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        value = str(value)
    return value
