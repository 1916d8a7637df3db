"""
Wine Auto-Tagging Module
Derives flavour/style tags from a wine's free-text fields and type
"""
import json
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Union

from .taxonomy import WineTaxonomy

MAX_TAG_LENGTH = 50


@dataclass
class WineTextInput:
    """Text fields of a wine used for tagging"""
    flavor_notes: str = ""
    description: str = ""
    name: str = ""
    type: str = ""

    def __post_init__(self):
        # None and non-string values (e.g. a list of notes) become text
        for field_name in ("flavor_notes", "description", "name", "type"):
            setattr(self, field_name, _as_text(getattr(self, field_name)))

    @classmethod
    def from_mapping(cls, data: Mapping) -> "WineTextInput":
        """
        Build input from an inventory record or form payload

        Accepts both the storage spelling (flavor_notes) and the client
        spelling (flavorNotes).
        """
        flavor_notes = data.get("flavor_notes")
        if flavor_notes is None:
            flavor_notes = data.get("flavorNotes")
        return cls(
            flavor_notes=flavor_notes,
            description=data.get("description"),
            name=data.get("name"),
            type=data.get("type"),
        )


def _as_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple, set)):
        return " ".join(str(v) for v in value if v is not None)
    return str(value)


def extract_flavor_tags(flavor_notes: str = "", description: str = "") -> List[str]:
    """
    Extract flavour tags from flavour notes and description

    Args:
        flavor_notes: Free-text tasting notes
        description: Free-text description

    Returns:
        List[str]: Sorted, deduplicated category names
    """
    combined_text = f"{_as_text(flavor_notes)} {_as_text(description)}".lower()
    extracted = set(WineTaxonomy.detect_flavor_types(combined_text))

    # Contextual pass (less aggressive)
    for tag in WineTaxonomy.detect_contextual_types(combined_text):
        if tag not in extracted:
            extracted.add(tag)

    return sorted(extracted)


def get_wine_type_tags(wine_type: str) -> List[str]:
    """Get wine-type-specific default tags"""
    return WineTaxonomy.get_wine_type_tags(_as_text(wine_type))


def auto_tag_wine(wine: Union[WineTextInput, Mapping, None] = None, **fields) -> List[str]:
    """
    Generate tags for a wine

    Name and type are appended to the description channel as extra context,
    then the type defaults are merged in.

    Args:
        wine: WineTextInput or mapping of text fields
        **fields: Alternative keyword form (flavor_notes=..., type=...)

    Returns:
        List[str]: Sorted, deduplicated tags
    """
    if wine is not None and fields:
        raise TypeError("auto_tag_wine() takes a wine or keyword fields, not both")
    if wine is None:
        wine = WineTextInput(**fields)
    elif not isinstance(wine, WineTextInput):
        wine = WineTextInput.from_mapping(wine)

    context_text = f"{wine.name} {wine.type}".lower()
    tags = extract_flavor_tags(wine.flavor_notes, wine.description + " " + context_text)
    type_tags = get_wine_type_tags(wine.type)

    return sorted(set(tags) | set(type_tags))


def sanitize_tags(tags: Optional[Iterable]) -> List[str]:
    """
    Validate and normalize tags for storage

    Lowercases and trims each tag, drops empty or over-long tags and
    duplicates, and sorts the result.

    Args:
        tags: Tag sequence from any source

    Returns:
        List[str]: Clean tag list
    """
    if not tags:
        return []

    cleaned = []
    seen = set()
    for tag in tags:
        if not isinstance(tag, str):
            continue
        tag = tag.lower().strip()
        if not tag or len(tag) > MAX_TAG_LENGTH:
            continue
        if tag in seen:
            continue
        seen.add(tag)
        cleaned.append(tag)

    return sorted(cleaned)


def format_tags_for_display(tags: Iterable[str]) -> List[str]:
    """Capitalize the first letter of each tag"""
    return [tag[:1].upper() + tag[1:] for tag in tags]


def get_suggested_tags() -> List[str]:
    """Get the primary vocabulary for manual tagging"""
    return WineTaxonomy.get_all_flavor_types()


def parse_tags_field(value) -> List[str]:
    """
    Read a stored tags field

    The store may hold a list, a JSON-encoded list, comma-separated text,
    or nothing at all.
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [t for t in value if isinstance(t, str)]
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return []
        if text.startswith("["):
            try:
                parsed = json.loads(text)
            except ValueError:
                return []
            return [t for t in parsed if isinstance(t, str)] if isinstance(parsed, list) else []
        return [t.strip() for t in text.split(",") if t.strip()]
    return []


def tags_changed(current_tags: Optional[Iterable[str]], suggested_tags: Iterable[str]) -> bool:
    """Order-independent comparison of stored and suggested tags"""
    return sorted(parse_tags_field(current_tags)) != sorted(suggested_tags)


def auto_tag_record(record: Mapping) -> List[str]:
    """Sanitized auto-tags for an inventory record"""
    return sanitize_tags(auto_tag_wine(WineTextInput.from_mapping(record)))


def resolve_display_tags(record: Mapping, limit: Optional[int] = None) -> List[str]:
    """
    Tags to show on a wine card or details view

    Stored tags win when present; otherwise tags are generated on the fly.

    Args:
        record: Wine record
        limit: Keep only the first N tags (the card shows 3)

    Returns:
        List[str]: Display-formatted tags
    """
    stored = parse_tags_field(record.get("tags"))
    final_tags = stored if stored else auto_tag_wine(WineTextInput.from_mapping(record))
    if limit is not None:
        final_tags = final_tags[:limit]
    return format_tags_for_display(final_tags)


def prepare_inventory_item(item: Mapping) -> Dict:
    """
    Attach auto-generated tags to an inventory payload before it is saved

    The admin form only collects flavour notes, so they double as the
    description when none is given.
    """
    prepared = dict(item)
    wine = WineTextInput.from_mapping(item)
    if not wine.description:
        wine.description = wine.flavor_notes
    prepared["tags"] = sanitize_tags(auto_tag_wine(wine))
    return prepared


def batch_auto_tag_wines(wines: Iterable[Mapping]) -> List[Dict]:
    """
    Tag many wines in memory

    Returns:
        List[Dict]: {"id": ..., "tags": [...]} per wine, in input order
    """
    return [{"id": wine.get("id"), "tags": auto_tag_wine(WineTextInput.from_mapping(wine))} for wine in wines]
