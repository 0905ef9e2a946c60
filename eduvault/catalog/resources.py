"""Resource catalog loading, search, and ordering.

Data source:
    A JSON document `{"resources": [...]}` (by default `public/resources.json`).
    Field names follow the published file (`dateAdded`, camelCase).

Search model:
    - Free-text query: case-insensitive substring of title, description, or
      any tag. Empty query matches every resource.
    - `subject`, `grade`, `type`: exact match; `None`, `""` or `"all"` disables
      the filter.

Sorting:
    `newest` (default), `oldest`, `title`, `subject`. Sorting is stable;
    unknown keys raise `ValueError`.

Failure handling:
    Missing, unreadable, or non-JSON file, or a document without a
    `resources` list -> empty catalog with a warning. Malformed entries are skipped
    and logged; one bad record never hides the rest of the catalog.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterable

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
RESOURCES_PATH = os.getenv("RESOURCES_PATH", os.path.join(BASE_DIR, "public", "resources.json"))

ALL = "all"
SORT_KEYS = ("newest", "oldest", "title", "subject")


@dataclass(frozen=True)
class Resource:
    """One catalog entry."""

    id: str
    title: str
    subject: str
    grade: str
    type: str
    description: str
    url: str
    date_added: date
    tags: tuple[str, ...] = field(default_factory=tuple)
    featured: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Resource":
        """Parse one JSON record.

        Raises:
            KeyError / ValueError / TypeError on missing fields or a bad date.
        """
        tags = data.get("tags") or []
        if not isinstance(tags, list):
            raise TypeError("tags must be a list")
        return cls(
            id=str(data["id"]),
            title=str(data["title"]),
            subject=str(data["subject"]),
            grade=str(data["grade"]),
            type=str(data["type"]),
            description=str(data.get("description", "")),
            url=str(data["url"]),
            date_added=date.fromisoformat(str(data["dateAdded"])[:10]),
            tags=tuple(str(tag) for tag in tags),
            featured=bool(data.get("featured", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "subject": self.subject,
            "grade": self.grade,
            "type": self.type,
            "description": self.description,
            "url": self.url,
            "tags": list(self.tags),
            "dateAdded": self.date_added.isoformat(),
            "featured": self.featured,
        }

    def matches_query(self, query: str) -> bool:
        q = query.lower()
        return (
            q in self.title.lower()
            or q in self.description.lower()
            or any(q in tag.lower() for tag in self.tags)
        )


def load_catalog(path: str | None = None) -> list[Resource]:
    """Read the catalog file and return valid resources in file order."""
    path = path or RESOURCES_PATH

    if not os.path.exists(path):
        logger.warning("Resource catalog not found at %s", path)
        return []

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as err:
        logger.warning("Resource catalog at %s is unreadable: %s", path, err)
        return []

    records = data.get("resources") if isinstance(data, dict) else None
    if not isinstance(records, list):
        logger.warning("Resource catalog at %s has no \"resources\" list", path)
        return []

    resources: list[Resource] = []

    for record in records:
        try:
            resources.append(Resource.from_dict(record))
        except (KeyError, ValueError, TypeError, AttributeError):
            logger.warning("Skipping malformed catalog entry: %r", record)

    return resources


def _is_active(value: str | None) -> bool:
    return bool(value) and value.lower() != ALL


def filter_resources(
    resources: Iterable[Resource],
    query: str = "",
    subject: str | None = None,
    grade: str | None = None,
    type: str | None = None,
) -> list[Resource]:
    """Return resources matching every active criterion, in input order."""
    query = (query or "").strip()
    selected = []

    for resource in resources:
        if query and not resource.matches_query(query):
            continue
        if _is_active(subject) and resource.subject != subject:
            continue
        if _is_active(grade) and resource.grade != grade:
            continue
        if _is_active(type) and resource.type != type:
            continue
        selected.append(resource)

    return selected


def sort_resources(resources: Iterable[Resource], sort_by: str = "newest") -> list[Resource]:
    """Return a new, stably sorted list.

    Raises:
        ValueError: `sort_by` is not one of `SORT_KEYS`.
    """
    if sort_by not in SORT_KEYS:
        raise ValueError(f"Unknown sort key: {sort_by}")

    items = list(resources)

    if sort_by == "newest":
        items.sort(key=lambda r: r.date_added, reverse=True)
    elif sort_by == "oldest":
        items.sort(key=lambda r: r.date_added)
    elif sort_by == "title":
        items.sort(key=lambda r: r.title.lower())
    elif sort_by == "subject":
        items.sort(key=lambda r: r.subject.lower())

    return items


def facets(resources: Iterable[Resource]) -> dict[str, list[str]]:
    """Sorted unique subjects, grades, and types for filter menus."""
    items = list(resources)
    return {
        "subjects": sorted({r.subject for r in items}),
        "grades": sorted({r.grade for r in items}),
        "types": sorted({r.type for r in items}),
    }


def featured(resources: Iterable[Resource]) -> list[Resource]:
    return [r for r in resources if r.featured]
