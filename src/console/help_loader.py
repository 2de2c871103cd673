"""Load and validate the YAML help catalogue. Used by the help command in the console."""

import os
from pathlib import Path

import yaml

REQUIRED_TOPIC_KEYS = ("title", "usage", "example")


def get_help_path() -> Path:
    """Return path to the help YAML (HXPRESS_HELP_PATH env or console/help.yaml)."""
    default = Path(__file__).resolve().parent / "help.yaml"
    path = os.environ.get("HXPRESS_HELP_PATH", "").strip()
    if path:
        return Path(path).resolve()
    return default


def load_help(path: Path | None = None) -> dict:
    """Load help YAML and return the catalogue dict. Validates minimal structure."""
    if path is None:
        path = get_help_path()
    raw = path.read_text(encoding="utf-8")
    catalogue = yaml.safe_load(raw)
    if not isinstance(catalogue, dict):
        raise ValueError("Help YAML must be a dict")
    topics = catalogue.get("topics")
    if not topics or not isinstance(topics, list):
        raise ValueError("Help must have a non-empty 'topics' list")
    titles = set()
    for topic in topics:
        if not isinstance(topic, dict):
            raise ValueError("Every help topic must be a mapping")
        for key in REQUIRED_TOPIC_KEYS:
            if not topic.get(key):
                raise ValueError(f"Help topic {topic.get('title', '?')!r} is missing '{key}'")
        if topic["title"] in titles:
            raise ValueError(f"Duplicate help topic '{topic['title']}'")
        titles.add(topic["title"])
    catalogue.setdefault("user_guide", "")
    return catalogue


# Module-level cache for loaded catalogue
_help_cache: dict | None = None


def get_help(cache: bool = True) -> dict:
    """Load help (cached by default). Pass cache=False to reload."""
    global _help_cache
    if cache and _help_cache is not None:
        return _help_cache
    _help_cache = load_help()
    return _help_cache


def find_topics(catalogue: dict, query: str | None = None) -> list[dict]:
    """Topics whose title contains query (case-insensitive). No query returns all."""
    topics = catalogue["topics"]
    if not query:
        return list(topics)
    needle = query.strip().lower()
    return [t for t in topics if needle in str(t["title"]).lower()]
