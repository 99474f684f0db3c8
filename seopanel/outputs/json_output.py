"""JSON report formatter for SEO audits."""

import json
import os
from typing import Any

from seopanel.models.metadata import ExtractedMetadata
from seopanel.models.scoring import ScoreResult


def format_json(metadata: ExtractedMetadata, result: ScoreResult) -> dict[str, Any]:
    """Format an audit as a JSON-serializable dictionary.

    Args:
        metadata: Snapshot that was scored
        result: Score for the snapshot

    Returns:
        Dictionary with source, metadata and score, ready for JSON serialization.

    """
    return {
        'url': metadata.source_url,
        'captured_at': metadata.captured_at.isoformat(),
        'metadata': {
            'title': metadata.title,
            'description': metadata.description,
            'tags': metadata.tag_list,
            'fields_found': metadata.fields_found.model_dump(),
            'locators': metadata.locators,
        },
        'score': result.model_dump(mode='json'),
    }


def save_json(filepath: str, metadata: ExtractedMetadata, result: ScoreResult) -> None:
    """Format and save an audit as a JSON file.

    Args:
        filepath: Path to save the file
        metadata: Snapshot that was scored
        result: Score for the snapshot

    """
    directory = os.path.dirname(filepath)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(filepath, 'w', encoding='utf-8') as f:
        json.dump(format_json(metadata, result), f, indent=2, ensure_ascii=False)
