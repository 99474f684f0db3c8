"""Markdown report formatter for SEO audits."""

import os

from seopanel.models.metadata import ExtractedMetadata
from seopanel.models.scoring import ScoreResult


def format_markdown(metadata: ExtractedMetadata, result: ScoreResult) -> str:
    """Format an audit as Markdown.

    Args:
        metadata: Snapshot that was scored
        result: Score for the snapshot

    Returns:
        Formatted markdown string.

    """
    lines = [f'# SEO Report: {metadata.title or "Untitled"}', '']

    lines.append('---')
    lines.append(f'**Source:** {metadata.source_url or "unknown"}')
    lines.append(f'**Captured:** {metadata.captured_at.isoformat()}')
    lines.append(f'**Score:** {result.overall_score}/100 ({result.grade})')
    lines.append('---')
    lines.append('')

    lines.append('## Fields')
    lines.append('')
    lines.append('| Field | Score | Found | Issues |')
    lines.append('|-------|------:|:-----:|--------|')
    for name, analysis in result.components.items():
        issues = '; '.join(analysis.issues) or '-'
        lines.append(f'| {name.capitalize()} | {analysis.score} | {"yes" if analysis.found else "no"} | {issues} |')
    lines.append('')

    lines.extend(_section('Suggestions', result.top_suggestions()))
    lines.extend(_section('Strengths', result.strengths))
    lines.extend(_section('Weaknesses', result.weaknesses))

    return '\n'.join(lines)


def save_markdown(filepath: str, metadata: ExtractedMetadata, result: ScoreResult) -> None:
    """Format and save an audit as a Markdown file.

    Args:
        filepath: Path to save the file
        metadata: Snapshot that was scored
        result: Score for the snapshot

    """
    directory = os.path.dirname(filepath)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(filepath, 'w', encoding='utf-8') as f:
        f.write(format_markdown(metadata, result))


def _section(title: str, items: list[str]) -> list[str]:
    if not items:
        return []
    return [f'## {title}', '', *(f'- {item}' for item in items), '']
