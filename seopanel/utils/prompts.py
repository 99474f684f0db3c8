"""System prompts for the generative service, one markdown file per field."""

from pathlib import Path

from seopanel.models.metadata import FieldRole

PROMPTS_DIR = Path(__file__).parent.parent / 'prompts'


def load_prompt(role: FieldRole) -> str:
    """Load the system prompt used to generate ``role``'s field.

    Prompts live in seopanel/prompts/ as <field name>.md, e.g. tags.md.

    Args:
        role: Field role the prompt is for

    Returns:
        The prompt text, stripped.

    Raises:
        FileNotFoundError: If the role has no prompt file.
        ValueError: If the prompt file is empty.

    """
    prompt_path = PROMPTS_DIR / f'{role.field_name}.md'
    if not prompt_path.exists():
        raise FileNotFoundError(f'No {role.field_name} prompt at {prompt_path}')

    prompt = prompt_path.read_text(encoding='utf-8').strip()
    if not prompt:
        raise ValueError(f'{role.field_name} prompt at {prompt_path} is empty')
    return prompt
