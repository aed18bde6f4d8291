from pathlib import Path

from resumecraft.generation.exceptions import GenerationError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(name: str, path: Path | None = None) -> str:
    """Load a prompt template.

    Args:
        name: File name inside the bundled prompts directory, e.g.
              "tailor_prompt.txt". Ignored when ``path`` is given.
        path: Explicit template file to read instead.

    Returns:
        The raw template string with ``str.format`` placeholders.

    Raises:
        GenerationError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / name
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise GenerationError(f"Failed to load prompt template: {exc}") from exc
