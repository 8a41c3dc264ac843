from pathlib import Path

from resume_review.review.exceptions import PromptTemplateError
from resume_review.review.stages import STAGE_ORDER, ReviewStage

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(stage: ReviewStage, prompt_dir: Path | None = None) -> str:
    """Load the prompt template for one review stage.

    Args:
        stage: The stage whose template to load.
        prompt_dir: Directory holding `<stage>.txt` templates.
                    Defaults to the bundled prompts directory.

    Returns:
        The raw template string with placeholders.

    Raises:
        PromptTemplateError: if the file cannot be read.
    """
    if prompt_dir is None:
        prompt_dir = _DEFAULT_PROMPT_DIR
    path = prompt_dir / f"{stage.value}.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PromptTemplateError(
            f"Failed to load prompt template for {stage.value}: {exc}"
        ) from exc


def load_prompt_templates(prompt_dir: Path | None = None) -> dict[ReviewStage, str]:
    """Load the templates of every review stage."""
    return {stage: load_prompt_template(stage, prompt_dir) for stage in STAGE_ORDER}
