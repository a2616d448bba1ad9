from functools import lru_cache
from pathlib import Path

from receipt_total.errors.exceptions import AnalysisInternalError
from receipt_total.validation.models import SubmissionType

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"

_PROMPT_FILES = {
    SubmissionType.STATEMENT: "statement_prompt.txt",
    SubmissionType.PAYMENT: "payment_prompt.txt",
}


def prompt_for(submission_type: SubmissionType | str | None) -> str:
    """Return the extraction instruction for a submission type.

    Anything other than STATEMENT gets the PAYMENT prompt.

    Raises:
        AnalysisInternalError: if the bundled prompt file cannot be read.
    """
    if submission_type == SubmissionType.STATEMENT:
        return load_prompt(_PROMPT_FILES[SubmissionType.STATEMENT])
    return load_prompt(_PROMPT_FILES[SubmissionType.PAYMENT])


@lru_cache(maxsize=None)
def load_prompt(file_name: str, prompt_dir: Path = _DEFAULT_PROMPT_DIR) -> str:
    """Load a prompt template from the prompts directory.

    Args:
        file_name: Name of the template file.
        prompt_dir: Directory holding the templates.
                    Defaults to the bundled prompts/ directory.

    Returns:
        The prompt text with surrounding whitespace removed.

    Raises:
        AnalysisInternalError: if the file cannot be read.
    """
    path = prompt_dir / file_name
    try:
        return path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise AnalysisInternalError(f"Failed to load prompt template: {exc}") from exc
