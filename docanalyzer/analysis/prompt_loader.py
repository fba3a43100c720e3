from pathlib import Path

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_instruction(path: Path | None = None) -> str:
    """Load the fixed analysis instruction sent with every document.

    Args:
        path: Path to the instruction file.
              Defaults to the bundled analysis_prompt.txt.

    Raises:
        OSError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "analysis_prompt.txt"
    return path.read_text(encoding="utf-8").strip()
