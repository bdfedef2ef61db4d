from pathlib import Path

from portfolio_api.core.config import Settings
from portfolio_api.core.errors import NotFoundError

MISSING_RESUME_HINT = "Please add a resume.pdf file to the backend directory"


def locate_resume(settings: Settings) -> Path:
    """Return the configured resume path, or raise NotFoundError if the file is absent."""
    path = Path(settings.resume_path)
    if not path.is_file():
        raise NotFoundError(MISSING_RESUME_HINT)
    return path


def content_disposition(settings: Settings) -> str:
    return f'attachment; filename="{settings.resume_download_name}"'
