from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse
from datetime import datetime, timezone
import logging

from portfolio_api.api.dependencies import get_app_settings
from portfolio_api.core.config import Settings
from portfolio_api.core.errors import ResumeDownloadError
from portfolio_api.core.resume import content_disposition, locate_resume

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/resume")
async def download_resume(settings: Settings = Depends(get_app_settings)):
    """Stream the resume PDF as an attachment"""
    resume_path = locate_resume(settings)

    try:
        stat_result = resume_path.stat()
    except OSError as e:
        logger.error(f"Error downloading resume: {str(e)}")
        raise ResumeDownloadError(str(e)) from e

    logger.info(f"Resume downloaded - {datetime.now(timezone.utc).isoformat()}")

    return FileResponse(
        resume_path,
        stat_result=stat_result,
        media_type="application/pdf",
        headers={"Content-Disposition": content_disposition(settings)},
    )
