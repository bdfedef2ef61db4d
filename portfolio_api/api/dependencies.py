from fastapi import Depends, Request

from portfolio_api.core.config import Settings
from portfolio_api.core.email_transport import EmailTransport, build_transport


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was created with"""
    return request.app.state.settings


def get_transport(settings: Settings = Depends(get_app_settings)) -> EmailTransport:
    """A fresh transport per request; tests override this with a stub."""
    return build_transport(settings)
