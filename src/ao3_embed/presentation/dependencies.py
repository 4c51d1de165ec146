"""FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends, Request

from ao3_embed.config import Settings
from ao3_embed.presentation.bots import BotClassifier
from ao3_embed.presentation.composer import PreviewComposer
from ao3_embed.service import WorkMetadataService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_metadata_service(request: Request) -> WorkMetadataService:
    return request.app.state.metadata_service


def get_composer(request: Request) -> PreviewComposer:
    return request.app.state.composer


def get_bot_classifier(request: Request) -> BotClassifier:
    return request.app.state.bot_classifier


SettingsDep = Annotated[Settings, Depends(get_app_settings)]
MetadataServiceDep = Annotated[WorkMetadataService, Depends(get_metadata_service)]
ComposerDep = Annotated[PreviewComposer, Depends(get_composer)]
BotClassifierDep = Annotated[BotClassifier, Depends(get_bot_classifier)]
