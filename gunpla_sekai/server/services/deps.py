"""
Service Dependencies.

Request-scoped service instances for API endpoints. Every service shares the
request's database session.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gunpla_sekai.core.database import get_session

from .builds import BuildService
from .catalog import CatalogService
from .clerk_webhook import ClerkWebhookService
from .collections import CollectionService
from .gunpla_cards import GunplaCardService
from .milestones import MilestoneService
from .reviews import ReviewService
from .search import SearchService, create_meilisearch_client
from .uploads import UploadService
from .users import UserService

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_catalog_service(session: SessionDep) -> CatalogService:
    return CatalogService(session)


def get_search_service(session: SessionDep) -> SearchService:
    return SearchService(session, create_meilisearch_client())


def get_review_service(session: SessionDep) -> ReviewService:
    return ReviewService(session)


def get_collection_service(session: SessionDep) -> CollectionService:
    return CollectionService(session)


def get_build_service(session: SessionDep) -> BuildService:
    return BuildService(session)


def get_milestone_service(session: SessionDep) -> MilestoneService:
    return MilestoneService(session)


def get_upload_service(session: SessionDep) -> UploadService:
    return UploadService(session)


def get_user_service(session: SessionDep) -> UserService:
    return UserService(session)


def get_gunpla_card_service(session: SessionDep) -> GunplaCardService:
    return GunplaCardService(session)


def get_clerk_webhook_service(session: SessionDep) -> ClerkWebhookService:
    return ClerkWebhookService(session)


CatalogServiceDep = Annotated[CatalogService, Depends(get_catalog_service)]
SearchServiceDep = Annotated[SearchService, Depends(get_search_service)]
ReviewServiceDep = Annotated[ReviewService, Depends(get_review_service)]
CollectionServiceDep = Annotated[CollectionService, Depends(get_collection_service)]
BuildServiceDep = Annotated[BuildService, Depends(get_build_service)]
MilestoneServiceDep = Annotated[MilestoneService, Depends(get_milestone_service)]
UploadServiceDep = Annotated[UploadService, Depends(get_upload_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
GunplaCardServiceDep = Annotated[GunplaCardService, Depends(get_gunpla_card_service)]
ClerkWebhookServiceDep = Annotated[ClerkWebhookService, Depends(get_clerk_webhook_service)]
