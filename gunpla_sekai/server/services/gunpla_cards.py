"""
Gunpla Card Service.

Server side of the card builder: which images a kit offers as backgrounds,
whether the user already has a card for a kit, saving a card (replacing the
previous one) and listing a member's cards.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from gunpla_sekai.core.database.entities.catalog import Kit, KitUpload, ProductLine, Series
from gunpla_sekai.core.database.entities.uploads import Upload
from gunpla_sekai.core.database.repositories import (
    GunplaCardRepository,
    KitRepository,
    UploadRepository,
    UserRepository,
)
from gunpla_sekai.core.errors import BadRequestError, NotFoundError
from gunpla_sekai.core.logging_config import get_logger
from gunpla_sekai.core.models.io.gunpla_cards import (
    CardCheckRead,
    CardRead,
    CardSave,
    CardSummary,
    KitMediaRead,
    UserCardsRead,
)
from gunpla_sekai.core.models.io.users import UserSummary

logger = get_logger(__name__)


class GunplaCardService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.cards = GunplaCardRepository(session)
        self.kits = KitRepository(session)
        self.uploads = UploadRepository(session)
        self.users = UserRepository(session)

    async def _kit_by_slug(self, kit_slug: Optional[str]) -> Kit:
        if not kit_slug:
            raise BadRequestError("kit_slug is required")
        kit = await self.kits.get_by_slug(kit_slug)
        if kit is None:
            raise NotFoundError("Kit")
        return kit

    async def check(self, user_id: str, kit_slug: Optional[str]) -> CardCheckRead:
        kit = await self._kit_by_slug(kit_slug)
        card = await self.cards.get_for(user_id, kit.id)
        if card is None:
            return CardCheckRead(exists=False, kit_name=kit.name)
        upload = await self.uploads.get_by_id(card.upload_id)
        return CardCheckRead(
            exists=True,
            card=CardSummary(
                id=card.id,
                upload_url=upload.url if upload else "",
                created_at=card.created_at,
                kit_name=kit.name,
            ),
            kit_name=kit.name,
        )

    async def save(self, user_id: str, data: CardSave) -> CardSummary:
        kit = await self._kit_by_slug(data.kit_slug)
        upload = self.uploads.build(user_id, data.upload_data)
        card = await self.cards.replace(user_id, kit.id, upload)
        logger.info(f"Saved gunpla card {card.id} for user {user_id} and kit {kit.slug}")
        return CardSummary(id=card.id, upload_url=upload.url, created_at=card.created_at, kit_name=kit.name)

    async def user_cards(self, username: str) -> UserCardsRead:
        user = await self.users.get_by_username(username)
        if user is None:
            raise NotFoundError("User")
        cards = await self.cards.list_for_user(user.id)
        uploads = await self.uploads.get_many(c.upload_id for c in cards)
        found = await self.kits.get_many(c.kit_id for c in cards)
        kits = {s.id: s for s in await self.kits.summarize(list(found.values()))}

        reads: List[CardRead] = []
        for card in cards:
            upload, kit = uploads.get(card.upload_id), kits.get(card.kit_id)
            if upload is None or kit is None:
                continue
            reads.append(CardRead(id=card.id, src=upload.display_url, alt=kit.name, created_at=card.created_at, kit=kit))
        return UserCardsRead(user=UserSummary.model_validate(user), cards=reads)

    async def kit_media(self, kit_id: Optional[str] = None, kit_slug: Optional[str] = None) -> KitMediaRead:
        """
        Collect distinct image urls for a kit.

        Order: box art, the kit's scraped images, images uploaded for the kit,
        the product line image, then the series images.
        """
        if not kit_id and not kit_slug:
            raise BadRequestError("kit_id or kit_slug is required")
        kit = await self.kits.get_by_id(kit_id) if kit_id else await self.kits.get_by_slug(kit_slug)
        if kit is None:
            return KitMediaRead()

        urls: List[Optional[str]] = [kit.box_art, *(kit.scraped_images or [])]
        result = await self.session.execute(
            select(Upload.url)
            .join(KitUpload, KitUpload.upload_id == Upload.id)
            .where(KitUpload.kit_id == kit.id)
            .order_by(KitUpload.created_at)
        )
        urls.extend(url for (url,) in result.all())
        if kit.product_line_id:
            line = await self.session.get(ProductLine, kit.product_line_id)
            urls.append(line.scraped_image if line else None)
        if kit.series_id:
            series = await self.session.get(Series, kit.series_id)
            urls.extend((series.scraped_images or []) if series else [])

        return KitMediaRead(images=list(dict.fromkeys(url for url in urls if url)))
