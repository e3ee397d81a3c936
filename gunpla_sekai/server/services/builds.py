"""
Build Service.

Build logs and everything hanging off them: likes, comments, the media
gallery and the data used for share cards. Only the author may change a
build, its gallery or its featured image.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from gunpla_sekai.core.database.entities.builds import Build, BuildComment
from gunpla_sekai.core.database.entities.users import User
from gunpla_sekai.core.database.repositories import BuildRepository, KitRepository, UploadRepository
from gunpla_sekai.core.errors import BadRequestError, NotFoundError, PermissionDeniedError, ValidationFailedError
from gunpla_sekai.core.logging_config import get_logger
from gunpla_sekai.core.models.domain.enums import BuildSort, BuildStatus
from gunpla_sekai.core.models.io.builds import (
    BuildCreate,
    BuildDetail,
    BuildListItem,
    BuildPage,
    BuildUpdate,
    BuildUploadRead,
    CommentRead,
    LikeState,
    ShareData,
    ShareKit,
)
from gunpla_sekai.server.core.config import settings

logger = get_logger(__name__)

MAX_PAGE_SIZE = 50


def validate_paging(limit: int, offset: int) -> None:
    if limit < 1 or limit > MAX_PAGE_SIZE:
        raise BadRequestError(f"Limit must be between 1 and {MAX_PAGE_SIZE}")
    if offset < 0:
        raise BadRequestError("Offset must be non-negative")


class BuildService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.builds = BuildRepository(session)
        self.kits = KitRepository(session)
        self.uploads = UploadRepository(session)

    async def get_build(self, build_id: str) -> Build:
        build = await self.builds.get_by_id(build_id)
        if build is None:
            raise NotFoundError("Build")
        return build

    async def owned_build(self, build_id: str, user_id: str) -> Build:
        build = await self.get_build(build_id)
        if build.user_id != user_id:
            raise PermissionDeniedError()
        return build

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    async def create(self, user_id: str, data: BuildCreate) -> BuildDetail:
        if await self.kits.get_by_id(data.kit_id) is None:
            raise NotFoundError("Kit")
        build = await self.builds.create(Build(user_id=user_id, **data.model_dump()))
        logger.info(f"User {user_id} started build {build.id} for kit {build.kit_id}")
        return await self.builds.detail(build, user_id)

    async def detail(self, build_id: str, viewer_id: Optional[str] = None) -> BuildDetail:
        return await self.builds.detail(await self.get_build(build_id), viewer_id)

    async def update(self, build_id: str, user_id: str, data: BuildUpdate) -> BuildDetail:
        build = await self.owned_build(build_id, user_id)
        changes = data.model_dump(exclude_unset=True)
        featured = changes.get("featured_image_id")
        if featured and await self.builds.gallery_link(build.id, featured) is None:
            raise BadRequestError("Featured image must be part of the build gallery")
        for key, value in changes.items():
            if value is None and key in ("title", "status"):
                continue
            setattr(build, key, value)
        build = await self.builds.update(build)
        return await self.builds.detail(build, user_id)

    async def delete(self, build_id: str, user_id: str) -> None:
        build = await self.owned_build(build_id, user_id)
        await self.builds.delete_cascade(build)
        logger.info(f"Deleted build {build_id}")

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------

    async def page(
        self,
        limit: int = 20,
        offset: int = 0,
        status: Optional[BuildStatus] = None,
        sort: BuildSort = BuildSort.newest,
        user_id: Optional[str] = None,
    ) -> BuildPage:
        validate_paging(limit, offset)
        builds, total = await self.builds.page(user_id=user_id, status=status, sort=sort, limit=limit, offset=offset)
        return BuildPage(
            builds=await self.builds.to_list_items(builds),
            has_more=offset + len(builds) < total,
            total=total,
        )

    async def recent(self, limit: int = 10) -> List[BuildListItem]:
        return await self.builds.to_list_items(await self.builds.recent(limit))

    async def for_kit(self, kit_id: str, limit: int = 10) -> List[BuildListItem]:
        return await self.builds.to_list_items(await self.builds.for_kit(kit_id, limit))

    # ------------------------------------------------------------------
    # Likes
    # ------------------------------------------------------------------

    async def likes(self, build_id: str, user_id: Optional[str]) -> LikeState:
        await self.get_build(build_id)
        liked = await self.builds.has_liked(build_id, user_id) if user_id else False
        return LikeState(likes=await self.builds.like_count(build_id), liked=liked)

    async def set_like(self, build_id: str, user_id: str, liked: bool) -> LikeState:
        await self.get_build(build_id)
        await self.builds.set_like(build_id, user_id, liked)
        return await self.likes(build_id, user_id)

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    @staticmethod
    def _clean_content(content: str) -> str:
        content = content.strip()
        if not content:
            raise ValidationFailedError("Comment content cannot be empty")
        return content

    async def comments(self, build_id: str) -> List[CommentRead]:
        await self.get_build(build_id)
        return await self.builds.comments_to_read(await self.builds.comments(build_id))

    async def add_comment(self, build_id: str, user_id: str, content: str) -> CommentRead:
        await self.get_build(build_id)
        comment = BuildComment(build_id=build_id, user_id=user_id, content=self._clean_content(content))
        comment = await self.builds.save_comment(comment)
        return (await self.builds.comments_to_read([comment]))[0]

    async def _own_comment(self, build_id: str, comment_id: str, user_id: str) -> BuildComment:
        comment = await self.builds.get_comment(build_id, comment_id)
        if comment is None:
            raise NotFoundError("Comment")
        if comment.user_id != user_id:
            raise PermissionDeniedError()
        return comment

    async def edit_comment(self, build_id: str, comment_id: str, user_id: str, content: str) -> CommentRead:
        comment = await self._own_comment(build_id, comment_id, user_id)
        comment.content = self._clean_content(content)
        comment = await self.builds.save_comment(comment)
        return (await self.builds.comments_to_read([comment]))[0]

    async def delete_comment(self, build_id: str, comment_id: str, user_id: str) -> None:
        comment = await self._own_comment(build_id, comment_id, user_id)
        await self.builds.remove_comment(comment)

    # ------------------------------------------------------------------
    # Share
    # ------------------------------------------------------------------

    async def share_data(self, build_id: str) -> ShareData:
        build = await self.get_build(build_id)
        kit = await self.kits.get_by_id(build.kit_id)
        author = await self.session.get(User, build.user_id)
        author_name = author.display_name if author else "Anonymous"
        featured = await self.uploads.get_by_id(build.featured_image_id) if build.featured_image_id else None

        image = None
        if featured is not None:
            image = featured.eager_url or featured.url
        elif kit is not None:
            image = kit.box_art

        return ShareData(
            url=f"{settings.app_url.rstrip('/')}/builds/{build.id}",
            title=build.title,
            description=build.description or f"A Gunpla build by {author_name}",
            image=image,
            author=author_name,
            kit=ShareKit(name=kit.name, number=kit.number, slug=kit.slug) if kit else ShareKit(name=""),
            status=build.status,
            likes=await self.builds.like_count(build.id),
            comments=await self.builds.comment_count(build.id),
        )

    # ------------------------------------------------------------------
    # Gallery
    # ------------------------------------------------------------------

    async def gallery(self, build_id: str) -> List[BuildUploadRead]:
        await self.get_build(build_id)
        return await self.builds.gallery(build_id)

    async def add_to_gallery(
        self, build_id: str, user_id: str, upload_id: str, caption: Optional[str] = None
    ) -> List[BuildUploadRead]:
        await self.owned_build(build_id, user_id)
        upload = await self.uploads.get_by_id(upload_id)
        if upload is None or upload.uploaded_by_id != user_id:
            raise NotFoundError("Upload", "Upload not found or unauthorized")
        await self.builds.add_to_gallery(build_id, upload_id, caption)
        return await self.builds.gallery(build_id)

    async def remove_from_gallery(self, build_id: str, user_id: str, upload_id: str) -> None:
        build = await self.owned_build(build_id, user_id)
        if not await self.builds.remove_from_gallery(build, upload_id):
            raise NotFoundError("Gallery image")
