"""Shared fixtures for unit tests.

Every test gets its own in-memory SQLite database with the full schema, plus
optional seed data: a handful of members and a small Universal Century
catalog.
"""

from __future__ import annotations

from datetime import date
from types import SimpleNamespace
from typing import AsyncGenerator

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.pool import StaticPool

from gunpla_sekai.core.database.utils import create_all

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(name="engine")
async def engine_fixture():
    """Create a fresh in-memory database for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(name="session")
async def session_fixture(engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a new session for each test."""
    async_session_maker = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session_maker() as session:  # type: ignore[attr-defined]
        yield session


@pytest_asyncio.fixture(name="users")
async def users_fixture(session: AsyncSession) -> SimpleNamespace:
    """Three members: two regular builders and an admin."""
    from gunpla_sekai.core.database.entities import User

    alice = User(id="user_alice", email="alice@example.com", username="alice", first_name="Alice", last_name="Amuro")
    bob = User(id="user_bob", email="bob@example.com", username="bob", first_name="Bob")
    admin = User(id="user_admin", email="admin@example.com", username="admin", is_admin=True)
    session.add_all([alice, bob, admin])
    await session.commit()
    return SimpleNamespace(alice=alice, bob=bob, admin=admin)


@pytest_asyncio.fixture(name="catalog")
async def catalog_fixture(session: AsyncSession) -> SimpleNamespace:
    """A small catalog around the One Year War."""
    from gunpla_sekai.core.database.entities import (
        Grade,
        Kit,
        KitMobileSuit,
        MobileSuit,
        ProductLine,
        ReleaseType,
        Series,
        Timeline,
    )

    uc = Timeline(name="Universal Century", slug="universal-century", description="U.C. 0079 onwards")
    ad = Timeline(name="Anno Domini", slug="anno-domini")
    session.add_all([uc, ad])
    await session.flush()

    msg = Series(
        name="Mobile Suit Gundam",
        slug="mobile-suit-gundam",
        timeline_id=uc.id,
        scraped_images=["https://mock.img/series/msg-1.jpg", "https://mock.img/series/msg-2.jpg"],
    )
    g00 = Series(name="Mobile Suit Gundam 00", slug="mobile-suit-gundam-00", timeline_id=ad.id)
    session.add_all([msg, g00])

    hg = Grade(name="High Grade", slug="hg")
    mg = Grade(name="Master Grade", slug="mg")
    session.add_all([hg, mg])
    await session.flush()

    hguc = ProductLine(
        name="HGUC", slug="hguc", grade_id=hg.id, scraped_image="https://mock.img/lines/hguc.jpg"
    )
    mg_ver_ka = ProductLine(name="MG Ver.Ka", slug="mg-ver-ka", grade_id=mg.id)
    retail = ReleaseType(name="Retail", slug="retail")
    pbandai = ReleaseType(name="Premium Bandai", slug="p-bandai")
    session.add_all([hguc, mg_ver_ka, retail, pbandai])

    rx78 = MobileSuit(name="RX-78-2 Gundam", slug="rx-78-2-gundam", series_id=msg.id)
    zaku = MobileSuit(name="MS-06 Zaku II", slug="ms-06-zaku-ii", series_id=msg.id)
    exia = MobileSuit(name="GN-001 Gundam Exia", slug="gn-001-gundam-exia", series_id=g00.id)
    session.add_all([rx78, zaku, exia])
    await session.flush()

    hg_rx78 = Kit(
        name="RX-78-2 Gundam",
        slug="hguc-rx-78-2-gundam",
        number="191",
        release_date=date(2015, 7, 18),
        price_yen=1650,
        box_art="https://mock.img/kits/hguc-191.jpg",
        scraped_images=["https://mock.img/kits/hguc-191-a.jpg", "https://mock.img/kits/hguc-191.jpg"],
        manual_links=["https://mock.manual/hguc-191.pdf"],
        grade_id=hg.id,
        product_line_id=hguc.id,
        series_id=msg.id,
        release_type_id=retail.id,
    )
    mg_rx78 = Kit(
        name="RX-78-2 Gundam Ver.Ka",
        slug="mg-rx-78-2-gundam-ver-ka",
        number="2.0",
        release_date=date(2013, 6, 20),
        price_yen=4950,
        grade_id=mg.id,
        product_line_id=mg_ver_ka.id,
        series_id=msg.id,
        release_type_id=retail.id,
    )
    old_zaku = Kit(
        name="MS-06 Zaku II",
        slug="hguc-ms-06-zaku-ii",
        number="40",
        release_date=date(2003, 4, 1),
        price_yen=1100,
        grade_id=hg.id,
        product_line_id=hguc.id,
        series_id=msg.id,
        release_type_id=retail.id,
    )
    exia_kit = Kit(
        name="Gundam Exia",
        slug="hg00-gundam-exia",
        number="1",
        grade_id=hg.id,
        series_id=g00.id,
    )
    session.add_all([hg_rx78, mg_rx78, old_zaku, exia_kit])
    await session.flush()

    metallic = Kit(
        name="RX-78-2 Gundam Metallic Coating",
        slug="hguc-rx-78-2-gundam-metallic",
        number="191",
        variant="Metallic Coating",
        release_date=date(2016, 2, 1),
        price_yen=2200,
        grade_id=hg.id,
        product_line_id=hguc.id,
        series_id=msg.id,
        release_type_id=pbandai.id,
        base_kit_id=hg_rx78.id,
    )
    session.add(metallic)
    await session.flush()

    session.add_all(
        [
            KitMobileSuit(kit_id=hg_rx78.id, mobile_suit_id=rx78.id),
            KitMobileSuit(kit_id=mg_rx78.id, mobile_suit_id=rx78.id),
            KitMobileSuit(kit_id=metallic.id, mobile_suit_id=rx78.id),
            KitMobileSuit(kit_id=old_zaku.id, mobile_suit_id=zaku.id),
            KitMobileSuit(kit_id=exia_kit.id, mobile_suit_id=exia.id),
        ]
    )
    await session.commit()

    return SimpleNamespace(
        uc=uc,
        ad=ad,
        msg=msg,
        g00=g00,
        hg=hg,
        mg=mg,
        hguc=hguc,
        mg_ver_ka=mg_ver_ka,
        retail=retail,
        pbandai=pbandai,
        rx78=rx78,
        zaku=zaku,
        exia=exia,
        hg_rx78=hg_rx78,
        mg_rx78=mg_rx78,
        old_zaku=old_zaku,
        exia_kit=exia_kit,
        metallic=metallic,
    )


@pytest_asyncio.fixture(name="make_upload")
async def make_upload_fixture(session: AsyncSession):
    """Factory recording a Cloudinary asset for a user."""
    from gunpla_sekai.core.database.entities import Upload

    counter = {"n": 0}

    async def _make(user_id: str, eager: bool = True) -> Upload:
        counter["n"] += 1
        n = counter["n"]
        upload = Upload(
            cloudinary_asset_id=f"asset-{n}",
            public_id=f"uploads/image-{n}",
            url=f"https://mock.cloudinary/image-{n}.jpg",
            eager_url=f"https://mock.cloudinary/q_auto,f_auto/image-{n}.jpg" if eager else None,
            format="jpg",
            size=1024 * n,
            original_filename=f"image-{n}.jpg",
            uploaded_by_id=user_id,
        )
        session.add(upload)
        await session.commit()
        return upload

    return _make
