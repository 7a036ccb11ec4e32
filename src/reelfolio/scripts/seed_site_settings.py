"""Create the site settings row if it doesn't exist yet."""

import asyncio

from sqlalchemy import select

from reelfolio.database import AsyncSessionLocal
from reelfolio.models.site_settings import SiteSettings

DEFAULT_SETTINGS = {
    "director_name": "Bala",
    "tagline": "Cinematic storyteller",
    "bio": None,
    "profile_image_url": None,
    "hero_video_url": None,
    "theme_color": "#c9a84c",
    "show_featured_section": True,
}


async def seed_site_settings() -> None:
    async with AsyncSessionLocal() as session:
        result = await session.execute(select(SiteSettings).limit(1))
        if result.scalar_one_or_none() is not None:
            print("Site settings already exist, skipping")
            return

        session.add(SiteSettings(**DEFAULT_SETTINGS))
        await session.commit()
        print(f"Added site settings for {DEFAULT_SETTINGS['director_name']}")


if __name__ == "__main__":
    asyncio.run(seed_site_settings())
