#!/usr/bin/env python3
"""Replace all news with a small sample set.

Categories are created when missing; articles are authored by an ``editor``
user (created with a random password when missing).
"""
import asyncio
import os
import secrets
import sys
from datetime import datetime
from uuid import uuid4

# Add project root to path
sys.path.append(os.getcwd())

from sqlalchemy import delete, select

from app.core.security import get_password_hash
from app.database import AsyncSessionLocal
from app.models.article import Article as ArticleModel
from app.models.category import Category, DEFAULT_CATEGORIES
from app.models.user import User, ROLE_AUTHOR
from app.schemas.article import Article
from app.store.sql import SQLArticleStore

SAMPLE_NEWS = [
    {
        "title": "The Future of AI: What's Next in 2024",
        "excerpt": "Exploring the latest developments in artificial intelligence and their impact on various industries.",
        "content": "Artificial Intelligence continues to evolve at a rapid pace, with new breakthroughs being announced almost daily. From advanced language models to computer vision systems, AI is transforming how we live and work.",
        "category": "technology",
        "published": "2024-03-15T10:30:00+00:00",
        "views": 1250,
        "image": "https://images.unsplash.com/photo-1677442136019-21780ecad995",
        "featured": True,
    },
    {
        "title": "Global Markets React to New Economic Policies",
        "excerpt": "Major stock markets show mixed reactions to recent economic policy changes worldwide.",
        "content": "Global financial markets experienced significant volatility this week as investors reacted to new economic policies announced by major central banks.",
        "category": "business",
        "published": "2024-03-14T15:45:00+00:00",
        "views": 980,
        "image": "https://images.unsplash.com/photo-1611974789855-9c2a0a7236a3",
        "featured": False,
    },
    {
        "title": "Olympic Games 2024: Preparations in Full Swing",
        "excerpt": "Paris gears up for the 2024 Olympic Games with innovative infrastructure projects.",
        "content": "With just months to go before the opening ceremony, Paris is transforming into a world-class sporting venue.",
        "category": "sports",
        "published": "2024-03-13T09:15:00+00:00",
        "views": 2100,
        "image": "https://images.unsplash.com/photo-1531415074968-036ba1b575da",
        "featured": True,
    },
    {
        "title": "Breakthrough in Cancer Research",
        "excerpt": "Scientists discover promising new approach to cancer treatment.",
        "content": "A team of researchers has made a significant breakthrough in cancer treatment, developing a new method that targets cancer cells more effectively while reducing side effects.",
        "category": "health",
        "published": "2024-03-12T14:20:00+00:00",
        "views": 3500,
        "image": "https://images.unsplash.com/photo-1576091160550-2173dba999ef",
        "featured": True,
    },
    {
        "title": "New Streaming Platform Shakes Up Entertainment Industry",
        "excerpt": "Tech giant launches revolutionary streaming service with unique features.",
        "content": "A major technology company has entered the streaming wars with an innovative platform that promises to change how we consume entertainment.",
        "category": "entertainment",
        "published": "2024-03-11T11:00:00+00:00",
        "views": 1800,
        "image": "https://images.unsplash.com/photo-1593784991095-a205069470b6",
        "featured": False,
    },
    {
        "title": "Quantum Computing Milestone Achieved",
        "excerpt": "Researchers achieve quantum supremacy in solving complex problems.",
        "content": "Scientists have reached a significant milestone in quantum computing, demonstrating the ability to solve problems that would take classical computers thousands of years to complete.",
        "category": "technology",
        "published": "2024-03-10T16:30:00+00:00",
        "views": 4200,
        "image": "https://images.unsplash.com/photo-1635070041078-e363dbe005cb",
        "featured": True,
    },
    {
        "title": "Sustainable Business Practices Gain Momentum",
        "excerpt": "Companies worldwide adopt eco-friendly initiatives.",
        "content": "A growing number of businesses are implementing sustainable practices as consumer demand for environmentally responsible products increases.",
        "category": "business",
        "published": "2024-03-09T13:45:00+00:00",
        "views": 1600,
        "image": "https://images.unsplash.com/photo-1542601906990-b4d3fb778b09",
        "featured": False,
    },
    {
        "title": "World Cup Qualifiers: Surprise Results",
        "excerpt": "Underdog teams make unexpected advances in World Cup qualifiers.",
        "content": "The World Cup qualifiers have produced several surprising results, with traditionally lower-ranked teams showing remarkable improvement.",
        "category": "sports",
        "published": "2024-03-08T10:15:00+00:00",
        "views": 2800,
        "image": "https://images.unsplash.com/photo-1508098682722-e99c643e2f9f",
        "featured": False,
    },
]

async def seed():
    async with AsyncSessionLocal() as session:
        category_ids = {}
        for name, color in DEFAULT_CATEGORIES.items():
            result = await session.execute(select(Category).where(Category.name == name))
            category = result.scalar_one_or_none()
            if not category:
                category = Category(name=name, color=color)
                session.add(category)
                await session.flush()
            category_ids[name] = category.id

        result = await session.execute(select(User).where(User.username == "editor"))
        editor = result.scalar_one_or_none()
        if not editor:
            editor = User(
                username="editor",
                name="Editorial Team",
                hashed_password=get_password_hash(secrets.token_urlsafe(16)),
                role=ROLE_AUTHOR,
            )
            session.add(editor)
            await session.flush()

        await session.execute(delete(ArticleModel))
        await session.commit()
        print("Cleared existing news data")

        store = SQLArticleStore(session)
        for item in SAMPLE_NEWS:
            published = datetime.fromisoformat(item["published"])
            await store.insert(Article(
                id=uuid4(),
                title=item["title"],
                excerpt=item["excerpt"],
                content=item["content"],
                category=category_ids[item["category"]],
                author=editor.id,
                image=item["image"],
                featured=item["featured"],
                views=item["views"],
                created_at=published,
                updated_at=published,
            ))

        print(f"Successfully seeded database with {len(SAMPLE_NEWS)} sample news")

if __name__ == "__main__":
    asyncio.run(seed())
