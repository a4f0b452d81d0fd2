"""
Database models: User, Category, Tag, Article and the article's child collections.

- Article: belongs to one Category and one author (User), many-to-many with Tag
- Comment, ArticleImage, ArticleVideo: one-to-many children of Article
- published_at values are stored as naive UTC datetimes
"""

from sqlalchemy import Boolean, Column, Integer, String, DateTime, Text, ForeignKey, Table, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from newsdesk.db import Base

article_tags = Table(
    "article_tags",
    Base.metadata,
    Column("article_id", Integer, ForeignKey("articles.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
    Index("ix_article_tags_tag_id", "tag_id"),
)

class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(255), nullable=False)
    username = Column(String(255), nullable=False, unique=True)
    email = Column(String(255), nullable=False, unique=True)

    articles = relationship("Article", back_populates="author")

    def __repr__(self):
        return f"<User(id={self.id} username={self.username})>"

class Category(Base):
    __tablename__ = "categories"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    slug = Column(String(255), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    color = Column(String(7), nullable=True)

    # not authoritative: Article owns category_id
    articles = relationship("Article", back_populates="category")

    def __str__(self):
        return self.name or ""

    def __repr__(self):
        return f"<Category(id={self.id} slug={self.slug})>"

class Tag(Base):
    __tablename__ = "tags"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, unique=True)

    articles = relationship("Article", secondary=article_tags, back_populates="tags")

    def __str__(self):
        return self.name

    def __repr__(self):
        return f"<Tag(id={self.id} name={self.name})>"

class Article(Base):
    __tablename__ = "articles"
    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, unique=True)
    summary = Column(String(255), nullable=False)
    lead = Column(Text, nullable=True)
    content = Column(Text, nullable=False)
    published_at = Column(DateTime, nullable=False, default=func.now())
    priority = Column(Integer, nullable=False, default=0, server_default="0")
    is_top_story = Column(Boolean, nullable=False, default=False, server_default="0")
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)

    author = relationship("User", back_populates="articles")
    category = relationship("Category", back_populates="articles")
    tags = relationship("Tag", secondary=article_tags, back_populates="articles", order_by="Tag.name")
    comments = relationship(
        "Comment",
        back_populates="article",
        cascade="all, delete-orphan",
        order_by="Comment.published_at.desc()",
    )
    images = relationship(
        "ArticleImage",
        back_populates="article",
        cascade="all, delete-orphan",
        order_by="[ArticleImage.position, ArticleImage.id.desc()]",
    )
    videos = relationship(
        "ArticleVideo",
        back_populates="article",
        cascade="all, delete-orphan",
        order_by="[ArticleVideo.position, ArticleVideo.id.desc()]",
    )

    __table_args__ = (
        Index("ix_article_published_at_priority", "published_at", "priority"),
    )

    def __repr__(self):
        return f"<Article(id={self.id} title={self.title[:30]!r})>"

class Comment(Base):
    __tablename__ = "comments"
    id = Column(Integer, primary_key=True, index=True)
    content = Column(Text, nullable=False)
    published_at = Column(DateTime, nullable=False, default=func.now())
    article_id = Column(Integer, ForeignKey("articles.id"), nullable=False, index=True)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    article = relationship("Article", back_populates="comments")
    author = relationship("User")

    def __repr__(self):
        return f"<Comment(id={self.id} article_id={self.article_id})>"

class ArticleImage(Base):
    __tablename__ = "article_images"
    id = Column(Integer, primary_key=True, index=True)
    image_name = Column(String(255), nullable=True)
    image_size = Column(Integer, nullable=True)
    caption = Column(String(255), nullable=True)
    position = Column(Integer, nullable=False, default=0, server_default="0")
    updated_at = Column(DateTime, nullable=True)
    article_id = Column(Integer, ForeignKey("articles.id"), nullable=False, index=True)

    article = relationship("Article", back_populates="images")

    def __repr__(self):
        return f"<ArticleImage(id={self.id} position={self.position})>"

class ArticleVideo(Base):
    __tablename__ = "article_videos"
    id = Column(Integer, primary_key=True, index=True)
    url = Column(String(2048), nullable=False)
    caption = Column(String(255), nullable=True)
    position = Column(Integer, nullable=False, default=0, server_default="0")
    article_id = Column(Integer, ForeignKey("articles.id"), nullable=False, index=True)

    article = relationship("Article", back_populates="videos")

    def __repr__(self):
        return f"<ArticleVideo(id={self.id} position={self.position})>"
