"""
Pydantic schemas for responses.
"""

from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, ConfigDict

class TagOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str

class CategoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: str
    description: Optional[str] = None
    color: Optional[str] = None

class AuthorOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    full_name: str

class CommentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    content: str
    published_at: datetime
    author: AuthorOut

class ImageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    image_name: Optional[str] = None
    caption: Optional[str] = None
    position: int

class VideoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    url: str
    caption: Optional[str] = None
    position: int

class ArticleOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    slug: str
    summary: str
    lead: Optional[str] = None
    published_at: datetime
    priority: int
    is_top_story: bool
    author: AuthorOut
    category: CategoryOut
    tags: List[TagOut] = []

class ArticleDetailOut(ArticleOut):
    content: str
    comments: List[CommentOut] = []
    images: List[ImageOut] = []
    videos: List[VideoOut] = []

class PageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    items: List[ArticleOut]
    current_page: int
    page_size: int
    total_items: int
    total_pages: int
    has_previous: bool
    has_next: bool
    previous_page: Optional[int] = None
    next_page: Optional[int] = None
    tag_name: Optional[str] = None
    category_name: Optional[str] = None

class SearchOut(BaseModel):
    query: str
    articles: List[ArticleOut]

class HomepageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    top_story: Optional[ArticleOut] = None
    latest: List[ArticleOut]
    trending: List[ArticleOut]
    tags: List[TagOut]
