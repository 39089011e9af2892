from .base import Base
from .project import Project
from .article import Article
from .news import NewsItem
from .tutorial import Tutorial
from .category import Category
from .collaborator import Collaborator
from .site_configuration import SiteConfiguration

__all__ = [
    "Base",
    "Project",
    "Article",
    "NewsItem",
    "Tutorial",
    "Category",
    "Collaborator",
    "SiteConfiguration",
]
