from .tags import Tag, Link, Page, FirstPage, LastPage, PrevPage, NextPage, Gap
from .paginator import Paginator, PageProxy

__version__ = "1.0.0"
