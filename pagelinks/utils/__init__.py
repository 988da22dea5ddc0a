from .query import *
from .django import *
