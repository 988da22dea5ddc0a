import logging
import re

from django.conf import settings
from django.urls import reverse, NoReverseMatch
from django.core.paginator import Paginator, EmptyPage, PageNotAnInteger

from .. import conf
from .query import params_from_querydict

__all__ = ["param_path", "dig", "reverse_page_path", "paginate"]

logger = logging.getLogger(__name__)

def param_path(param_name):
    # "user[page]" -> ["user", "page"], plain names are never split
    if "[" not in param_name:
        return [param_name]
    return re.findall(r"[\w.]+", param_name)

def dig(params, path):
    for key in path:
        if not isinstance(params, dict):
            return None
        params = params.get(key)
    return params

def reverse_page_path(request, url_name=None, url_args=None, url_kwargs=None):
    if url_name is None:
        match = request.resolver_match
        if match is None:
            # the request was never routed (e.g. rendered from a test), reuse its path
            return request.path
        # dotted view paths can't be reversed, unnamed routes are looked up by their callable
        url_name = match.view_name if match.url_name is not None else match.func
        if url_args is None:
            url_args = match.args
        if url_kwargs is None:
            url_kwargs = match.kwargs
        current_app = match.namespace
    else:
        current_app = None

    url_args = url_args or ()
    url_kwargs = url_kwargs or {}
    urlconf = getattr(request, "urlconf", None)

    try:
        return reverse(url_name, urlconf=urlconf, args=url_args, kwargs=url_kwargs, current_app=current_app)
    except NoReverseMatch:
        # a mounted sub-application only knows its own routes, the project's URLconf may still resolve it
        root_urlconf = settings.ROOT_URLCONF
        if urlconf is None or urlconf == root_urlconf:
            raise
        logger.debug("Could not reverse '{}' in {}, retrying with {}".format(url_name, urlconf, root_urlconf))
        return reverse(url_name, urlconf=root_urlconf, args=url_args, kwargs=url_kwargs)

def paginate(request, objects, per_page=None, param_name=None):
    if per_page is None:
        per_page = conf.default_per_page()
    max_per_page = conf.max_per_page()
    if max_per_page is not None:
        per_page = min(per_page, max_per_page)
    if param_name is None:
        param_name = conf.param_name()

    paginator = Paginator(objects, per_page)
    page = dig(params_from_querydict(request.GET), param_path(param_name))
    try:
        objects = paginator.page(page if page is not None else 1)
    except PageNotAnInteger:
        # If page is not an integer, deliver the first page.
        logger.debug("Page '{}' is not an integer, showing the first page".format(page))
        objects = paginator.page(1)
    except EmptyPage:
        # If page is out of range, deliver the last page.
        logger.debug("Page '{}' is out of range, showing page {}".format(page, paginator.num_pages))
        objects = paginator.page(paginator.num_pages)
    return objects
