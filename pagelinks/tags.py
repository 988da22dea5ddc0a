import re

from django.template.loader import render_to_string
from django.utils.html import mark_safe

from . import conf
from .utils import params_from_querydict, parse_nested_query, deep_merge, except_keys, build_nested_query, \
                   param_path, reverse_page_path

__all__ = ["PARAM_KEY_EXCEPT_LIST", "Tag", "Link", "Page", "FirstPage", "LastPage", "PrevPage", "NextPage", "Gap"]

# request-infrastructure parameters that must not leak into pagination links
PARAM_KEY_EXCEPT_LIST = (
    "authenticity_token",
    "csrfmiddlewaretoken",
    "commit",
    "utf8",
    "_method",
    "script_name",
    "original_script_name",
)

FORMAT_PATTERN = re.compile(r"\A\w+\Z", re.ASCII)

def underscore(name):
    name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    name = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", name)
    return name.lower()

class Tag:
    """
    A tag stands for an HTML element inside the paginator.

    Every tag has its own template, found under ``pagelinks/`` with the
    underscored class name, e.g. ``PrevPage`` is rendered with
    ``pagelinks/prev_page.html``. A theme adds a sub-directory
    (``pagelinks/<theme>/prev_page.html``) and ``views_prefix`` is put in front
    of the whole path. Projects override the templates shipped with this app
    through the usual template loaders.
    """

    def __init__(self, request, *, params=None, param_name=None, theme=None, views_prefix=None,
                 internal_params=None, url_name=None, url_args=None, url_kwargs=None, **options):
        self.request = request
        self.theme = theme
        self.views_prefix = views_prefix
        self.url_name = url_name
        self.url_args = url_args
        self.url_kwargs = url_kwargs
        self.options = options
        self.param_name = param_name or conf.param_name()

        if internal_params is not None:
            self.params = internal_params
        else:
            self.params = except_keys(params_from_querydict(request.GET), PARAM_KEY_EXCEPT_LIST)
            if params:
                self.params.update(params)

    def params_for(self, page):
        omit = not conf.params_on_first_page() and page <= 1

        if "[" not in self.param_name:
            params = dict(self.params)
            params[self.param_name] = None if omit else page
            return params

        params = deep_merge(self.params, parse_nested_query("{}={}".format(self.param_name, page)))
        if omit:
            # {"user": {"name": "yuki", "page": "1"}} -> {"user": {"name": "yuki", "page": None}}
            *parents, leaf = param_path(self.param_name)
            nested = params
            for key in parents:
                nested = nested[key]
            nested[leaf] = None
        return params

    def page_url_for(self, page):
        path = reverse_page_path(self.request, self.url_name, self.url_args, self.url_kwargs)
        query = build_nested_query(self.params_for(page))
        if query:
            return "{}?{}".format(path, query)
        return path

    @property
    def partial_path(self):
        path = "{}/pagelinks/{}/{}".format(self.views_prefix or "", self.theme or "", underscore(type(self).__name__))
        return re.sub(r"/+", "/", path).lstrip("/")

    def template_names(self):
        names = []
        fmt = self.request.GET.get("format")
        # anything but a bare extension could point the lookup at another template
        if fmt and fmt != "html" and FORMAT_PATTERN.match(fmt):
            names.append("{}.{}".format(self.partial_path, fmt))
        names.append("{}.html".format(self.partial_path))
        return names

    def get_context(self, **locals):
        context = dict(self.options)
        context.update(locals)
        return context

    def render(self, **locals):
        return mark_safe(render_to_string(self.template_names(), self.get_context(**locals), request=self.request))

    def __str__(self):
        return self.render()

    # the template engine outputs objects with __html__ without escaping them
    def __html__(self):
        return self.render()

class Link:
    """Mixin for tags that link to a page."""

    @property
    def page(self):
        raise NotImplementedError("{} has to define the target page".format(type(self).__name__))

    @property
    def url(self):
        return self.page_url_for(int(self.page))

    def get_context(self, **locals):
        locals["url"] = self.url
        return super().get_context(**locals)

class Page(Link, Tag):
    """A numbered page."""

    @property
    def page(self):
        return self.options["page"]

    def get_context(self, **locals):
        locals["page"] = self.page
        return super().get_context(**locals)

class FirstPage(Link, Tag):
    """Link to the first page, shown at the leftmost."""

    @property
    def page(self):
        return 1

class LastPage(Link, Tag):
    """Link to the last page, shown at the rightmost."""

    @property
    def page(self):
        return int(self.options["total_pages"])

class PrevPage(Link, Tag):
    """Link to the page before the current one."""

    @property
    def page(self):
        return int(self.options["current_page"]) - 1

class NextPage(Link, Tag):
    """Link to the page after the current one."""

    @property
    def page(self):
        return int(self.options["current_page"]) + 1

class Gap(Tag):
    """Placeholder for pages left out of the list."""
