import functools

from . import conf
from .tags import Tag, Page, FirstPage, LastPage, PrevPage, NextPage, Gap

__all__ = ["Paginator", "PageProxy", "relevant_pages"]

def relevant_pages(options):
    total = options["total_pages"]
    current = options["current_page"]
    left_window_plus_one = range(1, options["left"] + 2)
    right_window_plus_one = range(total - options["right"], total + 1)
    inside_window_plus_each_sides = range(current - options["window"] - 1, current + options["window"] + 2)
    pages = set(left_window_plus_one) | set(right_window_plus_one) | set(inside_window_plus_each_sides)
    return sorted(p for p in pages if 1 <= p <= total)

@functools.total_ordering
class PageProxy:
    """
    A page number that knows where it stands relative to the current page
    and the configured windows. Templates use it to decide between a page
    link and a gap.

    When created by a paginator, ``was_truncated`` follows the last tag the
    paginator handed out, so a run of hidden pages collapses into one gap
    whatever order a theme renders its tags in.
    """

    def __init__(self, options, page, last, paginator=None):
        self._options = options
        self.number = int(page)
        self._last = last
        self._paginator = paginator

    @property
    def tag(self):
        if self._paginator is None:
            return None
        return self._paginator.page_tag(self)

    @property
    def is_current(self):
        return self.number == self._options["current_page"]

    @property
    def is_first(self):
        return self.number == 1

    @property
    def is_last(self):
        return self.number == self._options["total_pages"]

    @property
    def is_prev(self):
        return self.number == self._options["current_page"] - 1

    @property
    def is_next(self):
        return self.number == self._options["current_page"] + 1

    @property
    def rel(self):
        if self.is_next:
            return "next"
        if self.is_prev:
            return "prev"
        return None

    @property
    def is_out_of_range(self):
        return self.number > self._options["total_pages"]

    @property
    def is_left_outer(self):
        return self.number <= self._options["left"]

    @property
    def is_right_outer(self):
        return self._options["total_pages"] - self.number < self._options["right"]

    @property
    def is_inside_window(self):
        return abs(self._options["current_page"] - self.number) <= self._options["window"]

    @property
    def is_single_gap(self):
        # a gap hiding exactly one page is replaced by that page
        current = self._options["current_page"]
        window = self._options["window"]
        return ((self.number == current - window - 1 and self.number == self._options["left"] + 1) or
                (self.number == current + window + 1 and
                 self.number == self._options["total_pages"] - self._options["right"]))

    @property
    def display_tag(self):
        return self.is_left_outer or self.is_right_outer or self.is_inside_window or self.is_single_gap

    @property
    def was_truncated(self):
        if self._paginator is not None:
            return self._paginator.last is Gap
        return self._last is Gap

    def __int__(self):
        return self.number

    def __index__(self):
        return self.number

    def __str__(self):
        return str(self.number)

    def __repr__(self):
        return "<PageProxy: {}>".format(self.number)

    def __hash__(self):
        return hash(self.number)

    def __eq__(self, other):
        try:
            return self.number == int(other)
        except (TypeError, ValueError):
            return NotImplemented

    def __lt__(self, other):
        try:
            return self.number < int(other)
        except (TypeError, ValueError):
            return NotImplemented

    def __add__(self, other):
        return self.number + int(other)

    def __sub__(self, other):
        return self.number - int(other)

class Paginator(Tag):
    """
    The whole pagination control: first/prev links, the windowed page list
    with gaps, next/last links. Rendered with ``pagelinks/paginator.html``.
    """

    def __init__(self, request, *, window=None, outer_window=None, left=None, right=None,
                 **options):
        super().__init__(request, **options)

        if window is None:
            window = conf.window()
        if outer_window is None:
            outer_window = conf.outer_window()
        if left is None:
            left = conf.left()
        if right is None:
            right = conf.right()

        self.window_options = {
            "window": window,
            "left": left or outer_window,
            "right": right or outer_window,
            "current_page": int(self.options["current_page"]),
            "total_pages": int(self.options["total_pages"]),
        }
        self.options["current_page"] = PageProxy(self.window_options, self.window_options["current_page"], None)
        # class of the tag handed out last, read by PageProxy.was_truncated
        self.last = None

    @property
    def current_page(self):
        return self.options["current_page"]

    @property
    def total_pages(self):
        return self.window_options["total_pages"]

    def _child(self, cls, **extra):
        options = dict(self.options)
        options.update(extra)
        self.last = cls
        # the child tags reuse the parameter set computed by the paginator
        return cls(self.request, param_name=self.param_name, theme=self.theme, views_prefix=self.views_prefix,
                   internal_params=self.params, url_name=self.url_name, url_args=self.url_args,
                   url_kwargs=self.url_kwargs, **options)

    @property
    def first_page_tag(self):
        return self._child(FirstPage)

    @property
    def prev_page_tag(self):
        return self._child(PrevPage)

    @property
    def next_page_tag(self):
        return self._child(NextPage)

    @property
    def last_page_tag(self):
        return self._child(LastPage)

    @property
    def gap_tag(self):
        return self._child(Gap)

    def page_tag(self, page):
        return self._child(Page, page=page)

    @property
    def pages(self):
        # a new pass over the pages starts without a previous tag
        self.last = None
        return [PageProxy(self.window_options, number, None, paginator=self)
                for number in relevant_pages(self.window_options)]

    def get_context(self, **locals):
        locals["paginator"] = self
        return super().get_context(**locals)

    def render(self, **locals):
        if self.total_pages <= 1:
            return ""
        return super().render(**locals)
