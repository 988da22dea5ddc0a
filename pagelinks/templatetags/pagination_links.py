from django import template
from django.utils.html import format_html, mark_safe
from django.utils.translation import gettext, ngettext

from ..paginator import Paginator
from ..tags import PrevPage, NextPage

register = template.Library()

@register.simple_tag(takes_context=True)
def paginate(context, page_obj, **options):
    # {% paginate page_obj theme="compact" param_name="user[page]" window=2 %}
    options.setdefault("current_page", page_obj.number)
    options.setdefault("total_pages", page_obj.paginator.num_pages)
    options.setdefault("per_page", page_obj.paginator.per_page)
    options.setdefault("remote", False)
    return Paginator(context["request"], **options).render()

@register.simple_tag(takes_context=True)
def path_to_prev_page(context, page_obj, **options):
    if not page_obj.has_previous():
        return ""
    options.setdefault("current_page", page_obj.number)
    return PrevPage(context["request"], **options).url

@register.simple_tag(takes_context=True)
def path_to_next_page(context, page_obj, **options):
    if not page_obj.has_next():
        return ""
    options.setdefault("current_page", page_obj.number)
    return NextPage(context["request"], **options).url

@register.simple_tag(takes_context=True)
def rel_next_prev_link_tags(context, page_obj, **options):
    html = ""
    next_page = path_to_next_page(context, page_obj, **options)
    if next_page:
        html += format_html('<link rel="next" href="{}">\n', next_page)
    prev_page = path_to_prev_page(context, page_obj, **options)
    if prev_page:
        html += format_html('<link rel="prev" href="{}">\n', prev_page)
    return mark_safe(html)

@register.simple_tag
def page_entries_info(page_obj, entry_name=None):
    total = page_obj.paginator.count

    if entry_name is None:
        # pluralised on the entries shown, not on the total
        entry_name = ngettext("entry", "entries", len(page_obj))

    # everything fits on a single page
    if page_obj.paginator.num_pages < 2:
        if total == 0:
            return format_html(gettext("No {entry_name} found"), entry_name=entry_name)
        return format_html(ngettext("Displaying <b>{count}</b> {entry_name}",
                                    "Displaying <b>all {count}</b> {entry_name}", total),
                           count=total, entry_name=entry_name)

    return format_html(gettext("Displaying {entry_name} <b>{first}&nbsp;-&nbsp;{last}</b> of <b>{total}</b> in total"),
                       entry_name=entry_name, first=page_obj.start_index(), last=page_obj.end_index(), total=total)
