from django.shortcuts import render

from pagelinks.utils import paginate

ITEMS = ["item {}".format(i) for i in range(1, 96)]

def item_list(request):
    items = paginate(request, ITEMS)
    return render(request, "items.html", {"items": items})

def post_list(request, user_id):
    posts = paginate(request, ITEMS, per_page=20, param_name="user[page]")
    return render(request, "posts.html", {"posts": posts, "user_id": user_id})

def report_list(request):
    reports = paginate(request, ITEMS)
    # the archive lives in the project's URLconf, not in the reports one
    return render(request, "reports.html", {"reports": reports})

def unnamed_list(request):
    items = paginate(request, ITEMS)
    return render(request, "items.html", {"items": items})
