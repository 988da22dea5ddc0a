from django.conf import settings

__all__ = ["param_name", "params_on_first_page", "window", "outer_window", "left", "right",
           "default_per_page", "max_per_page"]

# settings are read on every call so that override_settings works in tests

def param_name():
    return getattr(settings, "PAGELINKS_PARAM_NAME", "page")

def params_on_first_page():
    return getattr(settings, "PAGELINKS_PARAMS_ON_FIRST_PAGE", False)

def window():
    return getattr(settings, "PAGELINKS_WINDOW", 4)

def outer_window():
    return getattr(settings, "PAGELINKS_OUTER_WINDOW", 0)

def left():
    return getattr(settings, "PAGELINKS_LEFT", 0)

def right():
    return getattr(settings, "PAGELINKS_RIGHT", 0)

def default_per_page():
    return getattr(settings, "PAGELINKS_DEFAULT_PER_PAGE", 25)

def max_per_page():
    return getattr(settings, "PAGELINKS_MAX_PER_PAGE", None)
