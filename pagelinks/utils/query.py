import re
from urllib.parse import parse_qsl, quote_plus

from django.core.exceptions import SuspiciousOperation

__all__ = ["InvalidParameterError", "ParamsTooDeepError", "PARAM_DEPTH_LIMIT",
           "parse_nested_query", "params_from_querydict", "build_nested_query",
           "deep_merge", "except_keys"]

PARAM_DEPTH_LIMIT = 100

# leading brackets are skipped, the first bare name is the key and whatever follows is the "rest"
_KEY_PATTERN = re.compile(r"\A[\[\]]*([^\[\]]+)\]*")
_ARRAY_OF_HASHES_PATTERN = re.compile(r"\A\[\]\[([^\[\]]+)\]\Z")
_ARRAY_REST_PATTERN = re.compile(r"\A\[\](.+)\Z")

class InvalidParameterError(SuspiciousOperation):
    pass

class ParamsTooDeepError(InvalidParameterError):
    pass

def _normalize(params, name, value, depth):
    if depth >= PARAM_DEPTH_LIMIT:
        raise ParamsTooDeepError("Query parameters are nested too deeply: {}".format(name))

    match = _KEY_PATTERN.match(name)
    if match is None:
        return params
    key = match.group(1)
    after = name[match.end():]

    if after == "":
        params[key] = value
    elif after == "[":
        params[name] = value
    elif after == "[]":
        items = params.setdefault(key, [])
        if not isinstance(items, list):
            raise InvalidParameterError("expected list (got {}) for param '{}'".format(type(items).__name__, key))
        items.append(value)
    else:
        child = _ARRAY_OF_HASHES_PATTERN.match(after) or _ARRAY_REST_PATTERN.match(after)
        if child is not None:
            child_key = child.group(1)
            items = params.setdefault(key, [])
            if not isinstance(items, list):
                raise InvalidParameterError("expected list (got {}) for param '{}'".format(type(items).__name__, key))
            # keep filling the last hash until the key repeats
            if items and isinstance(items[-1], dict) and not _has_key(items[-1], child_key):
                _normalize(items[-1], child_key, value, depth + 1)
            else:
                items.append(_normalize({}, child_key, value, depth + 1))
        else:
            nested = params.setdefault(key, {})
            if not isinstance(nested, dict):
                raise InvalidParameterError("expected dict (got {}) for param '{}'".format(type(nested).__name__, key))
            params[key] = _normalize(nested, after, value, depth + 1)

    return params

def _has_key(params, name):
    # "a[b]" is looked up as a path, a plain name directly
    if re.search(r"\[\]", name):
        return False
    keys = [k for k in re.split(r"[\[\]]+", name) if k]
    current = params
    for k in keys:
        if not isinstance(current, dict) or k not in current:
            return False
        current = current[k]
    return True

def parse_nested_query(query):
    params = {}
    if not query:
        return params
    # both separators are accepted, like most web servers do
    query = query.replace(";", "&")
    for name, value in parse_qsl(query, keep_blank_values=True):
        _normalize(params, name, value, 0)
    return params

def params_from_querydict(querydict):
    params = {}
    for name, values in querydict.lists():
        for value in values:
            _normalize(params, name, value, 0)
    return params

def build_nested_query(value, prefix=None):
    if isinstance(value, dict):
        parts = (build_nested_query(v, "{}[{}]".format(prefix, k) if prefix else str(k))
                 for k, v in value.items())
        return "&".join(p for p in parts if p)
    if isinstance(value, (list, tuple)):
        parts = (build_nested_query(v, "{}[]".format(prefix)) for v in value)
        return "&".join(p for p in parts if p)
    if value is None or prefix is None:
        return ""
    return "{}={}".format(quote_plus(prefix), quote_plus(str(value)))

def deep_merge(base, other):
    merged = dict(base)
    for key, value in other.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged

def except_keys(params, keys):
    return {k: v for k, v in params.items() if k not in keys}
