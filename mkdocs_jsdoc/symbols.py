"""
Inspection helpers for JSDoc symbol metadata.

Works on the plain mappings produced by ``jsdoc -X``: dot-path lookup,
alias-aware name resolution, kind/scope/access predicates, type strings and
search keywords. Nothing here mutates the symbols it is given.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

# <anonymous>~obj.doStuff -> obj.doStuff
_CLEAN_NAME_RE = re.compile(r"([^>]+>)?~?(.*)")
_PROTOTYPE_RE = re.compile(r"\.prototype\.")
_SHORT_NAME_RE = re.compile(r".*?[#.~:](\w+)$")
_KEYWORD_STRIP_RE = re.compile(r"[><\"'`\n\r]")

_SCOPE_SEPARATORS = "#.~:"

_CLASS_DECLARATION = "ClassDeclaration"
_METHOD_DEFINITION = "MethodDefinition"
_METHOD_CODE_TYPES = frozenset({_METHOD_DEFINITION, "FunctionExpression"})


def _get_str(value):
    return value if isinstance(value, str) and value.strip() else None


def _clean_name(name):
    return _CLEAN_NAME_RE.sub(r"\2", name or "", count=1)


def _clean_code_name(symbol):
    return _clean_name(notate(symbol, "meta.code.name") or "")


# ── Path lookup ──


def notate(root, path):
    """Return the value at a dot-notation *path* inside *root*.

    *path* is either ``"meta.code.type"`` or an already split sequence of
    segments. Anything that cannot be resolved (a non-mapping on the way, a
    missing key, an empty segment) gives ``None``.

        >>> notate({"meta": {"code": {"type": "MethodDefinition"}}}, "meta.code.type")
        'MethodDefinition'
    """
    segments = path.split(".") if isinstance(path, str) else list(path)
    if not segments:
        return None
    value = root
    for seg in segments:
        if not seg or not isinstance(value, Mapping):
            return None
        value = value.get(seg)
    return value


# ── Names ──


def get_name(symbol):
    """Short name of *symbol*.

    JSDoc overwrites ``name`` and ``longname`` with the ``@alias`` target, so
    for aliased symbols the original identifier is recovered from
    ``meta.code.name``.
    """
    if symbol.get("alias"):
        code_name = _clean_code_name(symbol)
        if code_name:
            return _SHORT_NAME_RE.sub(r"\1", code_name, count=1)
    return symbol.get("name")


def get_long_name(symbol):
    """Fully qualified name of *symbol*, undoing ``@alias`` rewriting."""
    long_name = _clean_name(symbol.get("longname"))
    if not symbol.get("alias"):
        return long_name

    code_name = _PROTOTYPE_RE.sub("#", _clean_code_name(symbol))
    if not code_name:
        return long_name
    member_of = _clean_name(symbol.get("memberof"))
    if not member_of:
        return code_name

    qualified = (
        code_name.startswith(member_of)
        and len(code_name) > len(member_of)
        and code_name[len(member_of)] in _SCOPE_SEPARATORS
    )
    if qualified:
        return code_name
    sep = "#" if symbol.get("scope") == "instance" else "."
    return f"{member_of}{sep}{code_name}"


get_full_name = get_long_name


def get_code_name(symbol):
    """Source identifier of *symbol*, falling back to its long name."""
    return _get_str(_clean_code_name(symbol)) or get_long_name(symbol)


def get_symbol_by_name(docs, name):
    """Depth-first search of *docs* (and their ``$members``) for *name*."""
    for symbol in docs or ():
        if name in (symbol.get("name"), symbol.get("longname"), get_full_name(symbol)):
            return symbol
        members = symbol.get("$members")
        if members:
            found = get_symbol_by_name(members, name)
            if found is not None:
                return found
    return None


# ── Classification ──
#
# Class vs. constructor is told apart by meta.code.type: JSDoc tags an ES6
# class constructor with kind "class" too, and only the syntax node type
# (MethodDefinition) distinguishes it from the class itself.


def _code_type(symbol):
    return notate(symbol, "meta.code.type")


def is_deprecated(symbol):
    return bool(symbol.get("deprecated"))


def is_global(symbol):
    return symbol.get("scope") == "global"


def is_namespace(symbol):
    return symbol.get("kind") == "namespace"


def is_module(symbol):
    return symbol.get("kind") == "module"


def is_constructor(symbol):
    return symbol.get("kind") == "class" and _code_type(symbol) == _METHOD_DEFINITION


def is_class(symbol):
    return not is_constructor(symbol) and (
        symbol.get("kind") == "class" or _code_type(symbol) == _CLASS_DECLARATION
    )


def is_static_member(symbol):
    return symbol.get("scope") == "static"


is_static = is_static_member


def is_inner(symbol):
    return symbol.get("scope") == "inner"


def is_instance_member(symbol):
    return symbol.get("scope") == "instance"


def is_method(symbol):
    return symbol.get("kind") == "function" or _code_type(symbol) in _METHOD_CODE_TYPES


is_function = is_method


def is_instance_method(symbol):
    return is_instance_member(symbol) and is_method(symbol)


def is_static_method(symbol):
    return is_static_member(symbol) and is_method(symbol)


def is_property(symbol):
    return symbol.get("kind") == "member"


def is_instance_property(symbol):
    return is_instance_member(symbol) and is_property(symbol)


def is_static_property(symbol):
    return is_static_member(symbol) and is_property(symbol)


def is_type_def(symbol):
    return symbol.get("kind") == "typedef"


is_custom_type = is_type_def


def is_enum(symbol):
    return bool(symbol.get("isEnum"))


def is_read_only(symbol):
    return bool(symbol.get("readonly"))


def is_public(symbol):
    access = symbol.get("access")
    return not isinstance(access, str) or access == "public"


def is_private(symbol):
    return symbol.get("access") == "private"


def is_protected(symbol):
    return symbol.get("access") == "protected"


def is_undocumented(symbol):
    # JSDoc's own "undocumented" flag is unreliable (jsdoc/jsdoc#241)
    return not symbol.get("comments")


def has_description(symbol):
    return bool(_get_str(symbol.get("classdesc")) or _get_str(symbol.get("description")))


CLASSIFIERS = {
    "deprecated": is_deprecated,
    "global": is_global,
    "namespace": is_namespace,
    "module": is_module,
    "class": is_class,
    "constructor": is_constructor,
    "static_member": is_static_member,
    "static": is_static,
    "inner": is_inner,
    "instance_member": is_instance_member,
    "method": is_method,
    "function": is_function,
    "instance_method": is_instance_method,
    "static_method": is_static_method,
    "property": is_property,
    "instance_property": is_instance_property,
    "static_property": is_static_property,
    "type_def": is_type_def,
    "custom_type": is_custom_type,
    "enum": is_enum,
    "read_only": is_read_only,
    "public": is_public,
    "private": is_private,
    "protected": is_protected,
    "undocumented": is_undocumented,
    "described": has_description,
}


# ── Types ──


def get_types(symbol):
    """Declared types joined with ``|``, e.g. ``Array<String>|null``."""
    if symbol.get("kind") == "class":
        return "class"
    names = notate(symbol, "type.names") or []
    types = "|".join(n.replace(".<", "<") for n in names)
    return f"enum<{types}>" if symbol.get("isEnum") else types


def get_return_types(symbol):
    returns = symbol.get("returns")
    if not isinstance(returns, list):
        return "void"
    names = []
    for ret in returns:
        ret_names = notate(ret, "type.names")
        if isinstance(ret_names, list):
            names.extend(ret_names)
    return "|".join(names) if names else "void"


# ── Search & misc ──


def get_keywords(symbol):
    """Lower-cased keyword string for template search/filter features."""
    if isinstance(symbol, str):
        return symbol.lower()
    words = [
        get_full_name(symbol),
        symbol.get("longname"),
        symbol.get("name"),
        symbol.get("alias"),
        symbol.get("memberof"),
        symbol.get("kind"),
        symbol.get("scope"),
        symbol.get("classdesc"),
        symbol.get("description"),
        notate(symbol, "meta.filename"),
    ]
    if symbol.get("readonly"):
        words.append("readonly")
    if symbol.get("isEnum"):
        words.append("enum")
    if is_constructor(symbol):
        words.append("constructor")
    if is_method(symbol):
        words.append("method")
    if is_property(symbol):
        words.append("property")
    keywords = " ".join(w for w in words if w)
    return _KEYWORD_STRIP_RE.sub("", keywords).lower()


def get_code_file_info(symbol):
    return {
        "filename": notate(symbol, "meta.filename"),
        "lineno": notate(symbol, "meta.lineno"),
        "path": notate(symbol, "meta.path"),
    }


def find(items, criteria):
    """First mapping in *items* matching every non-None value of *criteria*."""
    if not items or not criteria:
        return None
    wanted = {k: v for k, v in criteria.items() if v is not None}
    if not wanted:
        return None
    for item in items:
        if isinstance(item, Mapping) and all(
            k in item and item[k] == v for k, v in wanted.items()
        ):
            return item
    return None
