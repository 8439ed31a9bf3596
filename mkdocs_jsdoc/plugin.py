"""
MkDocs plugin exposing the JSDoc helpers to theme templates.

Registers Jinja filters (``jsdoc_parse``, ``jsdoc_long_name``, ...), Jinja
tests (``symbol is jsdoc_static_method``) and a ``jsdoc`` global namespace so
templates rendering ``jsdoc -X`` output can classify symbols and turn their
descriptions into HTML.
"""

from __future__ import annotations

import logging
from types import SimpleNamespace

from mkdocs.config import config_options
from mkdocs.config.base import Config as MkDocsConfig
from mkdocs.plugins import BasePlugin

from . import markup, symbols
from .markup import ParseOptions

log = logging.getLogger("mkdocs.plugins.jsdoc")

_SYMBOL_FILTERS = {
    "name": symbols.get_name,
    "long_name": symbols.get_long_name,
    "code_name": symbols.get_code_name,
    "types": symbols.get_types,
    "return_types": symbols.get_return_types,
    "keywords": symbols.get_keywords,
}

_TEXT_FILTERS = {
    "parse_ticks": markup.parse_ticks,
    "normalize_tabs": markup.normalize_tabs,
    "trim_left": markup.trim_left,
    "list_type": markup.list_type,
    "list_type_desc": markup.list_type_desc,
}


class JsdocConfig(MkDocsConfig):
    link_target = config_options.Type(str, default="")
    keep_if_single = config_options.Type(bool, default=False)
    filter_prefix = config_options.Type(str, default="jsdoc_")


def _public_names(module):
    return {
        name: getattr(module, name)
        for name in dir(module)
        if not name.startswith("_")
        and getattr(getattr(module, name), "__module__", None) == module.__name__
    }


def build_namespace(options=None):
    """Collect every public helper into one object, bound to *options*."""
    opts = options or ParseOptions()
    ns = {}
    ns.update(_public_names(symbols))
    ns.update(_public_names(markup))
    ns["parse"] = lambda s, o=None: markup.parse(s, o or opts)
    ns["parse_links"] = lambda s, o=None: markup.parse_links(s, o or opts)
    ns["parse_new_lines"] = lambda s, o=None: markup.parse_new_lines(s, o or opts)
    ns["options"] = opts
    return SimpleNamespace(**ns)


class JsdocPlugin(BasePlugin[JsdocConfig]):

    def __init__(self):
        super().__init__()
        self._options = ParseOptions()

    def _parse_options(self):
        return ParseOptions(
            keep_if_single=self.config.get("keep_if_single", False),
            target=self.config.get("link_target", ""),
        )

    # ── MkDocs lifecycle hooks ──

    def on_config(self, config, **kwargs):
        self._options = self._parse_options()
        if self._options.target:
            log.info("jsdoc: links open in target %r", self._options.target)
        return config

    def on_env(self, env, *, config, files, **kwargs):
        prefix = self.config.get("filter_prefix", "jsdoc_")
        opts = self._options

        filters = dict(_SYMBOL_FILTERS)
        filters.update(_TEXT_FILTERS)
        filters["parse"] = lambda s, **kw: markup.parse(s or "", _override(opts, kw))
        filters["parse_links"] = lambda s, **kw: markup.parse_links(s or "", _override(opts, kw))
        filters["parse_new_lines"] = lambda s, **kw: markup.parse_new_lines(
            s or "", _override(opts, kw)
        )
        for name, func in filters.items():
            key = f"{prefix}{name}"
            if key in env.filters:
                log.warning("jsdoc: template filter %s already defined, overriding", key)
            env.filters[key] = func

        for name, func in symbols.CLASSIFIERS.items():
            env.tests[f"{prefix}{name}"] = func

        env.globals["jsdoc"] = build_namespace(opts)
        log.debug(
            "jsdoc: registered %d filters and %d tests",
            len(filters),
            len(symbols.CLASSIFIERS),
        )
        return env


def _override(opts, overrides):
    if not overrides:
        return opts
    return ParseOptions(
        keep_if_single=overrides.get("keep_if_single", opts.keep_if_single),
        target=overrides.get("target", opts.target),
    )
