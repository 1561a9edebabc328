# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# utmnet/config/config_loader.py
"""
YAML configuration for utmnet.

Example:

    vm: 6D1F3C2A-7E55-4B0B-9C1E-0F3A2B4C5D6E
    utm_version: "4.6"
    networks:
      - type: forwarded_port
        guest: 22
        host: 2222
      - type: private_network
        ip: 192.168.1.50
      - public_network:
          bridge: en1
          utm__mac: auto

Several files may be given; later files deep-merge over earlier ones
(mappings merge, everything else is replaced).
"""

from __future__ import annotations

import argparse
import glob
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence, Tuple

import yaml

from ..core.exceptions import ConfigurationError

_YAML_SUFFIXES = (".yaml", ".yml")

NetworkEntry = Tuple[str, Dict[str, Any]]


def _fail(logger: Any, msg: str, **context: Any) -> ConfigurationError:
    logger.error(msg)
    return ConfigurationError(code=2, msg=msg, context=context or None)


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = dict(base)
    for k, v in override.items():
        if isinstance(v, Mapping) and isinstance(out.get(k), Mapping):
            out[k] = deep_merge(out[k], v)
        else:
            out[k] = v
    return out


class Config:
    @staticmethod
    def expand_configs(logger: Any, paths: Sequence[str]) -> List[Path]:
        """
        Expand directories (their *.yaml / *.yml, sorted) and glob patterns.
        A path that matches nothing is an error.
        """
        out: List[Path] = []
        for raw in paths:
            p = Path(str(raw)).expanduser()
            if p.is_dir():
                found = sorted(x for x in p.iterdir() if x.suffix.lower() in _YAML_SUFFIXES)
                logger.debug("Config dir %s -> %d file(s)", p, len(found))
                out.extend(found)
                continue
            if any(ch in str(raw) for ch in "*?["):
                matched = sorted(Path(m) for m in glob.glob(str(p)))
                if not matched:
                    raise _fail(logger, f"Config pattern matched no files: {raw}", pattern=str(raw))
                out.extend(matched)
                continue
            if not p.exists():
                raise _fail(logger, f"Config file not found: {p}", path=str(p))
            out.append(p)
        return out

    @staticmethod
    def load_one(logger: Any, path: Path) -> Dict[str, Any]:
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise _fail(logger, f"Cannot read config {path}: {e}", path=str(path)) from e

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise _fail(logger, f"Invalid YAML in {path}: {e}", path=str(path)) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise _fail(logger, f"Config {path} must be a mapping at top level", path=str(path))
        logger.debug("Loaded config %s (%d keys)", path, len(data))
        return data

    @staticmethod
    def load_many(logger: Any, paths: Sequence[Path]) -> Dict[str, Any]:
        merged: Dict[str, Any] = {}
        for p in paths:
            merged = deep_merge(merged, Config.load_one(logger, p))
        return merged

    @staticmethod
    def apply_as_defaults(logger: Any, parser: argparse.ArgumentParser, conf: Mapping[str, Any]) -> None:
        """
        Use config values as parser defaults so explicit CLI flags still win.
        Keys match argparse dests; dashes are accepted as underscores.
        """
        dests = {a.dest for a in parser._actions}
        defaults: Dict[str, Any] = {}
        for key, value in conf.items():
            dest = str(key).replace("-", "_")
            if dest in dests:
                defaults[dest] = value
        if defaults:
            logger.debug("Config defaults: %s", ", ".join(sorted(defaults)))
            parser.set_defaults(**defaults)

    @staticmethod
    def dump(conf: Mapping[str, Any]) -> str:
        return yaml.safe_dump(dict(conf), sort_keys=False, default_flow_style=False)

    @staticmethod
    def network_entries(logger: Any, conf: Mapping[str, Any]) -> List[NetworkEntry]:
        """
        Ordered `(type, options)` pairs from `networks`.

        Accepted item shapes:
          {type: private_network, ip: ...}
          {private_network: {ip: ...}}
          [private_network, {ip: ...}]

        Items of any other shape are kept as an entry of unknown type, so they
        still occupy their adapter slot and are dropped by the compiler.
        """
        raw = conf.get("networks")
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise _fail(logger, "'networks' must be a list", networks=type(raw).__name__)

        entries: List[NetworkEntry] = []
        for i, item in enumerate(raw):
            if isinstance(item, Mapping) and "type" in item:
                opts = {k: v for k, v in item.items() if k != "type"}
                entries.append((str(item["type"]), opts))
            elif isinstance(item, Mapping) and len(item) == 1:
                (net_type, opts), = item.items()
                entries.append((str(net_type), dict(opts) if isinstance(opts, Mapping) else {}))
            elif isinstance(item, (list, tuple)) and len(item) == 2 and isinstance(item[1], Mapping):
                entries.append((str(item[0]), dict(item[1])))
            else:
                logger.warning("networks[%d] has an unrecognized shape, ignoring: %r", i, item)
                entries.append(("", {}))
        return entries
