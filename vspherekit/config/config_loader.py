# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# vspherekit/config/config_loader.py
from __future__ import annotations

import argparse
import glob
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Sequence

import yaml

from ..core.exceptions import Fatal
from ..core.utils import U

_CONFIG_SUFFIXES = (".yaml", ".yml", ".json")


class Config:
    """
    YAML/JSON config files -> one merged dict -> argparse defaults.

    Later files win; nested mappings are merged key by key.
    Keys are normalized to argparse dest form (vc-user -> vc_user).
    """

    @staticmethod
    def expand_configs(logger: logging.Logger, paths: Sequence[str]) -> List[Path]:
        out: List[Path] = []
        for raw in paths:
            p = os.path.expanduser(str(raw))
            if any(ch in p for ch in "*?["):
                hits = sorted(glob.glob(p))
                if not hits:
                    logger.warning("Config glob matched nothing: %s", p)
                out.extend(Path(h) for h in hits)
                continue
            path = Path(p)
            if path.is_dir():
                found = sorted(x for x in path.iterdir() if x.suffix.lower() in _CONFIG_SUFFIXES)
                logger.debug("Config dir %s: %d files", path, len(found))
                out.extend(found)
                continue
            if not path.exists():
                U.die(logger, f"Config file not found: {path}", 2)
            out.append(path)
        return out

    @staticmethod
    def _normalize_keys(d: Dict[str, Any]) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for k, v in d.items():
            key = str(k).strip().replace("-", "_")
            out[key] = Config._normalize_keys(v) if isinstance(v, dict) else v
        return out

    @staticmethod
    def deep_merge(base: Dict[str, Any], over: Dict[str, Any]) -> Dict[str, Any]:
        out = dict(base)
        for k, v in over.items():
            if isinstance(v, dict) and isinstance(out.get(k), dict):
                out[k] = Config.deep_merge(out[k], v)
            else:
                out[k] = v
        return out

    @staticmethod
    def load_file(logger: logging.Logger, path: Path) -> Dict[str, Any]:
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise Fatal(2, f"Cannot read config {path}: {e}", cause=e)
        try:
            if path.suffix.lower() == ".json":
                data = json.loads(text) if text.strip() else {}
            else:
                data = yaml.safe_load(text)
        except (ValueError, yaml.YAMLError) as e:
            raise Fatal(2, f"Cannot parse config {path}: {e}", cause=e)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise Fatal(2, f"Config {path} must be a mapping at the top level, got {type(data).__name__}")
        logger.debug("Loaded config %s (%d keys)", path, len(data))
        return Config._normalize_keys(data)

    @staticmethod
    def load_many(logger: logging.Logger, paths: Sequence[Path]) -> Dict[str, Any]:
        merged: Dict[str, Any] = {}
        for p in paths:
            merged = Config.deep_merge(merged, Config.load_file(logger, Path(p)))
        return merged

    @staticmethod
    def apply_as_defaults(
        logger: logging.Logger, parser: argparse.ArgumentParser, conf: Dict[str, Any]
    ) -> Dict[str, List[Any]]:
        """
        Known keys become parser defaults so explicit CLI flags still win.

        Repeatable (append) flags are not seeded: argparse would append CLI
        values onto the YAML list. They are returned instead; pass them to
        fill_repeatable() after parse_args().
        """
        actions = {a.dest: a for a in parser._actions}
        known: Dict[str, Any] = {}
        repeatable: Dict[str, List[Any]] = {}
        for k, v in conf.items():
            if k not in actions:
                continue
            if isinstance(actions[k], argparse._AppendAction):
                if v is not None:
                    # `host: esx01` in YAML means ["esx01"]
                    repeatable[k] = list(v) if isinstance(v, (list, tuple)) else [v]
                continue
            known[k] = v
        unknown = sorted(k for k in conf if k not in actions)
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
        if known:
            parser.set_defaults(**known)
        return repeatable

    @staticmethod
    def fill_repeatable(args: argparse.Namespace, repeatable: Dict[str, List[Any]]) -> None:
        """Config lists apply only to repeatable flags the command line left unset."""
        for k, v in repeatable.items():
            if getattr(args, k, None) is None:
                setattr(args, k, list(v))
