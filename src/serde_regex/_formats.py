"""JSON and YAML text helpers.

Text is parsed by ``json`` / PyYAML into a plain data tree and decoded from
there; encoding goes the other way. Syntax errors in the text itself are
raised by the parser unchanged (``json.JSONDecodeError``, ``yaml.YAMLError``).
"""

from __future__ import annotations

import json
from typing import Any

import yaml

from serde_regex._config import DEFAULT_CONFIG, RegexConfig
from serde_regex._fields import from_dict, to_dict


def from_json(text: str | bytes, shape: Any, config: RegexConfig = DEFAULT_CONFIG) -> Any:
    """Decode JSON text into a value of ``shape``."""
    return from_dict(shape, json.loads(text), config)


def to_json(value: Any, shape: Any = None, **kwargs: Any) -> str:
    """Encode ``value`` as JSON text. Keyword arguments go to ``json.dumps``.

    Pass ``sort_keys=True`` for key-sorted mappings (stable hashing/diffing).
    """
    return json.dumps(to_dict(value, shape), **kwargs)


def from_yaml(text: str | bytes, shape: Any, config: RegexConfig = DEFAULT_CONFIG) -> Any:
    """Decode YAML text (safe loader) into a value of ``shape``."""
    return from_dict(shape, yaml.safe_load(text), config)


def to_yaml(value: Any, shape: Any = None, **kwargs: Any) -> str:
    """Encode ``value`` as YAML text. Keyword arguments go to ``yaml.safe_dump``.

    Mapping order is kept unless ``sort_keys=True`` is passed.
    """
    kwargs.setdefault("sort_keys", False)
    return yaml.safe_dump(to_dict(value, shape), **kwargs)
