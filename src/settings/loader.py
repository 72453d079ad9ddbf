"""
Configuration document loader.

The document is YAML with four sections: Config, Policy, Plugins and
Capture. Section and key names are matched case-insensitively, so both
``Config: {Snaplen: 96}`` and ``config: {snaplen: 96}`` work.
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "capana.conf.yml"
DEFAULT_SNAPLEN = 1500


@dataclass
class RunConfig:
    """The ``Config`` section."""
    snaplen: int = DEFAULT_SNAPLEN
    promiscuous: bool = False
    print_stats: bool = False
    progress: bool = False
    output: str = ""


@dataclass
class PolicyConfig:
    """The ``Policy`` section. Parsed and shown, not applied."""
    filter: List[Dict[str, Any]] = field(default_factory=list)
    unmatched: str = ""
    output: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class CapanaConfig:
    config: RunConfig = field(default_factory=RunConfig)
    policy: PolicyConfig = field(default_factory=PolicyConfig)
    plugins: List[Dict[str, Any]] = field(default_factory=list)
    capture: List[Dict[str, Any]] = field(default_factory=list)

    def describe(self) -> List[str]:
        """Lines printed by a dry run."""
        return [
            f"config: snaplen: {self.config.snaplen}",
            f"config: promiscuous: {_bool_text(self.config.promiscuous)}",
            f"config: printstats: {_bool_text(self.config.print_stats)}",
            f"config: progress: {_bool_text(self.config.progress)}",
            f"config: output: {self.config.output}",
            f"policy: filter: {self.policy.filter}",
            f"policy: unmatched: {self.policy.unmatched}",
            f"policy: output: {self.policy.output}",
            f"plugins: {self.plugins}",
            f"capture: {self.capture}",
        ]


def load_config(file_path: Union[str, Path]) -> CapanaConfig:
    """
    Load a configuration document from disk.

    Raises:
        ConfigError: file missing or unreadable, invalid YAML, or a section
            of the wrong shape
    """
    file_path = Path(file_path)
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Loading configuration file: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Parsing yaml file {file_path}: {e}") from e

    config = parse_config(data)
    logger.info("Using configuration: %s", file_path)
    return config


def parse_config(data: Any) -> CapanaConfig:
    """Build a CapanaConfig from an already parsed document."""
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Configuration document must be a mapping")

    sections = _lower_keys(data)
    run = _section(sections, "config")
    policy = _section(sections, "policy")

    return CapanaConfig(
        config=RunConfig(
            snaplen=_typed(run, "snaplen", int, DEFAULT_SNAPLEN),
            promiscuous=_typed(run, "promiscuous", bool, False),
            print_stats=_typed(run, "printstats", bool, False),
            progress=_typed(run, "progress", bool, False),
            output=_typed(run, "output", str, ""),
        ),
        policy=PolicyConfig(
            filter=_typed(policy, "filter", list, []),
            unmatched=_typed(policy, "unmatched", str, ""),
            output=_typed(policy, "output", list, []),
        ),
        plugins=_typed(sections, "plugins", list, []),
        capture=_typed(sections, "capture", list, []),
    )


def _lower_keys(mapping: Dict[Any, Any]) -> Dict[str, Any]:
    return {str(key).lower(): value for key, value in mapping.items()}


def _section(sections: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = sections.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"Section '{name}' must be a mapping")
    return _lower_keys(value)


def _typed(mapping: Dict[str, Any], key: str, kind: type, default: Any) -> Any:
    value = mapping.get(key)
    if value is None:
        return default
    # bool is an int subclass; a flag is not a snap length
    if kind is int and isinstance(value, bool):
        raise ConfigError(f"'{key}' must be an integer, got {value!r}")
    if not isinstance(value, kind):
        raise ConfigError(f"'{key}' must be of type {kind.__name__}, got {value!r}")
    return value


def _bool_text(value: bool) -> str:
    return "true" if value else "false"
