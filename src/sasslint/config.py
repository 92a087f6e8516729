"""Configuration loader: read ``.sasslintrc.yml`` and resolve rule settings."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from sasslint.engine.diagnostic import Severity
from sasslint.rules import ALL_RULES, InvalidOptionError, RuleDefinition, get_rule

logger = logging.getLogger(__name__)

CONFIG_FILENAMES: tuple[str, ...] = (".sasslintrc.yml", ".sasslintrc.yaml", "sasslint.yml")
PRESETS: frozenset[str] = frozenset({"recommended"})


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(ValueError):
    """Raised when a configuration file is structurally invalid."""


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RuleSetting:
    """An enabled rule with its parsed options."""

    rule: RuleDefinition
    options: Any = None
    severity: Severity = Severity.ERROR


@dataclass(frozen=True)
class InvalidOption:
    """A rule that was configured but disabled because its options were rejected."""

    rule_id: str
    reason: str


@dataclass(frozen=True)
class Config:
    settings: tuple[RuleSetting, ...] = ()
    invalid_options: tuple[InvalidOption, ...] = ()
    source: Path | None = None

    @property
    def rule_ids(self) -> list[str]:
        return [s.rule.rule_id for s in self.settings]


# ---------------------------------------------------------------------------
# Building
# ---------------------------------------------------------------------------


def _preset_entries(name: str) -> dict[str, tuple[object, dict[str, object]]]:
    if name not in PRESETS:
        msg = f"unknown preset '{name}' in 'extends' (expected one of: {', '.join(sorted(PRESETS))})"
        raise ConfigError(msg)
    return {rule.rule_id: (True, {}) for rule in ALL_RULES}


def _split_value(rule_id: str, value: object) -> tuple[object, dict[str, object]]:
    """Split a rule value into its primary option and secondary options."""
    if isinstance(value, list):
        if len(value) == 2 and isinstance(value[1], dict):
            return value[0], dict(value[1])
        if len(value) == 1:
            return value[0], {}
        msg = f"rule '{rule_id}': expected [primary, {{options}}], got {value!r}"
        raise ConfigError(msg)
    return value, {}


def _severity(rule_id: str, secondary: dict[str, object]) -> Severity:
    raw = secondary.pop("severity", Severity.ERROR.value)
    try:
        return Severity(raw)
    except ValueError:
        msg = f"rule '{rule_id}': severity must be 'error' or 'warning', got {raw!r}"
        raise ConfigError(msg) from None


def build_config(data: dict[str, Any], *, source: Path | None = None) -> Config:
    """Resolve a parsed configuration mapping into a :class:`Config`.

    ``extends`` (a preset name or list of them) is merged first, then the
    ``rules`` mapping overrides it entry by entry. ``false`` or ``null``
    disables a rule.

    Raises
    ------
    ConfigError
        On unknown presets, unknown rule ids or a malformed ``rules`` block.
    """
    entries: dict[str, tuple[object, dict[str, object]]] = {}

    extends = data.get("extends")
    if extends is not None:
        presets = [extends] if isinstance(extends, str) else extends
        if not isinstance(presets, list):
            msg = "'extends' must be a preset name or a list of preset names"
            raise ConfigError(msg)
        for preset in presets:
            entries.update(_preset_entries(str(preset)))

    rules_block = data.get("rules", {})
    if rules_block is None:
        rules_block = {}
    if not isinstance(rules_block, dict):
        msg = "'rules' must be a mapping of rule id to setting"
        raise ConfigError(msg)

    for key, value in rules_block.items():
        rule = get_rule(str(key))
        if rule is None:
            msg = f"unknown rule '{key}'"
            raise ConfigError(msg)
        if value is None or value is False:
            entries.pop(rule.rule_id, None)
            continue
        entries[rule.rule_id] = _split_value(rule.rule_id, value)

    settings: list[RuleSetting] = []
    invalid: list[InvalidOption] = []
    for rule in ALL_RULES:
        if rule.rule_id not in entries:
            continue
        primary, secondary = entries[rule.rule_id]
        secondary = dict(secondary)
        severity = _severity(rule.rule_id, secondary)
        try:
            options = rule.parse_options(primary, secondary)
        except InvalidOptionError as exc:
            logger.warning("Disabling %s: %s", rule.rule_id, exc)
            invalid.append(InvalidOption(rule.rule_id, str(exc)))
            continue
        settings.append(RuleSetting(rule, options, severity))

    return Config(settings=tuple(settings), invalid_options=tuple(invalid), source=source)


def recommended_config() -> Config:
    """Every rule enabled with default options.

    This includes ``sass/operator-no-unspaced``, which stylelint-scss style
    presets usually leave opt-in. Disable it with ``false`` in the ``rules``
    mapping to get the narrower set.
    """
    return build_config({"extends": "recommended"})


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def load_config(path: Path) -> Config:
    """Read and resolve a YAML configuration file.

    Raises ``ConfigError`` when the file is not valid YAML or not a mapping.
    """
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        msg = f"{path}: invalid YAML: {exc}"
        raise ConfigError(msg) from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        msg = f"{path.name} must be a YAML mapping"
        raise ConfigError(msg)

    logger.debug("Loaded configuration from %s", path)
    return build_config(data, source=path)


def find_config(directory: Path) -> Path | None:
    """Return the first known configuration file in *directory*, if any."""
    for name in CONFIG_FILENAMES:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def resolve_config(path: Path | None, cwd: Path) -> Config:
    """Load *path*, else a config file found in *cwd*, else the recommended set."""
    if path is None:
        path = find_config(cwd)
    if path is None:
        logger.debug("No configuration file found in %s; using recommended rules", cwd)
        return recommended_config()
    return load_config(path)
