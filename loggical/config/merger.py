"""
Configuration merging

Precedence: programmatic options > environment > defaults. min_level has
its own fallback chain that ends at a development-mode signal.
"""

from __future__ import annotations
from dataclasses import fields, replace
from typing import Optional, Union

from loggical.config.environment_config import get_environment_config
from loggical.core.log_level import LogLevel
from loggical.core.logger_config import (
    DEFAULT_LOGGER_OPTIONS,
    PRESET_CONFIGS,
    LoggerOptions,
    NormalizedLoggerOptions,
)
from loggical.environment import is_development_mode

_NORMALIZED_FIELDS = {f.name for f in fields(NormalizedLoggerOptions)}


def merge_configuration(
    programmatic: LoggerOptions,
    environment: Optional[LoggerOptions] = None,
    runtime_defaults: NormalizedLoggerOptions = DEFAULT_LOGGER_OPTIONS,
    development_mode: Optional[bool] = None,
) -> NormalizedLoggerOptions:
    """
    Merge configuration layers into resolved options.

    Fields left as None in a layer never override a lower layer.

    Args:
        programmatic: Options passed by the caller
        environment: Environment-derived options (default: read now)
        runtime_defaults: Base configuration
        development_mode: Override development detection (default: detect)

    Returns:
        NormalizedLoggerOptions
    """
    if environment is None:
        environment = get_environment_config()
    if development_mode is None:
        development_mode = is_development_mode()

    if programmatic.min_level is not None:
        min_level = programmatic.min_level
    elif environment.min_level is not None:
        min_level = environment.min_level
    else:
        min_level = LogLevel.DEBUG if development_mode else LogLevel.INFO

    merged = {}
    for layer in (environment, programmatic):
        for name, value in layer.given().items():
            if name in _NORMALIZED_FIELDS:
                merged[name] = value
    merged["min_level"] = min_level

    return replace(runtime_defaults, **merged)


def handle_preset_configuration(options: LoggerOptions) -> LoggerOptions:
    """
    Apply a named preset underneath the caller's options.

    Unknown preset names are treated as no preset. The returned options
    keep the preset name so it can be reported later.
    """
    if not options.preset:
        return options

    preset_config = PRESET_CONFIGS.get(options.preset)
    if preset_config is None:
        return replace(options, preset=None)

    return preset_config.merged_with(options)


def process_logger_configuration(
    options: Union[LoggerOptions, dict, None] = None,
    defaults: NormalizedLoggerOptions = DEFAULT_LOGGER_OPTIONS,
    environment: Optional[LoggerOptions] = None,
    development_mode: Optional[bool] = None,
) -> NormalizedLoggerOptions:
    """
    Preset handling followed by merging, in one step.

    Example:
        options = process_logger_configuration(
            LoggerOptions(preset="compact", compact_objects=False)
        )
        options.compact_objects    # False
        options.max_value_length   # 50
    """
    if options is None:
        options = LoggerOptions()
    elif isinstance(options, dict):
        options = LoggerOptions.from_dict(options)

    final_options = handle_preset_configuration(options)
    return merge_configuration(
        final_options,
        environment=environment,
        runtime_defaults=defaults,
        development_mode=development_mode,
    )
