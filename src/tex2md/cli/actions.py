"""Custom argparse Action classes for the tex2md CLI.

Every option can take its default from an environment variable named
``TEX2MD_<DEST>``; explicit command-line arguments always win.
"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse
import logging
import os

from tex2md.constants import ENV_VAR_PREFIX, MAX_NESTING_DEPTH_CEILING

logger = logging.getLogger(__name__)

_TRUTHY = ("true", "1", "yes", "on")


def env_key_for(dest: str) -> str:
    """Return the environment variable consulted for an argument destination.

    Examples
    --------
        >>> env_key_for("max_depth")
        'TEX2MD_MAX_DEPTH'

    """
    return f"{ENV_VAR_PREFIX}{dest.upper().replace('-', '_')}"


def _dest_from_options(args, kwargs):
    """Derive the argparse destination the same way argparse does."""
    dest = kwargs.get("dest")
    if dest is None and args:
        for option in args:
            if option.startswith("--"):
                return option[2:].replace("-", "_")
            elif option.startswith("-"):
                dest = option[1:]
    return dest


def positive_int(value: str) -> int:
    """Argparse type accepting integers greater than zero."""
    try:
        ivalue = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value} is not a valid integer") from None
    if ivalue <= 0:
        raise argparse.ArgumentTypeError(f"{value} is not a positive integer")
    return ivalue


def nesting_depth(value: str) -> int:
    """Argparse type for the nesting limit, bounded by MAX_NESTING_DEPTH_CEILING."""
    ivalue = positive_int(value)
    if ivalue > MAX_NESTING_DEPTH_CEILING:
        raise argparse.ArgumentTypeError(f"{value} exceeds the maximum nesting depth of {MAX_NESTING_DEPTH_CEILING}")
    return ivalue


class EnvironmentAwareAction(argparse.Action):
    """Store action that takes its default from ``TEX2MD_<DEST>``.

    The environment value goes through the argument's ``type`` and
    ``choices``; invalid values are logged and ignored.
    """

    def __init__(self, *args, **kwargs):
        dest = _dest_from_options(args, kwargs)
        if dest:
            env_key = env_key_for(dest)
            env_value = os.environ.get(env_key)
            if env_value is not None:
                try:
                    kwargs["default"] = self._convert_env_value(env_value, kwargs)
                except (ValueError, TypeError, argparse.ArgumentTypeError) as e:
                    logger.warning(f"Ignoring invalid environment variable {env_key}={env_value}: {e}")

        super().__init__(*args, **kwargs)

    @staticmethod
    def _convert_env_value(env_value: str, kwargs):
        converter = kwargs.get("type")
        value = converter(env_value) if converter is not None else env_value
        choices = kwargs.get("choices")
        if choices is not None and value not in choices:
            raise ValueError(f"must be one of {', '.join(map(str, choices))}")
        return value

    def __call__(self, parser, namespace, values, option_string=None):
        """Standard action processing."""
        setattr(namespace, self.dest, values)


class EnvironmentAwareBooleanAction(argparse._StoreTrueAction):
    """Boolean flag that takes its default from ``TEX2MD_<DEST>``."""

    def __init__(self, *args, **kwargs):
        dest = _dest_from_options(args, kwargs)
        if dest:
            env_value = os.environ.get(env_key_for(dest))
            if env_value is not None:
                kwargs["default"] = env_value.lower() in _TRUTHY

        super().__init__(*args, **kwargs)


def create_env_aware_argument(parser, *args, **kwargs):
    """Add an argument with automatic environment variable support.

    ``store_true`` flags use :class:`EnvironmentAwareBooleanAction`; plain
    stores use :class:`EnvironmentAwareAction`. Other actions are left as-is.
    """
    action = kwargs.get("action", "store")

    if action == "store_true":
        kwargs["action"] = EnvironmentAwareBooleanAction
    elif action in ("store", None):
        kwargs["action"] = EnvironmentAwareAction

    return parser.add_argument(*args, **kwargs)
